import pygame


def format_time(ms):
    """Render milliseconds as MM:SS.CC."""
    ms = max(0, int(ms))
    minutes = ms // 60000
    seconds = (ms // 1000) % 60
    centis = (ms % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


class PlayTimer:
    """Active play time in milliseconds, with pauses excluded.

    The clock is any zero-argument callable returning milliseconds; the
    default is pygame's tick counter.
    """

    def __init__(self, clock=None):
        self._clock = clock or pygame.time.get_ticks
        self.reset()

    def reset(self):
        self.start_time = None
        self.total_paused = 0
        self.pause_started = None
        self.final_time = None
        self.running = False

    @property
    def paused(self):
        return self.pause_started is not None

    def start(self):
        if self.running:
            return
        self.reset()
        self.start_time = self._clock()
        self.running = True

    def pause(self):
        if self.running and not self.paused:
            self.pause_started = self._clock()

    def resume(self):
        if self.running and self.paused:
            self.total_paused += self._clock() - self.pause_started
            self.pause_started = None

    def stop(self):
        if self.running:
            self.final_time = self._elapsed_at(self._clock())
            self.running = False
            self.pause_started = None
        return self.get_elapsed_time()

    def get_elapsed_time(self):
        if self.final_time is not None:
            return self.final_time
        if self.start_time is None:
            return 0
        return self._elapsed_at(self._clock())

    def _elapsed_at(self, now):
        paused = self.total_paused
        if self.pause_started is not None:
            # mid-pause: the open interval does not count either
            paused += now - self.pause_started
        return max(0, now - self.start_time - paused)

    def formatted(self):
        return format_time(self.get_elapsed_time())
