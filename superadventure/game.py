import logging

from superadventure.errors import InvalidPlayerName
from superadventure.scheduler import FrameScheduler
from superadventure.settings import (
    DEFAULT_PLAYER_NAME, MENU_SCORE_ROWS, NAME_MAX_LENGTH, NAME_MIN_LENGTH,
)
from superadventure.state import GameState, StateMachine
from superadventure.timer import PlayTimer, format_time
from superadventure.world import Outcome, World, step, wants_to_move

logger = logging.getLogger(__name__)


def validate_player_name(name):
    name = (name or "").strip()
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise InvalidPlayerName(
            f"Name must be {NAME_MIN_LENGTH} to {NAME_MAX_LENGTH} characters")
    return name


class RunResult:
    """Final numbers of a finished run, waiting to be saved."""

    def __init__(self, won, score, coins, level, time_ms):
        self.won = won
        self.score = score
        self.coins = coins
        self.level = level
        self.time_ms = time_ms

    @property
    def time_text(self):
        return format_time(self.time_ms)


class RunSummary:
    def __init__(self, result, name, high_scores, stats):
        self.result = result
        self.name = name
        self.high_scores = high_scores
        self.stats = stats


class Game:
    """Runs the simulation inside the menu/playing/paused/game over/win flow."""

    def __init__(self, backend, viewport_width, viewport_height, rng=None, clock=None,
                 scheduler=None, levels=None):
        self.backend = backend
        self.machine = StateMachine()
        self.world = World(viewport_width, viewport_height, rng=rng, levels=levels)
        self.timer = PlayTimer(clock)
        self.scheduler = scheduler or FrameScheduler()
        self.held_keys = frozenset()
        self.pending_result = None
        self.summary = None
        self.saving = False
        self._task = None

    @property
    def state(self):
        return self.machine.state

    @property
    def paused(self):
        return self.state is GameState.PAUSED

    # loop

    def _schedule_loop(self):
        self._cancel_loop()
        self._task = self.scheduler.every_frame(self._on_frame)

    def _cancel_loop(self):
        if self._task is not None:
            self._task.cancel()
            self._task = None

    @property
    def loop_active(self):
        return self._task is not None and not self._task.cancelled

    def _on_frame(self):
        self.tick(self.held_keys)

    def tick(self, keys):
        if self.state is not GameState.PLAYING:
            return []
        # idle time before the first move does not count
        if not self.timer.running and wants_to_move(keys):
            self.timer.start()
        events = step(self.world, keys)
        if self.world.outcome is Outcome.GAME_OVER:
            self._finish(GameState.GAME_OVER)
        elif self.world.outcome is Outcome.WIN:
            self._finish(GameState.WIN)
        return events

    def _finish(self, state):
        self._cancel_loop()
        self.machine.go(state)
        run = self.world.run
        self.pending_result = RunResult(
            won=state is GameState.WIN,
            score=run.score,
            coins=run.coins,
            level=run.level_number,
            time_ms=self.timer.stop(),
        )

    # transitions

    def start_game(self):
        # a finishing save still owns the previous run's summary
        if self.saving:
            return False
        self._cancel_loop()
        self.machine.go(GameState.PLAYING)
        self.timer.reset()
        self.world.new_run()
        self.pending_result = None
        self.summary = None
        self._schedule_loop()
        logger.info("Run started on %s", self.world.level.name)
        return True

    def pause(self):
        if self.state is not GameState.PLAYING:
            return False
        self._cancel_loop()
        self.machine.go(GameState.PAUSED)
        self.timer.pause()
        return True

    def resume(self):
        if self.state is not GameState.PAUSED:
            return False
        self.machine.go(GameState.PLAYING)
        self.timer.resume()
        self._schedule_loop()
        return True

    def toggle_pause(self):
        return self.pause() or self.resume()

    def back_to_menu(self):
        if self.state is GameState.MENU:
            return
        self._cancel_loop()
        self.machine.go(GameState.MENU)
        self.timer.stop()
        self.pending_result = None

    # results

    async def _record(self, name):
        # taken before the first await so a result is saved once
        result, self.pending_result = self.pending_result, None
        self.saving = True
        try:
            stats = await self.backend.update_stats(won=result.won)
            scores = await self.backend.save_score(
                name, result.score, result.coins, result.level, result.time_ms)
        finally:
            self.saving = False
        self.summary = RunSummary(result, name, scores, stats)
        return self.summary

    async def finish_game_over(self):
        if self.state is not GameState.GAME_OVER or self.pending_result is None:
            return self.summary
        return await self._record(DEFAULT_PLAYER_NAME)

    async def submit_score_name(self, name):
        name = validate_player_name(name)
        if self.state is not GameState.WIN or self.pending_result is None:
            return self.summary
        return await self._record(name)

    async def skip_score_name(self):
        if self.state is not GameState.WIN or self.pending_result is None:
            return self.summary
        return await self._record(DEFAULT_PLAYER_NAME)

    async def menu_overview(self):
        scores = await self.backend.get_high_scores()
        summary = await self.backend.summary()
        return scores[:MENU_SCORE_ROWS], summary
