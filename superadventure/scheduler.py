import asyncio
import logging

logger = logging.getLogger(__name__)


class FrameTask:
    """A callback that runs once per display frame until cancelled."""

    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FrameScheduler:
    """Runs repeating frame tasks, one call each per frame.

    The owning loop calls run_frame() once per display refresh. A task
    cancelled during a frame (even by another task) does not run again.
    """

    def __init__(self):
        self._tasks = []

    def every_frame(self, callback):
        task = FrameTask(callback)
        self._tasks.append(task)
        return task

    @property
    def pending(self):
        return [t for t in self._tasks if not t.cancelled]

    def run_frame(self):
        ran = 0
        for task in list(self._tasks):
            if task.cancelled:
                continue
            task.callback()
            ran += 1
        self._tasks = [t for t in self._tasks if not t.cancelled]
        return ran


class BackgroundTasks:
    """Coroutines advanced a little each frame on a private event loop.

    pump() gives every pending task one pass of the loop and returns, so
    a slow save never holds up a frame. close() finishes what is left.
    """

    def __init__(self, loop=None):
        self.loop = loop or asyncio.new_event_loop()
        self._tasks = set()

    def spawn(self, coro):
        task = self.loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._done)
        return task

    def _done(self, task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Background task failed", exc_info=task.exception())

    @property
    def busy(self):
        return bool(self._tasks)

    def pump(self):
        if self._tasks:
            self.loop.run_until_complete(asyncio.sleep(0))

    def close(self):
        if self._tasks:
            self.loop.run_until_complete(asyncio.gather(*self._tasks, return_exceptions=True))
        self.loop.close()
