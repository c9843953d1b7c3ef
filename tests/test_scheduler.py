import asyncio
import logging

from superadventure.scheduler import BackgroundTasks, FrameScheduler


def test_task_runs_every_frame_until_cancelled():
    scheduler = FrameScheduler()
    calls = []
    task = scheduler.every_frame(lambda: calls.append(1))
    scheduler.run_frame()
    scheduler.run_frame()
    task.cancel()
    task.cancel()
    assert scheduler.run_frame() == 0
    assert len(calls) == 2
    assert scheduler.pending == []


def test_cancel_from_inside_a_frame():
    scheduler = FrameScheduler()
    calls = []
    second = None

    def first():
        calls.append("first")
        second.cancel()

    scheduler.every_frame(first)
    second = scheduler.every_frame(lambda: calls.append("second"))
    scheduler.run_frame()
    assert calls == ["first"]


def pump_until_idle(tasks, limit=20):
    for _ in range(limit):
        if not tasks.busy:
            return
        tasks.pump()


def test_pump_does_not_wait_for_a_blocked_task():
    tasks = BackgroundTasks()
    released = []
    done = []

    async def save():
        while not released:
            await asyncio.sleep(0)
        done.append(1)

    task = tasks.spawn(save())
    tasks.pump()
    tasks.pump()
    assert not task.done()
    assert tasks.busy

    released.append(1)
    pump_until_idle(tasks)
    assert done == [1]
    assert not tasks.busy
    tasks.close()


def test_pump_without_tasks_is_a_no_op():
    tasks = BackgroundTasks()
    tasks.pump()
    assert not tasks.busy
    tasks.close()
    assert tasks.loop.is_closed()


def test_failed_task_is_logged(caplog):
    tasks = BackgroundTasks()

    async def broken():
        raise RuntimeError("disk on fire")

    with caplog.at_level(logging.ERROR, logger="superadventure.scheduler"):
        tasks.spawn(broken())
        pump_until_idle(tasks)
    assert not tasks.busy
    assert "Background task failed" in caplog.text
    tasks.close()


def test_close_finishes_pending_tasks():
    tasks = BackgroundTasks()
    done = []

    async def slow():
        for _ in range(5):
            await asyncio.sleep(0)
        done.append(1)

    tasks.spawn(slow())
    tasks.close()
    assert done == [1]
    assert tasks.loop.is_closed()
