from superadventure.timer import PlayTimer, format_time


def test_not_started_reads_zero(clock):
    timer = PlayTimer(clock)
    assert timer.get_elapsed_time() == 0
    assert not timer.running


def test_paused_interval_is_excluded(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(500)
    timer.pause()
    assert timer.get_elapsed_time() == 500
    clock.advance(2000)
    assert timer.get_elapsed_time() == 500
    timer.resume()
    clock.advance(250)
    assert timer.get_elapsed_time() == 750
    assert timer.stop() == 750
    clock.advance(1000)
    assert timer.get_elapsed_time() == 750


def test_stop_while_paused(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(300)
    timer.pause()
    clock.advance(400)
    assert timer.stop() == 300


def test_start_is_idempotent_while_running(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(100)
    timer.start()
    assert timer.get_elapsed_time() == 100


def test_double_pause_counts_once(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(100)
    timer.pause()
    clock.advance(100)
    timer.pause()
    clock.advance(100)
    timer.resume()
    timer.resume()
    clock.advance(100)
    assert timer.get_elapsed_time() == 200


def test_start_after_stop_counts_from_zero(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(900)
    timer.stop()
    timer.start()
    clock.advance(50)
    assert timer.get_elapsed_time() == 50


def test_reset(clock):
    timer = PlayTimer(clock)
    timer.start()
    clock.advance(100)
    timer.reset()
    assert timer.get_elapsed_time() == 0
    assert not timer.running
    assert not timer.paused


def test_format_time():
    assert format_time(0) == "00:00.00"
    assert format_time(61234) == "01:01.23"
    assert format_time(3599990) == "59:59.99"
    assert format_time(-5) == "00:00.00"
