import pytest

from plantsim.scheduler import EventLoop, SchedulerClosed


def test_call_later_fires_once_at_due_time(loop):
    fired = []
    loop.call_later(100, lambda: fired.append(loop.now))
    loop.advance(99)
    assert fired == []
    loop.advance(1)
    assert fired == [100]
    loop.advance(1000)
    assert fired == [100]


def test_call_every_keeps_cadence(loop):
    fired = []
    loop.call_every(100, lambda: fired.append(loop.now))
    loop.advance(350)
    assert fired == [100, 200, 300]
    assert loop.now == 350


def test_same_instant_callbacks_run_in_scheduling_order(loop):
    order = []
    loop.call_later(50, lambda: order.append('a'))
    loop.call_later(50, lambda: order.append('b'))
    loop.call_later(50, lambda: order.append('c'))
    loop.advance(50)
    assert order == ['a', 'b', 'c']


def test_cancelled_timer_never_fires(loop):
    fired = []
    t = loop.call_later(10, lambda: fired.append(1))
    t.cancel()
    t.cancel()
    loop.advance(100)
    assert fired == []
    assert not t.active
    assert loop.pending == 0


def test_repeating_timer_can_cancel_itself(loop):
    fired = []

    def tick():
        fired.append(loop.now)
        if len(fired) == 2:
            timer.cancel()

    timer = loop.call_every(10, tick)
    loop.advance(100)
    assert fired == [10, 20]


def test_frames_receive_elapsed_time():
    loop = EventLoop({'frame_interval_ms': 16})
    dts = []
    handle = loop.request_frames(dts.append)
    loop.advance(160)
    assert dts == [16] * 10
    handle.cancel()
    loop.advance(160)
    assert len(dts) == 10
    assert loop.pending == 0


def test_close_cancels_everything(loop):
    fired = []
    loop.call_later(10, lambda: fired.append('once'))
    loop.call_every(10, lambda: fired.append('every'))
    loop.request_frames(lambda dt: fired.append('frame'))
    loop.close()
    loop.advance(1000)
    assert fired == []
    assert loop.pending == 0
    assert loop.now == 1000
    with pytest.raises(SchedulerClosed):
        loop.call_later(1, lambda: None)


def test_invalid_arguments_rejected(loop):
    with pytest.raises(ValueError):
        loop.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        loop.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        loop.advance(-5)
    with pytest.raises(ValueError):
        EventLoop({'frame_interval_ms': 0})
