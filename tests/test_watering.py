from plantsim.watering import WateringInteraction, WateringState


def _recorder(loop, w, every=10):
    seen = []
    loop.call_every(every, lambda: seen.append(w.active))
    return seen


def test_short_hold_never_waters(loop):
    w = WateringInteraction(loop)
    seen = _recorder(loop, w)
    w.pointer_down()
    assert w.holding and w.state is WateringState.HOLDING
    loop.advance(900)
    w.pointer_up()
    loop.advance(2000)
    assert not any(seen)
    assert w.sessions == 0
    assert w.state is WateringState.IDLE
    assert not w.holding


def test_long_hold_waters_then_times_out(loop):
    w = WateringInteraction(loop)
    w.pointer_down()
    loop.advance(999)
    assert not w.active
    loop.advance(1)
    assert w.active and w.show_effect
    assert w.state is WateringState.WATERING
    loop.advance(1199)
    assert w.active
    loop.advance(1)
    assert not w.active and not w.show_effect
    assert w.state is WateringState.IDLE
    # pointer is still down until released
    assert w.holding
    assert loop.pending == 0


def test_release_ends_session_immediately(loop):
    w = WateringInteraction(loop)
    w.pointer_down()
    loop.advance(1100)
    assert w.active
    w.pointer_up()
    assert not w.active and not w.show_effect
    assert loop.pending == 0


def test_leaving_area_cancels_hold(loop):
    w = WateringInteraction(loop)
    w.pointer_down()
    loop.advance(500)
    w.pointer_leave()
    loop.advance(5000)
    assert w.sessions == 0
    assert not w.holding


def test_new_press_restarts_hold_timer(loop):
    w = WateringInteraction(loop)
    w.pointer_down()
    loop.advance(500)
    w.pointer_down()
    assert loop.pending == 1
    loop.advance(500)
    assert not w.active
    loop.advance(500)
    assert w.active
    assert loop.pending == 1


def test_press_during_session_ends_it_and_holds_again(loop):
    w = WateringInteraction(loop)
    events = []
    w.subscribe(events.append)
    w.pointer_down()
    loop.advance(1000)
    w.pointer_down()
    assert not w.active
    assert w.state is WateringState.HOLDING
    loop.advance(1000)
    assert w.active
    assert events == [True, False, True]


def test_listeners_see_start_and_end(loop):
    w = WateringInteraction(loop)
    events = []
    w.subscribe(events.append)
    w.pointer_down()
    loop.advance(3000)
    assert events == [True, False]


def test_cancel_drops_pending_timers(loop):
    w = WateringInteraction(loop)
    w.pointer_down()
    loop.advance(1000)
    w.cancel()
    assert not w.active and not w.holding
    assert loop.pending == 0
