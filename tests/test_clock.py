from plantsim.clock import DayClock


def test_progress_increases_then_wraps(loop):
    clock = DayClock(loop)
    clock.start()
    samples = []
    for _ in range(int(125_000 / 16)):
        loop.advance(16)
        samples.append(clock.progress)

    assert all(0.0 <= p < 1.0 for p in samples)
    drops = [i for i, (a, b) in enumerate(zip(samples, samples[1:])) if b <= a]
    # exactly one wrap per completed day, everything else strictly increasing
    assert len(drops) == 2
    assert clock.days == 2


def test_half_day(loop):
    clock = DayClock(loop)
    clock.start()
    loop.advance(30_000)
    assert clock.progress == 0.5
    assert clock.days == 0


def test_custom_day_length(loop):
    clock = DayClock(loop, cfg={'day_length_ms': 1600})
    clock.start()
    loop.advance(2400)
    assert clock.progress == 0.5
    assert clock.days == 1


def test_stop_leaves_no_timers(loop):
    clock = DayClock(loop)
    clock.start()
    loop.advance(1000)
    clock.stop()
    frozen = clock.progress
    loop.advance(10_000)
    assert clock.progress == frozen
    assert not clock.running
    assert loop.pending == 0
