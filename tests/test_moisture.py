from types import SimpleNamespace

import pytest

from plantsim.moisture import MoistureModel


def test_full_pot_empties_in_500_ticks(loop):
    m = MoistureModel(loop, watering=None, cfg={'initial_level': 1.0})
    for _ in range(499):
        m.step()
    assert m.level == pytest.approx(0.002)
    m.step()
    assert m.level == 0.0
    for _ in range(50):
        m.step()
    assert m.level == 0.0


def test_empty_pot_fills_in_50_watering_ticks(loop):
    watering = SimpleNamespace(active=True)
    m = MoistureModel(loop, watering=watering, cfg={'initial_level': 0.0})
    for _ in range(49):
        m.step()
    assert m.level == pytest.approx(0.98)
    m.step()
    assert m.level == 1.0
    for _ in range(10):
        m.step()
    assert m.level == 1.0


def test_ticks_on_the_loop_every_100ms(loop):
    m = MoistureModel(loop, cfg={'initial_level': 1.0})
    m.start()
    loop.advance(50_000)
    assert m.ticks == 500
    assert m.level == 0.0


def test_watering_switch_applies_from_next_tick(loop):
    watering = SimpleNamespace(active=False)
    m = MoistureModel(loop, watering=watering, cfg={'initial_level': 0.5})
    m.start()
    loop.advance(100)
    assert m.level == pytest.approx(0.498)
    loop.advance(50)
    watering.active = True
    assert m.level == pytest.approx(0.498)
    loop.advance(50)
    assert m.level == pytest.approx(0.518)


def test_initial_level_is_clamped(loop):
    assert MoistureModel(loop, cfg={'initial_level': 3.0}).level == 1.0
    assert MoistureModel(loop, cfg={'initial_level': -1.0}).level == 0.0


def test_stop_cancels_tick(loop):
    m = MoistureModel(loop)
    m.start()
    loop.advance(300)
    m.stop()
    loop.advance(1000)
    assert m.ticks == 3
    assert loop.pending == 0
