# plantsim/plant.py
"""
PottedPlant
-----------
Facade over the whole simulation. Owns one event loop and every component,
wires their cadences together and exposes the input events and output values
the presentation layer needs.

Inputs:  pointer_down / pointer_up / pointer_leave on the plant area,
         pick_leaf(index) from click/ray-pick resolution.
Outputs: water_level, watering, holding, show_water_effect, growth_level,
         day_progress, growth_history, leaves (scale + health per leaf).

Typical headless use:

    plant = PottedPlant(cfg)
    plant.start()
    plant.advance(5_000)   # five seconds of simulated time
    plant.snapshot()
    plant.teardown()
"""

import logging
from typing import Optional

import numpy as np

from plantsim.clock import DayClock
from plantsim.growth import LeafGrowthAnimator, LeafState
from plantsim.history import GrowthHistory
from plantsim.leaf_health import LeafHealthProcess
from plantsim.moisture import MoistureModel
from plantsim.scheduler import EventLoop
from plantsim.watering import WateringInteraction

logger = logging.getLogger(__name__)


class PottedPlant:
    def __init__(self, cfg=None, loop: Optional[EventLoop] = None, rng: Optional[np.random.Generator] = None):
        cfg = cfg or {}
        leaves_cfg = cfg.get('leaves', {})
        self.n_side = int(leaves_cfg.get('side', 6))
        self.n_top = int(leaves_cfg.get('top', 1))
        self.n_leaves = self.n_side + self.n_top

        self.loop = loop or EventLoop(cfg.get('loop'))
        self.rng = rng if rng is not None else np.random.default_rng(cfg.get('seed'))

        self.clock = DayClock(self.loop, cfg.get('clock'))
        self.watering_input = WateringInteraction(self.loop, cfg.get('watering'))
        self.moisture = MoistureModel(self.loop, self.watering_input, cfg.get('moisture'))
        self.health = LeafHealthProcess(self.loop, self.moisture, self.n_leaves, rng=self.rng,
                                        cfg=cfg.get('leaf_health'))
        self.animator = LeafGrowthAnimator(self.loop, self.n_leaves, cfg.get('growth'))
        self.history = GrowthHistory(self.loop, lambda: self._growth_level, cfg.get('history'))

        self._growth_level = 0.0
        self._frames = None
        self.started = False
        self.torn_down = False

    # Lifecycle -----------------------------------------------------------
    def start(self):
        if self.started or self.torn_down:
            return
        self.started = True
        self.moisture.start()
        self.health.start()
        self.clock.start()
        # animator frames run before the aggregate so it sees this frame's scales
        self.animator.start()
        self._frames = self.loop.request_frames(self._on_frame)
        self.history.start()
        logger.debug("plant started with %d leaves (%d side, %d top)", self.n_leaves, self.n_side, self.n_top)

    def advance(self, ms):
        """Advance simulated time by `ms` milliseconds."""
        self.loop.advance(ms)

    def teardown(self):
        """Stop every process, timer and animation. Later inputs are ignored."""
        if self.torn_down:
            return
        self.torn_down = True
        self.watering_input.cancel()
        self.moisture.stop()
        self.health.stop()
        self.clock.stop()
        self.animator.stop()
        self.history.stop()
        if self._frames is not None:
            self._frames.cancel()
            self._frames = None
        self.loop.close()
        logger.debug("plant torn down at %.0fms", self.loop.now)

    # Inputs --------------------------------------------------------------
    def pointer_down(self):
        if self._accepting('pointer_down'):
            self.watering_input.pointer_down()

    def pointer_up(self):
        if self._accepting('pointer_up'):
            self.watering_input.pointer_up()

    def pointer_leave(self):
        if self._accepting('pointer_leave'):
            self.watering_input.pointer_leave()

    def pick_leaf(self, index):
        """
        Prune leaf `index` if it is unhealthy. Returns True when a prune
        sequence was started; picking a healthy leaf is a no-op.
        """
        if not self._accepting('pick_leaf'):
            return False
        if not isinstance(index, (int, np.integer)) or not 0 <= index < self.n_leaves:
            logger.warning("pick ignored: no leaf at index %r", index)
            return False
        if self.health.is_healthy(index):
            return False
        if not self.health.prune(index):
            return False
        self.animator.prune(index)
        return True

    def on_leaf_health(self, callback):
        """callback(leaf_index, healthy) on every health transition."""
        self.health.subscribe(callback)

    def on_leaf_regrow(self, callback):
        """callback(leaf_index) when a pruned leaf starts regrowing."""
        self.animator.subscribe(callback)

    def on_watering(self, callback):
        """callback(watering) when a watering session starts or ends."""
        self.watering_input.subscribe(callback)

    # Outputs -------------------------------------------------------------
    @property
    def water_level(self):
        return self.moisture.level

    @property
    def watering(self):
        return self.watering_input.active

    @property
    def holding(self):
        return self.watering_input.holding

    @property
    def show_water_effect(self):
        return self.watering_input.show_effect

    @property
    def growth_level(self):
        return self._growth_level

    @property
    def day_progress(self):
        return self.clock.progress

    @property
    def growth_history(self):
        return self.history.values()

    @property
    def leaves(self):
        return tuple(
            LeafState(index=i, scale=leaf.scale, healthy=self.health.is_healthy(i),
                      kind='top' if i >= self.n_side else 'side')
            for i, leaf in enumerate(self.animator.leaves)
        )

    def snapshot(self):
        return {
            'time_ms': self.loop.now,
            'water_level': self.water_level,
            'watering': self.watering,
            'holding': self.holding,
            'show_water_effect': self.show_water_effect,
            'growth_level': self.growth_level,
            'day_progress': self.day_progress,
            'days': self.clock.days,
            'growth_history': list(self.growth_history),
            'leaves': [{'scale': s.scale, 'healthy': s.healthy, 'kind': s.kind} for s in self.leaves],
        }

    # Internals -----------------------------------------------------------
    def _on_frame(self, dt):
        self._growth_level = self.animator.growth_level(self.health.healthy)

    def _accepting(self, event):
        if self.torn_down:
            logger.debug("%s ignored after teardown", event)
            return False
        return True
