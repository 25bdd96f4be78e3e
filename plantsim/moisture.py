# plantsim/moisture.py
"""
MoistureModel
-------------
Bounded pot water level (0 = empty, 1 = full). On every fixed tick the level
either charges (while a watering session is active) or decays. Which rule
applies is read from the watering source at the tick itself, so a session
that starts or ends between ticks only affects the next tick.
"""

import numpy as np


class MoistureModel:
    def __init__(self, loop, watering=None, cfg=None):
        cfg = cfg or {}
        self.loop = loop
        self.watering = watering

        self.tick_ms = float(cfg.get('tick_ms', 100.0))
        self.charge_rate = float(cfg.get('charge_rate', 0.02))   # per tick while watering
        self.decay_rate = float(cfg.get('decay_rate', 0.002))    # per tick otherwise
        self.level = float(np.clip(cfg.get('initial_level', 1.0), 0.0, 1.0))
        self.ticks = 0

        self._timer = None

    def start(self):
        if self._timer is None:
            self._timer = self.loop.call_every(self.tick_ms, self.step, name='moisture')

    def stop(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def is_watering(self):
        return bool(self.watering is not None and self.watering.active)

    def step(self):
        """Apply one tick of the charge/decay rule and return the new level."""
        delta = self.charge_rate if self.is_watering() else -self.decay_rate
        # rounding keeps repeated float steps from stopping just short of 0 or 1
        self.level = float(np.clip(round(self.level + delta, 10), 0.0, 1.0))
        self.ticks += 1
        return self.level
