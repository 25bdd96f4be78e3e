# plantsim/leaf_health.py
"""
LeafHealthProcess
-----------------
Stochastic leaf damage driven by pot moisture.

Once per tick a single uniform draw is compared to the damage chance

    chance = base_chance + (1 - water_level) * dry_chance

which runs from 1% with a full pot to 25% with an empty one. On a hit one
currently-healthy leaf, picked uniformly, turns unhealthy. Unhealthy leaves
stay that way until they are pruned. Observers receive (leaf_index, healthy)
on every transition so the display can swap materials.
"""

import logging
from typing import Callable, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


def damage_chance(water_level, base=0.01, dry=0.24):
    """Probability of damaging a leaf this tick for a given water level."""
    w = float(np.clip(water_level, 0.0, 1.0))
    return base + (1.0 - w) * dry


class LeafHealthProcess:
    def __init__(self, loop, moisture, n_leaves=7, rng: Optional[np.random.Generator] = None, cfg=None):
        cfg = cfg or {}
        self.loop = loop
        self.moisture = moisture
        self.n_leaves = int(n_leaves)
        self.rng = rng if rng is not None else np.random.default_rng()

        self.tick_ms = float(cfg.get('tick_ms', 1000.0))
        self.base_chance = float(cfg.get('base_chance', 0.01))
        self.dry_chance = float(cfg.get('dry_chance', 0.24))

        self.healthy = [True] * self.n_leaves
        self.damaged_total = 0
        self.pruned_total = 0

        self._timer = None
        self._listeners: List[Callable[[int, bool], None]] = []

    def start(self):
        if self._timer is None:
            self._timer = self.loop.call_every(self.tick_ms, self.step, name='leaf_health')

    def stop(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def subscribe(self, callback):
        self._listeners.append(callback)

    # Queries -------------------------------------------------------------
    def is_healthy(self, index):
        return self.healthy[index]

    def healthy_indices(self):
        return [i for i, ok in enumerate(self.healthy) if ok]

    def unhealthy_indices(self):
        return [i for i, ok in enumerate(self.healthy) if not ok]

    def chance(self):
        return damage_chance(self.moisture.level, self.base_chance, self.dry_chance)

    # Transitions ---------------------------------------------------------
    def step(self):
        """
        Run one damage draw. Returns the index of the leaf that turned
        unhealthy, or None when nothing happened (including when every leaf
        is already unhealthy).
        """
        if self.rng.random() >= self.chance():
            return None
        # recomputed every tick since health changes between ticks
        candidates = self.healthy_indices()
        if not candidates:
            return None
        index = int(candidates[int(self.rng.integers(len(candidates)))])
        self.healthy[index] = False
        self.damaged_total += 1
        logger.debug("leaf %d damaged (water=%.3f)", index, self.moisture.level)
        self._notify(index, False)
        return index

    def prune(self, index):
        """Restore an unhealthy leaf. Returns False (and does nothing) otherwise."""
        if not 0 <= index < self.n_leaves:
            logger.warning("prune ignored: leaf index %r out of range", index)
            return False
        if self.healthy[index]:
            logger.debug("prune ignored: leaf %d is healthy", index)
            return False
        self.healthy[index] = True
        self.pruned_total += 1
        logger.debug("leaf %d pruned", index)
        self._notify(index, True)
        return True

    def _notify(self, index, healthy):
        for cb in list(self._listeners):
            cb(index, healthy)
