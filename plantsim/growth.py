# plantsim/growth.py
"""
LeafGrowthAnimator
------------------
Per-leaf animated scale (0 = bare, 1 = fully grown) and the GrowthLevel
aggregate.

Two sequences drive the scales:

1. Initial growth: on start every leaf springs from 0 to 1.
2. Prune: the leaf springs down to 0; after `prune_delay_ms` it regrows to 1
   over `regrow_ms` on a fixed-duration easing, much slower than the spring.

GrowthLevel is the sum of the scales of healthy leaves divided by the total
leaf count, so an unhealthy leaf drags the average down until it is pruned
and has regrown.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

from plantsim.easing import DurationEasing, SpringEasing

logger = logging.getLogger(__name__)


@dataclass
class LeafState:
    """Per-leaf display state: animated scale and health marker."""
    index: int
    scale: float
    healthy: bool
    kind: str = 'side'  # 'side' or 'top'


class LeafAnimation:
    """Animated scale of a single leaf; `easing` is swapped per transition."""

    def __init__(self, index):
        self.index = index
        self.easing = SpringEasing()
        self.easing.value = 0.0

    @property
    def value(self):
        return self.easing.value

    @property
    def scale(self):
        # the spring overshoots internally; the exposed scale stays in [0, 1]
        return float(np.clip(self.easing.value, 0.0, 1.0))

    @property
    def target(self):
        return self.easing.target

    @property
    def animating(self):
        return not self.easing.done

    def animate_to(self, target, easing):
        easing.start(self.easing.value, target, velocity=self.easing.velocity)
        self.easing = easing

    def advance(self, dt_ms):
        return self.easing.advance(dt_ms)

    def freeze(self):
        self.easing.done = True


class LeafGrowthAnimator:
    def __init__(self, loop, n_leaves=7, cfg=None):
        cfg = cfg or {}
        self.loop = loop
        self.n_leaves = int(n_leaves)

        self.tension = float(cfg.get('tension', 180.0))
        self.friction = float(cfg.get('friction', 18.0))
        self.prune_delay_ms = float(cfg.get('prune_delay_ms', 600.0))
        self.regrow_ms = float(cfg.get('regrow_ms', 22_000.0))

        self.leaves = [LeafAnimation(i) for i in range(self.n_leaves)]
        self._regrow_timers: Dict[int, object] = {}
        self._frames = None
        self._listeners: List[Callable[[int], None]] = []

    def spring(self):
        return SpringEasing(tension=self.tension, friction=self.friction)

    # Lifecycle -----------------------------------------------------------
    def start(self):
        """Attach to the frame loop and run the initial bloom (once)."""
        if self._frames is not None:
            return
        self._frames = self.loop.request_frames(self.advance)
        for leaf in self.leaves:
            leaf.animate_to(1.0, self.spring())

    def stop(self):
        if self._frames is not None:
            self._frames.cancel()
            self._frames = None
        for timer in self._regrow_timers.values():
            timer.cancel()
        self._regrow_timers.clear()
        for leaf in self.leaves:
            leaf.freeze()

    def subscribe(self, callback):
        """callback(leaf_index) runs when a pruned leaf starts regrowing."""
        self._listeners.append(callback)

    # Prune sequence ------------------------------------------------------
    def prune(self, index):
        """Shrink leaf `index` to 0, then regrow it slowly after the delay."""
        pending = self._regrow_timers.pop(index, None)
        if pending is not None:
            pending.cancel()
        self.leaves[index].animate_to(0.0, self.spring())
        self._regrow_timers[index] = self.loop.call_later(
            self.prune_delay_ms, lambda: self._regrow(index), name=f'regrow_{index}')

    def pruning(self, index):
        return index in self._regrow_timers

    def _regrow(self, index):
        self._regrow_timers.pop(index, None)
        self.leaves[index].animate_to(1.0, DurationEasing(self.regrow_ms))
        logger.debug("leaf %d regrowing over %.0fms", index, self.regrow_ms)
        for cb in list(self._listeners):
            cb(index)

    # Frames / aggregation ------------------------------------------------
    def advance(self, dt_ms):
        for leaf in self.leaves:
            leaf.advance(dt_ms)

    def scales(self):
        return [leaf.scale for leaf in self.leaves]

    def growth_level(self, healthy: Sequence[bool]):
        """Mean scale over all leaves, counting unhealthy leaves as zero."""
        total = sum(leaf.scale for leaf, ok in zip(self.leaves, healthy) if ok)
        return float(np.clip(total / self.n_leaves, 0.0, 1.0))
