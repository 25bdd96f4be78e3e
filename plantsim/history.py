# plantsim/history.py
"""
GrowthHistory
-------------
Sliding window of GrowthLevel samples, one per tick (1s), most recent last.
"""

from collections import deque


class GrowthHistory:
    def __init__(self, loop, source, cfg=None):
        """
        source: zero-argument callable returning the current GrowthLevel
        """
        cfg = cfg or {}
        self.loop = loop
        self.source = source
        self.tick_ms = float(cfg.get('tick_ms', 1000.0))
        self.capacity = int(cfg.get('capacity', 30))
        self.samples = deque(maxlen=self.capacity)
        self._timer = None

    def start(self):
        if self._timer is None:
            self._timer = self.loop.call_every(self.tick_ms, self.sample, name='history')

    def stop(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def sample(self):
        value = float(self.source())
        self.samples.append(value)
        return value

    def values(self):
        return tuple(self.samples)

    def labels(self):
        """Chart labels, oldest first: '-29s' ... '0s'."""
        n = len(self.samples)
        return [f"{i - n + 1}s" for i in range(n)]

    def __len__(self):
        return len(self.samples)
