# plantsim/clock.py
"""
DayClock
--------
Repeating day-progress source. One simulated day lasts `day_length_ms` of
wall-clock time (60 s by default); progress is normalized to [0, 1) and wraps
back to 0 at the end of each day. Updated once per animation frame.
"""

import logging

logger = logging.getLogger(__name__)


class DayClock:
    def __init__(self, loop, cfg=None):
        cfg = cfg or {}
        self.loop = loop
        self.day_length_ms = float(cfg.get('day_length_ms', 60_000.0))

        self.start_ms = None
        self.progress = 0.0
        self.days = 0
        self._frames = None

    def start(self):
        if self._frames is not None:
            return
        self.start_ms = self.loop.now
        self.progress = 0.0
        self.days = 0
        self._frames = self.loop.request_frames(self._on_frame)

    def stop(self):
        if self._frames is not None:
            self._frames.cancel()
            self._frames = None

    @property
    def running(self):
        return self._frames is not None

    def elapsed_ms(self):
        if self.start_ms is None:
            return 0.0
        return self.loop.now - self.start_ms

    def _on_frame(self, dt):
        elapsed = self.elapsed_ms()
        days, rem = divmod(elapsed, self.day_length_ms)
        if int(days) != self.days:
            self.days = int(days)
            logger.debug("day %d begins", self.days + 1)
        self.progress = rem / self.day_length_ms
