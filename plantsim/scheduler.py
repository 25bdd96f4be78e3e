# plantsim/scheduler.py
"""
EventLoop
---------
Single-threaded cooperative scheduler for the plant simulation.

Time is virtual and measured in milliseconds. Nothing happens until the host
calls `advance(ms)`; every timer and frame callback that falls due inside that
window fires in time order (ties in scheduling order). This keeps the whole
simulation deterministic and lets tests step it precisely, while a real-time
host can simply call `advance(elapsed)` from its own frame hook.
"""

import heapq
import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class SchedulerClosed(RuntimeError):
    """Raised when scheduling onto a loop that has been closed."""


class Timer:
    """Handle for a scheduled callback. Cancelling is idempotent."""

    def __init__(self, loop, when, callback, interval=None, name=None):
        self._loop = loop
        self.when = when
        self.callback = callback
        self.interval = interval
        self.name = name or getattr(callback, '__name__', 'timer')
        self.active = True

    def cancel(self):
        if self.active:
            self.active = False
            self._loop._discard(self)

    def __repr__(self):
        kind = f"every {self.interval}ms" if self.interval else "once"
        state = "active" if self.active else "cancelled"
        return f"<Timer {self.name} @{self.when}ms {kind} {state}>"


class EventLoop:
    def __init__(self, cfg=None):
        cfg = cfg or {}
        self.frame_interval_ms = float(cfg.get('frame_interval_ms', 16.0))
        if self.frame_interval_ms <= 0:
            raise ValueError("frame_interval_ms must be positive")

        self.now = 0.0
        self.closed = False
        self._queue = []
        self._seq = itertools.count()
        self._live = set()
        self._frame_callbacks: List[Callable[[float], None]] = []
        self._frame_timer: Optional[Timer] = None
        self._last_frame = 0.0

    # Scheduling ----------------------------------------------------------
    def call_later(self, delay_ms, callback, name=None):
        """Run `callback()` once, `delay_ms` from now."""
        if delay_ms < 0:
            raise ValueError(f"delay must be non-negative, got {delay_ms}")
        return self._push(Timer(self, self.now + delay_ms, callback, name=name))

    def call_every(self, interval_ms, callback, name=None):
        """Run `callback()` every `interval_ms`, first firing one interval from now."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        timer = Timer(self, self.now + interval_ms, callback, interval=interval_ms, name=name)
        return self._push(timer)

    def request_frames(self, callback):
        """
        Register `callback(dt_ms)` to run on every animation frame.
        Returns a Timer-like handle whose cancel() unregisters the callback.
        """
        self._check_open()
        self._frame_callbacks.append(callback)
        if self._frame_timer is None:
            self._last_frame = self.now
            self._frame_timer = self.call_every(self.frame_interval_ms, self._run_frame, name='frame')
        return _FrameHandle(self, callback)

    # Driving -------------------------------------------------------------
    def advance(self, ms):
        """Move virtual time forward by `ms`, firing everything due on the way."""
        if ms < 0:
            raise ValueError(f"cannot move time backwards ({ms}ms)")
        self.run_until(self.now + ms)

    def run_until(self, t):
        while self._queue and self._queue[0][0] <= t:
            when, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self.now = when
            if timer.interval is not None:
                timer.when = when + timer.interval
                heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
            else:
                timer.active = False
                self._live.discard(timer)
            timer.callback()
        self.now = max(self.now, t)

    def close(self):
        """Cancel every outstanding timer and frame callback."""
        if self.closed:
            return
        pending = len(self._live)
        for timer in list(self._live):
            timer.active = False
        self._live.clear()
        self._queue.clear()
        self._frame_callbacks.clear()
        self._frame_timer = None
        self.closed = True
        logger.debug("event loop closed at %.0fms, %d timers cancelled", self.now, pending)

    @property
    def pending(self):
        return len(self._live)

    # Internals -----------------------------------------------------------
    def _check_open(self):
        if self.closed:
            raise SchedulerClosed("event loop is closed")

    def _push(self, timer):
        self._check_open()
        self._live.add(timer)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    def _discard(self, timer):
        # lazy deletion: the heap entry is skipped when popped
        self._live.discard(timer)

    def _run_frame(self):
        dt = self.now - self._last_frame
        self._last_frame = self.now
        for cb in list(self._frame_callbacks):
            if self.closed:
                break
            cb(dt)

    def _remove_frame_callback(self, callback):
        if callback in self._frame_callbacks:
            self._frame_callbacks.remove(callback)
        if not self._frame_callbacks and self._frame_timer is not None:
            self._frame_timer.cancel()
            self._frame_timer = None


class _FrameHandle:
    def __init__(self, loop, callback):
        self._loop = loop
        self._callback = callback
        self.active = True

    def cancel(self):
        if self.active:
            self.active = False
            self._loop._remove_frame_callback(self._callback)
