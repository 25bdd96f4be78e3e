# plantsim/watering.py
"""
WateringInteraction
-------------------
Turns a press-and-hold gesture on the plant area into a timed watering
session.

    IDLE --pointer_down--> HOLDING --hold timer (1000ms)--> WATERING
    WATERING --session timer (1200ms) / pointer_up / pointer_leave--> IDLE
    HOLDING --pointer_up / pointer_leave--> IDLE

Only one hold/session timer pair exists at a time: a new pointer_down cancels
whatever is pending before arming a fresh hold.
"""

import logging
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class WateringState(Enum):
    IDLE = 'idle'
    HOLDING = 'holding'
    WATERING = 'watering'


class WateringInteraction:
    def __init__(self, loop, cfg=None):
        cfg = cfg or {}
        self.loop = loop
        self.hold_ms = float(cfg.get('hold_ms', 1000.0))
        self.session_ms = float(cfg.get('session_ms', 1200.0))

        self.state = WateringState.IDLE
        self.pressed = False
        self.show_effect = False
        self.sessions = 0

        self._hold_timer = None
        self._session_timer = None
        self._listeners: List[Callable[[bool], None]] = []

    # Outputs -------------------------------------------------------------
    @property
    def active(self):
        """True only while a watering session is running."""
        return self.state is WateringState.WATERING

    @property
    def holding(self):
        """True while the pointer is pressed on the plant area."""
        return self.pressed

    def subscribe(self, callback):
        """callback(watering: bool) runs whenever a session starts or ends."""
        self._listeners.append(callback)

    # Inputs --------------------------------------------------------------
    def pointer_down(self):
        self._cancel_timers()
        if self.active:
            self._end_session('restart')
        self.pressed = True
        self.state = WateringState.HOLDING
        self._hold_timer = self.loop.call_later(self.hold_ms, self._on_hold_elapsed, name='hold')

    def pointer_up(self):
        self._release('pointer_up')

    def pointer_leave(self):
        self._release('pointer_leave')

    def cancel(self):
        """Drop any pending timers and end a running session (used on teardown)."""
        self.pressed = False
        self._cancel_timers()
        if self.active:
            self._end_session('cancel')
        self.state = WateringState.IDLE

    # Timers --------------------------------------------------------------
    def _on_hold_elapsed(self):
        self._hold_timer = None
        self.state = WateringState.WATERING
        self.show_effect = True
        self.sessions += 1
        logger.debug("watering session %d started at %.0fms", self.sessions, self.loop.now)
        self._session_timer = self.loop.call_later(self.session_ms, self._on_session_elapsed, name='session')
        self._notify(True)

    def _on_session_elapsed(self):
        self._session_timer = None
        self._end_session('timeout')

    # Helpers -------------------------------------------------------------
    def _release(self, reason):
        self.pressed = False
        self._cancel_timers()
        if self.active:
            self._end_session(reason)
        self.state = WateringState.IDLE

    def _end_session(self, reason):
        self.state = WateringState.IDLE
        self.show_effect = False
        logger.debug("watering session ended (%s) at %.0fms", reason, self.loop.now)
        self._notify(False)

    def _cancel_timers(self):
        for timer in (self._hold_timer, self._session_timer):
            if timer is not None:
                timer.cancel()
        self._hold_timer = None
        self._session_timer = None

    def _notify(self, watering):
        for cb in list(self._listeners):
            cb(watering)
