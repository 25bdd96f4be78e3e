# plantsim/easing.py
"""
Interpolation strategies for animated leaf scale.

Each strategy animates one value toward a target and is advanced by elapsed
milliseconds:

- SpringEasing: damped spring with tension (pull) and friction (damping),
  integrated at 1ms sub-steps with unit mass. Settles when both speed and
  distance to target fall under `precision`.
- DurationEasing: fixed-duration interpolation from the value at transition
  start to the target (linear by default, any easing fn of t in [0, 1]).
"""

import math


def linear(t):
    return t


class SpringEasing:
    def __init__(self, tension=180.0, friction=18.0, mass=1.0, precision=0.0005):
        self.tension = float(tension)
        self.friction = float(friction)
        self.mass = float(mass)
        self.precision = float(precision)

        self.value = 0.0
        self.target = 0.0
        self.velocity = 0.0  # units per ms
        self.done = True

    def start(self, value, target, velocity=0.0):
        self.value = float(value)
        self.target = float(target)
        self.velocity = float(velocity)
        self.done = False
        return self

    def advance(self, dt_ms):
        if self.done:
            return self.value
        steps = max(1, int(math.ceil(dt_ms)))
        step = dt_ms / steps
        for _ in range(steps):
            if abs(self.velocity) <= self.precision * 1e-3 and abs(self.target - self.value) <= self.precision:
                break
            spring = -self.tension * 1e-6 * (self.value - self.target)
            damping = -self.friction * 1e-3 * self.velocity
            self.velocity += (spring + damping) / self.mass * step
            self.value += self.velocity * step
        if abs(self.velocity) <= self.precision * 1e-3 and abs(self.target - self.value) <= self.precision:
            self.value = self.target
            self.velocity = 0.0
            self.done = True
        return self.value


class DurationEasing:
    def __init__(self, duration_ms=22_000.0, easing=linear):
        self.duration_ms = float(duration_ms)
        self.easing = easing

        self.value = 0.0
        self.target = 0.0
        self.origin = 0.0
        self.elapsed = 0.0
        self.velocity = 0.0
        self.done = True

    def start(self, value, target, velocity=0.0):
        self.origin = float(value)
        self.value = float(value)
        self.target = float(target)
        self.elapsed = 0.0
        self.done = self.duration_ms <= 0
        if self.done:
            self.value = self.target
        return self

    def advance(self, dt_ms):
        if self.done:
            return self.value
        self.elapsed = min(self.duration_ms, self.elapsed + dt_ms)
        t = self.elapsed / self.duration_ms
        self.value = self.origin + (self.target - self.origin) * self.easing(t)
        if self.elapsed >= self.duration_ms:
            self.value = self.target
            self.done = True
        return self.value
