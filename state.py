"""State vector of the double pendulum and the algebra RK4 needs.

A State is an immutable 4-tuple (theta_1, theta_2, dot_theta_1,
dot_theta_2). Angles are in radians from the downward vertical and are
never wrapped, so accumulated rotations stay continuous.

Operations return new instances; nothing is mutated in place.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

import numpy as np


@dataclass(frozen=True)
class State:
    """Instantaneous dynamical state: two angles and their velocities."""

    theta_1: float = 0.0
    theta_2: float = 0.0
    dot_theta_1: float = 0.0
    dot_theta_2: float = 0.0

    @classmethod
    def from_sequence(cls, values) -> State:
        """Build a State from any length-4 sequence or array."""
        theta_1, theta_2, dot_theta_1, dot_theta_2 = values
        return cls(
            float(theta_1), float(theta_2),
            float(dot_theta_1), float(dot_theta_2),
        )

    def as_array(self) -> np.ndarray:
        """Return the state as a float64 array [th1, th2, w1, w2]."""
        return np.array(tuple(self), dtype=np.float64)

    def is_finite(self) -> bool:
        return all(np.isfinite(v) for v in self)

    # Sequence protocol so states unpack like the plain lists used elsewhere
    def __iter__(self):
        return (getattr(self, f.name) for f in fields(self))

    def __len__(self):
        return 4

    def __getitem__(self, index):
        return tuple(self)[index]

    # Operator forms of the algebra below
    def __mul__(self, scalar):
        return scale(self, scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return divide(self, scalar)

    def __add__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        return add(self, other)


def scale(state: State, scalar: float) -> State:
    """Multiply every component by ``scalar``."""
    return State(
        state.theta_1 * scalar,
        state.theta_2 * scalar,
        state.dot_theta_1 * scalar,
        state.dot_theta_2 * scalar,
    )


def divide(state: State, scalar: float) -> State:
    """Divide every component by ``scalar``.

    A zero divisor is a caller error. It is not trapped: the division runs
    in float64 so the result carries inf/nan components instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        quotient = np.divide(state.as_array(), np.float64(scalar))
    return State.from_sequence(quotient)


def add(a: State, b: State) -> State:
    """Element-wise sum of two states."""
    return State(
        a.theta_1 + b.theta_1,
        a.theta_2 + b.theta_2,
        a.dot_theta_1 + b.dot_theta_1,
        a.dot_theta_2 + b.dot_theta_2,
    )
