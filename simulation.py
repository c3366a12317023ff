"""Double pendulum physics engine.

Implements the equations of motion for a planar double pendulum (point
masses, massless rigid links, frictionless pivots) and advances them with
a fixed-step classical RK4 integrator. A tight-tolerance SciPy solution
is available for checking the integrator against.

Angles are measured from the downward vertical: theta = 0 hangs straight
down and x = r sin(theta), y = -r cos(theta).
"""

import math
from dataclasses import dataclass, fields

import numpy as np
from scipy.integrate import solve_ivp

from state import State


@dataclass(frozen=True)
class PhysicalParams:
    """Physical parameters of the double pendulum system.

    Validated once here; the integration path never re-checks them.
    """

    l1: float = 1.0
    l2: float = 1.0
    m1: float = 1.0
    m2: float = 1.0
    gravity: float = 10.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(
                    f"{f.name} must be a positive finite number, got {value!r}"
                )


# Starting configuration of the interactive view
DEFAULT_INITIAL_STATE = State(theta_1=0.0, theta_2=2.0)


def derivatives(state, params):
    """Time derivative of ``state``.

    Returns a State whose angle fields hold the angular velocities and
    whose velocity fields hold the angular accelerations.

    The accelerations use the reduced form with mu = m2/m1,
    lambda = l2/l1 and gamma = g/l1, whose denominator 1 + mu sin^2(dtheta)
    is at least 1 for positive masses.
    """
    # float64 so an overflowing square gives inf instead of OverflowError
    dot_theta_1 = np.float64(state.dot_theta_1)
    dot_theta_2 = np.float64(state.dot_theta_2)

    mu = params.m2 / params.m1
    mu_plus = mu + 1.0
    lam = params.l2 / params.l1
    gamma = params.gravity / params.l1

    dtheta = state.theta_1 - state.theta_2
    sin_dtheta = np.sin(dtheta)
    cos_dtheta = np.cos(dtheta)
    sin_theta_1 = np.sin(state.theta_1)
    sin_theta_2 = np.sin(state.theta_2)

    denom = 1.0 + mu * sin_dtheta**2

    # Shared sub-expressions of both numerators
    gravity_1 = mu_plus * gamma * sin_theta_1
    swing_2 = mu * lam * dot_theta_2**2 * sin_dtheta
    coupling = dot_theta_1**2 * sin_dtheta - gamma * sin_theta_2

    ddot_theta_1 = -(gravity_1 + swing_2 + mu * cos_dtheta * coupling) / denom
    ddot_theta_2 = (
        mu_plus * coupling + cos_dtheta * (gravity_1 + swing_2)
    ) / (lam * denom)

    return State(dot_theta_1, dot_theta_2, ddot_theta_1, ddot_theta_2)


def rk4_step(state, params, dt):
    """Advance ``state`` by ``dt`` with one classical RK4 step.

    ``dt`` may be zero (no-op) or negative (integrates backward in time).
    Non-finite inputs propagate to the result unchecked.
    """
    k1 = derivatives(state, params) * dt
    k2 = derivatives(state + k1 * 0.5, params) * dt
    k3 = derivatives(state + k2 * 0.5, params) * dt
    k4 = derivatives(state + k3, params) * dt

    return state + (k1 + k2 * 2.0 + k3 * 2.0 + k4) / 6.0


def to_cartesian(r, theta):
    """Polar to Cartesian with theta = 0 pointing straight down."""
    return r * math.sin(theta), -r * math.cos(theta)


def positions(state, params):
    """Convert a single state to Cartesian coordinates.

    Returns (x1, y1, x2, y2); the second bob is offset from the first.
    """
    x1, y1 = to_cartesian(params.l1, state[0])
    dx2, dy2 = to_cartesian(params.l2, state[1])
    return x1, y1, x1 + dx2, y1 + dy2


def total_energy(state, params):
    """Compute total mechanical energy (T + V) for a single state.

    Potential energy is measured from the pivot point (y=0).
    """
    theta1, theta2, omega1, omega2 = np.asarray(tuple(state), dtype=np.float64)
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.gravity

    # Kinetic energy
    T = (
        0.5 * (m1 + m2) * l1**2 * omega1**2
        + 0.5 * m2 * l2**2 * omega2**2
        + m2 * l1 * l2 * omega1 * omega2 * np.cos(theta1 - theta2)
    )

    # Potential energy (from pivot)
    V = -(m1 + m2) * g * l1 * np.cos(theta1) - m2 * g * l2 * np.cos(theta2)

    return T + V


def step_count(t_end, dt):
    """Number of fixed steps covering [0, t_end]; zero when dt is zero."""
    if dt == 0:
        return 0
    return int(round(t_end / dt))


def integrate(params, state, t_end, dt):
    """Fixed-step RK4 trajectory from ``state`` over [0, t_end].

    Returns:
        t_array: 1D array of n_steps + 1 time values
        state_array: 2D array of shape (n_steps + 1, 4)
    """
    n_steps = step_count(t_end, dt)
    state_array = np.empty((n_steps + 1, 4), dtype=np.float64)
    state_array[0] = tuple(state)
    for i in range(1, n_steps + 1):
        state = rk4_step(state, params, dt)
        state_array[i] = tuple(state)
    return np.arange(n_steps + 1) * dt, state_array


def simulate(params, state, t_end=30.0, dt=0.005):
    """Reference solution from SciPy's DOP853 at tight tolerances.

    Returns uniformly-spaced samples on the same grid as ``integrate``,
    so the two can be compared element-wise.
    """
    n_steps = step_count(t_end, dt)
    t_eval = np.arange(n_steps + 1) * dt
    y0 = list(state)
    if n_steps == 0:
        return t_eval, np.array([y0], dtype=np.float64)

    sol = solve_ivp(
        fun=lambda t, y: list(derivatives(State.from_sequence(y), params)),
        t_span=(0, t_eval[-1]),
        y0=y0,
        method="DOP853",
        t_eval=t_eval,
        rtol=1e-12,
        atol=1e-12,
    )

    return sol.t, sol.y.T  # shape: (n_steps + 1, 4)


class Simulation:
    """Owns one live State and one PhysicalParams.

    Each ``advance`` replaces the held state with a new one; independent
    instances share nothing and can run side by side.
    """

    def __init__(self, params=None, state=DEFAULT_INITIAL_STATE):
        self.params = params if params is not None else PhysicalParams()
        self.state = state
        self.elapsed = 0.0

    def advance(self, dt):
        """Step the held state forward by ``dt`` and return it."""
        self.state = rk4_step(self.state, self.params, dt)
        self.elapsed += dt
        return self.state

    def reset(self, state=None, params=None):
        """Restart from ``state`` (default initial state if omitted)."""
        if params is not None:
            self.params = params
        self.state = state if state is not None else DEFAULT_INITIAL_STATE
        self.elapsed = 0.0

    def is_finite(self):
        return self.state.is_finite()

    def positions(self):
        return positions(self.state, self.params)

    def energy(self):
        return total_energy(self.state, self.params)
