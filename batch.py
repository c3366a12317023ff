"""NumPy vectorized RK4 backend for sweeps over many initial conditions.

All N trajectories advance through each timestep simultaneously as a
single (N, 4) NumPy array [theta_1, theta_2, dot_theta_1, dot_theta_2].

No in-place mutation of the state array (states = states + delta, never
+=), so callers can keep references to earlier snapshots.

Physics equations here duplicate simulation.py's derivatives() but operate
on (N, 4) arrays. See tests/test_batch.py for cross-validation tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

import numpy as np

from simulation import PhysicalParams, step_count

logger = logging.getLogger(__name__)


class BatchResult(NamedTuple):
    """Immutable result from a batch simulation.

    Supports tuple unpacking: ``t, trajectories = result``.
    """

    t: np.ndarray             # (n_steps + 1,) float64
    trajectories: np.ndarray  # (N, n_steps + 1, 4) float64


def derivatives_batch(states: np.ndarray, params: PhysicalParams) -> np.ndarray:
    """Compute derivatives for N trajectories simultaneously.

    Args:
        states: (N, 4) array with columns [theta1, theta2, omega1, omega2].
        params: Physics parameters.

    Returns:
        (N, 4) array of derivatives [d_theta1, d_theta2, d_omega1, d_omega2].
    """
    theta1 = states[:, 0]
    theta2 = states[:, 1]
    omega1 = states[:, 2]
    omega2 = states[:, 3]

    mu = params.m2 / params.m1
    lam = params.l2 / params.l1
    gamma = params.gravity / params.l1

    delta = theta1 - theta2
    sin_delta = np.sin(delta)
    cos_delta = np.cos(delta)
    denom = 1.0 + mu * sin_delta**2

    gravity_1 = (mu + 1.0) * gamma * np.sin(theta1)
    swing_2 = mu * lam * omega2**2 * sin_delta
    coupling = omega1**2 * sin_delta - gamma * np.sin(theta2)

    alpha1 = -(gravity_1 + swing_2 + mu * cos_delta * coupling) / denom
    alpha2 = ((mu + 1.0) * coupling + cos_delta * (gravity_1 + swing_2)) / (
        lam * denom
    )

    return np.stack([omega1, omega2, alpha1, alpha2], axis=1)


def total_energy_batch(states: np.ndarray, params: PhysicalParams) -> np.ndarray:
    """Compute total energy (T + V) for N trajectories simultaneously.

    Returns:
        (N,) float64 array of total energies, potential measured from the pivot.
    """
    theta1 = states[:, 0]
    theta2 = states[:, 1]
    omega1 = states[:, 2]
    omega2 = states[:, 3]
    m1, m2, l1, l2, g = params.m1, params.m2, params.l1, params.l2, params.gravity

    kinetic = (
        0.5 * (m1 + m2) * l1**2 * omega1**2
        + 0.5 * m2 * l2**2 * omega2**2
        + m2 * l1 * l2 * omega1 * omega2 * np.cos(theta1 - theta2)
    )
    potential = -(m1 + m2) * g * l1 * np.cos(theta1) - m2 * g * l2 * np.cos(theta2)
    return kinetic + potential


def rk4_step_batch(
    states: np.ndarray, params: PhysicalParams, dt: float,
) -> np.ndarray:
    """One classical RK4 step for every row of ``states``."""
    k1 = dt * derivatives_batch(states, params)
    k2 = dt * derivatives_batch(states + 0.5 * k1, params)
    k3 = dt * derivatives_batch(states + 0.5 * k2, params)
    k4 = dt * derivatives_batch(states + k3, params)

    return states + (k1 + 2.0 * k2 + 2.0 * k3 + k4) / 6.0


def simulate_batch(
    params: PhysicalParams,
    initial_conditions: np.ndarray,
    t_end: float,
    dt: float,
    cancel_check: Callable[[], bool] | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> BatchResult:
    """Integrate N trajectories with fixed-step RK4.

    Args:
        params: Physics parameters shared by every trajectory.
        initial_conditions: (N, 4) array [theta1, theta2, omega1, omega2].
        t_end: Simulation end time in seconds.
        dt: RK4 step size.
        cancel_check: Optional callable returning True to abort.
        progress_callback: Optional callable(steps_done, total_steps).

    Returns:
        BatchResult with the time grid and every trajectory. If cancelled,
        both are truncated to the steps actually taken.
    """
    initial_conditions = np.asarray(initial_conditions, dtype=np.float64)
    if initial_conditions.ndim != 2 or initial_conditions.shape[1] != 4:
        raise ValueError(
            f"initial_conditions must have shape (N, 4), "
            f"got {initial_conditions.shape}"
        )

    n_steps = step_count(t_end, dt)
    n_trajectories = initial_conditions.shape[0]
    trajectories = np.empty((n_trajectories, n_steps + 1, 4), dtype=np.float64)
    trajectories[:, 0] = initial_conditions

    states = initial_conditions
    steps_done = n_steps
    for step in range(1, n_steps + 1):
        # Cancellation check every 100 steps
        if cancel_check is not None and step % 100 == 0 and cancel_check():
            steps_done = step - 1
            logger.info("Batch cancelled after %d / %d steps", steps_done, n_steps)
            break

        if progress_callback is not None and step % 100 == 0:
            progress_callback(step, n_steps)

        states = rk4_step_batch(states, params, dt)
        trajectories[:, step] = states

    if progress_callback is not None and steps_done == n_steps:
        progress_callback(n_steps, n_steps)

    t = np.arange(steps_done + 1) * dt
    return BatchResult(t, trajectories[:, : steps_done + 1])
