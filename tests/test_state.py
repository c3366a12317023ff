"""Tests for state.py: the scale/divide/add algebra used by RK4."""

import math

import numpy as np
import pytest

from state import State, add, divide, scale


def assert_states_close(a, b, rel=1e-12, abs_tol=1e-12):
    for x, y in zip(a, b):
        assert x == pytest.approx(y, rel=rel, abs=abs_tol)


class TestConstruction:

    def test_defaults_are_rest(self):
        assert tuple(State()) == (0.0, 0.0, 0.0, 0.0)

    def test_unpacks_in_field_order(self):
        theta1, theta2, omega1, omega2 = State(1.0, 2.0, 3.0, 4.0)
        assert (theta1, theta2, omega1, omega2) == (1.0, 2.0, 3.0, 4.0)

    def test_indexing_and_len(self):
        s = State(1.0, 2.0, 3.0, 4.0)
        assert len(s) == 4
        assert s[0] == 1.0
        assert s[3] == 4.0

    def test_from_sequence_accepts_arrays(self):
        s = State.from_sequence(np.array([0.5, -0.5, 1.5, -1.5]))
        assert s == State(0.5, -0.5, 1.5, -1.5)
        assert isinstance(s.theta_1, float)

    def test_as_array_round_trip(self):
        s = State(0.1, 0.2, 0.3, 0.4)
        arr = s.as_array()
        assert arr.dtype == np.float64
        assert State.from_sequence(arr) == s

    def test_immutable(self):
        s = State()
        with pytest.raises(AttributeError):
            s.theta_1 = 1.0

    def test_angles_not_wrapped(self):
        s = State(10 * math.pi, -7.5, 0.0, 0.0)
        assert s.theta_1 == 10 * math.pi
        assert s.theta_2 == -7.5


class TestScale:

    def test_scales_every_field(self):
        assert scale(State(1.0, -2.0, 3.0, -4.0), 2.0) == State(2.0, -4.0, 6.0, -8.0)

    def test_zero_gives_zero_state(self):
        assert scale(State(1.0, -2.0, 3.0, -4.0), 0.0) == State()

    def test_negative_scalar(self):
        assert scale(State(1.0, 2.0, 3.0, 4.0), -1.0) == State(-1.0, -2.0, -3.0, -4.0)

    def test_operator_forms(self):
        s = State(1.0, 2.0, 3.0, 4.0)
        assert s * 3.0 == scale(s, 3.0)
        assert 3.0 * s == scale(s, 3.0)

    def test_does_not_mutate_input(self):
        s = State(1.0, 2.0, 3.0, 4.0)
        scale(s, 5.0)
        assert s == State(1.0, 2.0, 3.0, 4.0)


class TestDivide:

    def test_divides_every_field(self):
        assert divide(State(2.0, 4.0, 6.0, 8.0), 2.0) == State(1.0, 2.0, 3.0, 4.0)

    def test_operator_form(self):
        s = State(2.0, 4.0, 6.0, 8.0)
        assert s / 4.0 == divide(s, 4.0)

    def test_zero_divisor_yields_non_finite(self):
        """Dividing by zero is caller error and surfaces as inf/nan, not an exception."""
        result = divide(State(1.0, -1.0, 0.0, 2.0), 0.0)
        assert result.theta_1 == math.inf
        assert result.theta_2 == -math.inf
        assert math.isnan(result.dot_theta_1)
        assert not result.is_finite()


class TestAdd:

    def test_element_wise(self):
        a = State(1.0, 2.0, 3.0, 4.0)
        b = State(0.5, -2.0, 10.0, -4.0)
        assert add(a, b) == State(1.5, 0.0, 13.0, 0.0)

    def test_operator_form(self):
        a = State(1.0, 2.0, 3.0, 4.0)
        b = State(4.0, 3.0, 2.0, 1.0)
        assert a + b == add(a, b)

    def test_zero_is_identity(self):
        a = State(1.0, 2.0, 3.0, 4.0)
        assert a + State() == a

    def test_rejects_non_state(self):
        with pytest.raises(TypeError):
            State() + 1.0


class TestLinearity:
    """Vector-space identities RK4 relies on."""

    STATES = [
        State(0.3, -1.2, 2.5, 0.01),
        State(7.0, 3.0, -0.5, 100.0),
        State(-1e-3, 1e3, 0.0, -42.0),
    ]
    SCALARS = [(0.5, 0.25), (2.0, -3.0), (1e-6, 1e3)]

    @pytest.mark.parametrize("s", STATES)
    @pytest.mark.parametrize("a,b", SCALARS)
    def test_scale_distributes_over_scalar_sum(self, s, a, b):
        assert_states_close(scale(s, a + b), add(scale(s, a), scale(s, b)))

    @pytest.mark.parametrize("s", STATES)
    @pytest.mark.parametrize("a", [0.5, -3.0, 6.0, 1e-4])
    def test_divide_undoes_scale(self, s, a):
        assert_states_close(divide(scale(s, a), a), s)


class TestIsFinite:

    def test_finite_state(self):
        assert State(1.0, 2.0, 3.0, 4.0).is_finite()

    def test_nan_detected(self):
        assert not State(1.0, math.nan, 3.0, 4.0).is_finite()
