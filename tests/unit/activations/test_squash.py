"""
Unit tests for the squashing functions.

Tests cover the values and derivatives of each squashing function, the
dispatch through 'squash', and the parsing of squashing function names.
"""

import math
import pytest
from autograd import grad  # type: ignore

from synevo.activations import (SquashKind, squash, parse_squash, squashes, squash_codes,
                                logistic_squash, tanh_squash, identity_squash)


# ============================================================================
# Test: Values
# ============================================================================

class TestSquashValues:
    """Test the value of each squashing function."""

    @pytest.mark.parametrize("x", [-3.0, -0.5, 0.0, 0.5, 3.0])
    def test_logistic(self, x):
        assert squash(SquashKind.LOGISTIC, x) == pytest.approx(1 / (1 + math.exp(-x)))

    def test_logistic_at_zero(self):
        assert squash(SquashKind.LOGISTIC, 0.0) == pytest.approx(0.5)

    def test_logistic_extreme_inputs_do_not_overflow(self):
        assert squash(SquashKind.LOGISTIC, -1e6) == pytest.approx(0.0)
        assert squash(SquashKind.LOGISTIC,  1e6) == pytest.approx(1.0)

    @pytest.mark.parametrize("x", [-2.0, 0.0, 0.7])
    def test_tanh(self, x):
        assert squash(SquashKind.TANH, x) == pytest.approx(math.tanh(x))

    @pytest.mark.parametrize("x", [-2.5, 0.0, 4.2])
    def test_identity(self, x):
        assert squash(SquashKind.IDENTITY, x) == x

    def test_hlim(self):
        assert squash(SquashKind.HLIM, 0.3) == 1.0
        assert squash(SquashKind.HLIM, 0.0) == 0.0
        assert squash(SquashKind.HLIM, -0.3) == 0.0

    def test_relu(self):
        assert squash(SquashKind.RELU, 1.5) == 1.5
        assert squash(SquashKind.RELU, 0.0) == 0.0
        assert squash(SquashKind.RELU, -1.5) == 0.0


# ============================================================================
# Test: Derivatives
# ============================================================================

class TestSquashDerivatives:
    """Test the derivative of each squashing function."""

    def test_logistic_derivative_formula(self):
        fx = 1 / (1 + math.exp(-0.8))
        assert squash(SquashKind.LOGISTIC, 0.8, derivate=True) == pytest.approx(fx * (1 - fx))

    def test_logistic_derivative_at_zero(self):
        assert squash(SquashKind.LOGISTIC, 0.0, derivate=True) == pytest.approx(0.25)

    def test_tanh_derivative_formula(self):
        assert squash(SquashKind.TANH, 0.4, derivate=True) == pytest.approx(1 - math.tanh(0.4) ** 2)

    def test_identity_derivative(self):
        assert squash(SquashKind.IDENTITY, -7.0, derivate=True) == 1.0

    def test_hlim_derivative_is_one(self):
        assert squash(SquashKind.HLIM, -1.0, derivate=True) == 1.0
        assert squash(SquashKind.HLIM,  1.0, derivate=True) == 1.0

    def test_relu_derivative(self):
        assert squash(SquashKind.RELU,  2.0, derivate=True) == 1.0
        assert squash(SquashKind.RELU, -2.0, derivate=True) == 0.0

    @pytest.mark.parametrize("function, kind", [
        (logistic_squash, SquashKind.LOGISTIC),
        (tanh_squash,     SquashKind.TANH),
        (identity_squash, SquashKind.IDENTITY),
    ])
    @pytest.mark.parametrize("x", [-1.3, 0.2, 2.1])
    def test_derivative_matches_autograd(self, function, kind, x):
        """The closed-form derivatives agree with automatic differentiation."""
        assert squash(kind, x, derivate=True) == pytest.approx(grad(function)(x))


# ============================================================================
# Test: Tables and parsing
# ============================================================================

class TestSquashTables:
    """Test the dispatch tables and name parsing."""

    def test_every_kind_has_function_and_code(self):
        for kind in SquashKind:
            assert kind in squashes
            assert len(squash_codes[kind]) == 3

    @pytest.mark.parametrize("name, kind", [
        ("LOGISTIC", SquashKind.LOGISTIC),
        ("tanh",     SquashKind.TANH),
        (" Relu ",   SquashKind.RELU),
        ("hlim",     SquashKind.HLIM),
    ])
    def test_parse_squash(self, name, kind):
        assert parse_squash(name) is kind

    def test_parse_squash_passes_kind_through(self):
        assert parse_squash(SquashKind.IDENTITY) is SquashKind.IDENTITY

    def test_parse_squash_invalid_name(self):
        with pytest.raises(ValueError, match="Invalid squash function 'softmax'"):
            parse_squash("softmax")
