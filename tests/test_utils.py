"""
Unit tests for the utils module.
"""

import math
import pytest
from nearfield.dvf.utils import (
    db_to_magnitude, magnitude_to_db, require_finite, require_in_range,
    IIRCoefficients, BinauralCoefficients, Ear
)
from nearfield.dvf.exceptions import MathError, NearFieldError


class TestGainConversion:
    """Tests for dB conversions."""

    def test_known_values(self):
        assert db_to_magnitude(0.0) == 1.0
        assert db_to_magnitude(20.0) == pytest.approx(10.0)
        assert db_to_magnitude(-6.0206) == pytest.approx(0.5, rel=1e-5)
        assert magnitude_to_db(100.0) == pytest.approx(40.0)

    @pytest.mark.parametrize("gain_db", [-40.0, -3.0, 0.5, 12.0])
    def test_inverse(self, gain_db):
        assert magnitude_to_db(db_to_magnitude(gain_db)) == pytest.approx(gain_db)

    def test_overflow(self):
        with pytest.raises(MathError.PrecisionError):
            db_to_magnitude(10000.0)


class TestValidation:
    """Tests for the scalar validation helpers."""

    def test_require_finite(self):
        assert require_finite(3, "x") == 3.0
        assert isinstance(require_finite(3, "x"), float)

    @pytest.mark.parametrize("value", [float('nan'), float('inf'), -math.inf])
    def test_require_finite_rejects(self, value):
        with pytest.raises(MathError.DomainError):
            require_finite(value, "x")

    def test_require_in_range(self):
        assert require_in_range(0.0, "x", 0.0, 1.0) == 0.0
        assert require_in_range(1.0, "x", 0.0, 1.0) == 1.0

    def test_require_in_range_rejects(self):
        with pytest.raises(MathError.DomainError) as exc_info:
            require_in_range(1.5, "theta", 0.0, 1.0)
        assert "theta" in str(exc_info.value)

    def test_errors_share_base_class(self):
        with pytest.raises(NearFieldError):
            require_finite(float('nan'), "x")


class TestCoefficientTypes:
    """Tests for the coefficient containers."""

    def test_iir_layout(self):
        coeffs = IIRCoefficients(0.5, -0.25, -0.8)
        assert coeffs.b == (0.5, -0.25)
        assert coeffs.a == (1.0, -0.8)
        b0, b1, a1 = coeffs
        assert (b0, b1, a1) == (0.5, -0.25, -0.8)

    def test_binaural_for_ear(self):
        left = IIRCoefficients(1.0, 0.0, 0.0)
        right = IIRCoefficients(0.5, 0.0, 0.0)
        coeffs = BinauralCoefficients(left, right)
        assert coeffs.for_ear(Ear.LEFT) == left
        assert coeffs.for_ear(Ear.RIGHT) == right
