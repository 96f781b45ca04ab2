"""
Unit tests for the iir module.

These tests check the synthesized shelving filters against reference
coefficients and verify their DC gain, Nyquist gain and stability.
"""

import pytest
import numpy as np
from nearfield.dvf.iir import synthesize_iir
from nearfield.dvf.interpolation import interpolate_shelf_params
from nearfield.dvf.analysis import dc_gain, nyquist_gain
from nearfield.dvf.exceptions import MathError, NearFieldError

COEFF_TOLERANCE = 1e-5


def _dc(b0, b1, a1):
    return 20 * np.log10(abs((b0 + b1) / (1 + a1)))


def _nyquist(b0, b1, a1):
    return 20 * np.log10(abs((b0 - b1) / (1 - a1)))


class TestReferenceCoefficients:
    """Tests against reference coefficients at 44.1 kHz."""

    def test_all_reference_coefficients(self, iir_reference):
        fs = iir_reference['fs']
        for ri, rho in enumerate(iir_reference['rho']):
            for ti, theta in enumerate(iir_reference['theta']):
                params = interpolate_shelf_params(theta, rho)
                b0, b1, a1 = synthesize_iir(params.g0, params.ginf, params.fc, fs)
                assert abs(b0 - iir_reference['b0'][ri][ti]) < COEFF_TOLERANCE
                assert abs(b1 - iir_reference['b1'][ri][ti]) < COEFF_TOLERANCE
                assert abs(a1 - iir_reference['a1'][ri][ti]) < COEFF_TOLERANCE

    def test_single_example(self):
        params = interpolate_shelf_params(98.6, 2.381)
        coeffs = synthesize_iir(params.g0, params.ginf, params.fc, 44100)
        assert coeffs.b0 == pytest.approx(0.508950, abs=COEFF_TOLERANCE)
        assert coeffs.b1 == pytest.approx(-0.278191, abs=COEFF_TOLERANCE)
        assert coeffs.a1 == pytest.approx(-0.713458, abs=COEFF_TOLERANCE)

    def test_coefficient_layout(self):
        coeffs = synthesize_iir(3.0, -6.0, 1000.0, 48000)
        assert coeffs.b == (coeffs.b0, coeffs.b1)
        assert coeffs.a == (1.0, coeffs.a1)


class TestShelfResponse:
    """Tests for the gain and stability of the synthesized filter."""

    @pytest.mark.parametrize("g0,ginf,fc", [
        (22.67, -4.64, 525.6),
        (-9.09, -8.57, 5210.9),
        (0.0, -20.0, 2000.0),
        (6.0, -0.5, 150.0),
    ])
    def test_dc_and_nyquist_gain(self, g0, ginf, fc):
        """DC gain is g0 and the shelf lowers Nyquist by ginf."""
        b0, b1, a1 = synthesize_iir(g0, ginf, fc, 44100)
        assert _dc(b0, b1, a1) == pytest.approx(g0, abs=1e-9)
        assert _nyquist(b0, b1, a1) == pytest.approx(g0 + ginf, abs=1e-9)

    def test_boost_shelf(self):
        coeffs = synthesize_iir(0.0, 6.0, 1000.0, 48000)
        assert abs(coeffs.a1) < 1
        assert dc_gain(coeffs) == pytest.approx(0.0, abs=1e-9)
        assert nyquist_gain(coeffs) == pytest.approx(6.0, abs=1e-9)

    def test_flat_shelf(self):
        """A zero dB shelf is a pure gain."""
        coeffs = synthesize_iir(-3.0, 0.0, 1000.0, 48000)
        assert coeffs.b1 == pytest.approx(coeffs.b0 * coeffs.a1)

    @pytest.mark.parametrize("fs", [22050, 44100, 48000, 96000])
    def test_stable_over_model_domain(self, fs):
        """Every model output yields a pole inside the unit circle."""
        for rho in (1.15, 1.65, 2.381, 5.0, 20.0, 32.9):
            for theta in np.linspace(0.0, 180.0, 73):
                params = interpolate_shelf_params(theta, rho)
                coeffs = synthesize_iir(params.g0, params.ginf, params.fc, fs)
                assert abs(coeffs.a1) < 1

    @pytest.mark.parametrize("fs", [8000, 44100, 192000])
    @pytest.mark.parametrize("g0,ginf", [
        (0.0, -120.0), (0.0, 120.0), (120.0, -60.0), (-120.0, 60.0), (40.0, 0.0),
    ])
    def test_stable_or_rejected(self, fs, g0, ginf):
        """Arbitrary shelves give a stable pole or a package error."""
        nyquist = fs / 2.0
        corners = list(np.logspace(-3, np.log10(nyquist), 25)[:-1]) + [nyquist * (1 - 1e-12)]
        for fc in corners:
            try:
                coeffs = synthesize_iir(g0, ginf, fc, fs)
            except NearFieldError:
                continue
            assert abs(coeffs.a1) < 1
            assert np.all(np.isfinite(coeffs))

    def test_head_radius_rescales_corner(self):
        """A larger head lowers the effective corner frequency."""
        default = synthesize_iir(0.0, -10.0, 2000.0, 48000)
        larger = synthesize_iir(0.0, -10.0, 2000.0, 48000, head_radius=0.12)
        assert larger.a1 < default.a1


class TestDomain:
    """Tests for out-of-range inputs."""

    @pytest.mark.parametrize("fs", [0.0, -44100.0])
    def test_invalid_sample_rate(self, fs):
        with pytest.raises(MathError.DomainError):
            synthesize_iir(0.0, -3.0, 1000.0, fs)

    @pytest.mark.parametrize("fc", [0.0, -600.0])
    def test_non_positive_corner(self, fc):
        with pytest.raises(MathError.DomainError):
            synthesize_iir(0.0, -3.0, fc, 44100)

    @pytest.mark.parametrize("fc", [30000.0, 22050.0, 22500.0])
    def test_corner_above_nyquist(self, fc):
        """The corner must be below Nyquist before head-size scaling too."""
        with pytest.raises(MathError.DomainError):
            synthesize_iir(0.0, -6.0, fc, 44100)

    @pytest.mark.parametrize("ginf,fc", [(-6.0, 1e-20), (-400.0, 1000.0)])
    def test_pole_on_unit_circle(self, ginf, fc):
        """Corners and cuts that push the pole onto the unit circle are rejected."""
        with pytest.raises(MathError.PrecisionError):
            synthesize_iir(0.0, ginf, fc, 44100)

    @pytest.mark.parametrize("args", [
        (float('nan'), -3.0, 1000.0, 44100),
        (0.0, float('inf'), 1000.0, 44100),
        (0.0, -3.0, float('nan'), 44100),
        (0.0, -3.0, 1000.0, float('inf')),
    ])
    def test_non_finite_inputs(self, args):
        with pytest.raises(MathError.DomainError):
            synthesize_iir(*args)

    def test_invalid_head_radius(self):
        with pytest.raises(MathError.DomainError):
            synthesize_iir(0.0, -3.0, 1000.0, 44100, head_radius=0.0)

    def test_gain_overflow(self):
        with pytest.raises(MathError.PrecisionError):
            synthesize_iir(1e6, -3.0, 1000.0, 44100)
