"""
Digital Shelving Filter Synthesis

This module turns the physical parameters of a high-shelving filter (DC gain,
high-frequency gain and corner frequency) into the coefficients of a first-order
digital IIR filter

    H(z) = (b0 + b1 z^-1) / (1 + a1 z^-1)

using the first-order shelving structure of Zolzer (DAFX, ch. 2):

    H(z) = G * (1 + H0 / 2 * (1 - A(z))),   A(z) = (z^-1 + a1) / (1 + a1 z^-1)

with G = 10^(g0/20), V0 = 10^(ginf/20) and H0 = V0 - 1. A(z) is the bilinear
transform of a first-order analog allpass whose corner is pre-warped with
tan(pi fc / fs), so the corner frequency lands where it should at any sample
rate. The filter has gain G at DC and G * V0 at Nyquist.

The regression in the shelf model was fitted for a head of radius 8.75 cm;
the corner frequency is rescaled by REFERENCE_HEAD_RADIUS / head_radius before
pre-warping.
"""

import logging
import math

from .config import DEFAULT_HEAD_RADIUS, REFERENCE_HEAD_RADIUS
from .exceptions import MathError
from .utils import IIRCoefficients, db_to_magnitude, require_finite

# Set up logging
logger = logging.getLogger(__name__)


def synthesize_iir(g0: float, ginf: float, fc: float, fs: float,
                   head_radius: float = DEFAULT_HEAD_RADIUS) -> IIRCoefficients:
    """
    Compute first-order high-shelf coefficients from shelf parameters.

    Args:
        g0: Gain at DC in dB
        ginf: High-frequency gain in dB, relative to g0
        fc: Corner frequency in Hz
        fs: Sample rate in Hz
        head_radius: Listener head radius in meters

    Returns:
        IIRCoefficients(b0, b1, a1)

    Raises:
        MathError.DomainError: If a gain is not finite, fs <= 0, fc <= 0, or the
            corner frequency is not below Nyquist before and after rescaling
        MathError.PrecisionError: If a gain overflows the float range or the pole
            rounds onto the unit circle

    Notes:
        Boost (ginf >= 0) and cut (ginf < 0) use different allpass corners so
        that the shelf midpoint stays at fc in both cases; the near-field model
        itself only produces cuts.
    """
    g0 = require_finite(g0, "DC gain g0")
    ginf = require_finite(ginf, "High-frequency gain ginf")
    fc = require_finite(fc, "Corner frequency fc")
    fs = require_finite(fs, "Sample rate fs")

    if fs <= 0:
        raise MathError.DomainError(f"Sample rate must be positive, got {fs}")
    if head_radius <= 0:
        raise MathError.DomainError(f"Head radius must be positive, got {head_radius}")

    nyquist = fs / 2.0
    fc_scaled = fc * (REFERENCE_HEAD_RADIUS / head_radius)
    if fc <= 0 or fc >= nyquist or fc_scaled >= nyquist:
        raise MathError.DomainError(
            f"Corner frequency must be in (0, {nyquist}) Hz before and after head-size "
            f"scaling, got {fc} Hz ({fc_scaled} Hz scaled)")

    gain = db_to_magnitude(g0)
    v0 = db_to_magnitude(ginf)
    h0 = v0 - 1.0

    # Pre-warped corner of the allpass section
    t = math.tan(math.pi * fc_scaled / fs)
    if v0 < 1.0:
        a1 = (v0 * t - 1.0) / (v0 * t + 1.0)
    else:
        a1 = (t - 1.0) / (t + 1.0)

    b0 = gain * (1.0 + h0 * (1.0 - a1) / 2.0)
    b1 = gain * (a1 + h0 * (a1 - 1.0) / 2.0)

    # The pole rounds onto the unit circle for extreme corners or cuts
    if not abs(a1) < 1.0:
        raise MathError.PrecisionError(
            f"Shelf pole a1={a1} is not inside the unit circle for fc={fc} Hz, ginf={ginf} dB")
    assert abs(a1) < 1.0, f"unstable shelf filter pole a1={a1}"

    logger.debug(f"Shelf g0={g0:.3f} dB ginf={ginf:.3f} dB fc={fc:.1f} Hz -> "
                 f"b0={b0:.6f} b1={b1:.6f} a1={a1:.6f}")

    return IIRCoefficients(b0, b1, a1)
