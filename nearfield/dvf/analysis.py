"""
Frequency Response Analysis

Helpers for inspecting the magnitude response of near-field filter
coefficients, used for plotting and for checking that a synthesized filter
hits its DC and Nyquist gains.
"""

from typing import Tuple

import numpy as np
from scipy import signal

from .exceptions import MathError
from .utils import IIRCoefficients, magnitude_to_db


def frequency_response(coeffs: IIRCoefficients, fs: float,
                       n_points: int = 512) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate the magnitude response of a first-order filter.

    Args:
        coeffs: Filter coefficients
        fs: Sample rate in Hz
        n_points: Number of linearly spaced frequencies from DC to Nyquist (inclusive)

    Returns:
        (freqs, magnitude_db) arrays of shape (n_points,)
    """
    if fs <= 0:
        raise MathError.DomainError(f"Sample rate must be positive, got {fs}")
    if n_points < 2:
        raise MathError.DomainError(f"At least two frequency points are needed, got {n_points}")

    freqs = np.linspace(0.0, fs / 2.0, n_points)
    _, h = signal.freqz(coeffs.b, coeffs.a, worN=freqs, fs=fs)

    return freqs, 20.0 * np.log10(np.abs(h))


def gain_at(coeffs: IIRCoefficients, frequency: float, fs: float) -> float:
    """
    Gain of the filter at one frequency, in dB.

    Args:
        coeffs: Filter coefficients
        frequency: Frequency in Hz (0 to fs/2)
        fs: Sample rate in Hz
    """
    if fs <= 0:
        raise MathError.DomainError(f"Sample rate must be positive, got {fs}")
    if frequency < 0 or frequency > fs / 2.0:
        raise MathError.DomainError(f"Frequency must be in [0, {fs / 2.0}] Hz, got {frequency}")

    _, h = signal.freqz(coeffs.b, coeffs.a, worN=[frequency], fs=fs)
    return float(20.0 * np.log10(np.abs(h[0])))


def dc_gain(coeffs: IIRCoefficients) -> float:
    """Gain at DC in dB, H(z=1)."""
    return magnitude_to_db(abs((coeffs.b0 + coeffs.b1) / (1.0 + coeffs.a1)))


def nyquist_gain(coeffs: IIRCoefficients) -> float:
    """Gain at Nyquist in dB, H(z=-1)."""
    return magnitude_to_db(abs((coeffs.b0 - coeffs.b1) / (1.0 - coeffs.a1)))
