"""
General Utility Functions and Definitions

This module contains type definitions, data classes and validation helpers
used across the near-field filter package.

See Also:
    - config: For constants and configuration management
    - exceptions: For the error types raised by the validation helpers
"""

import math
from enum import Enum, auto
from typing import NamedTuple, Tuple

from .exceptions import MathError

# Type aliases for improved readability
CartesianCoord = Tuple[float, float, float]  # (x, y, z) in meters
SphericalCoord = Tuple[float, float, float]  # (azimuth, elevation, distance) in radians/meters


class Ear(Enum):
    """
    Identifies one ear of the listener.

    Attributes:
        LEFT: Left ear, on the positive-azimuth side
        RIGHT: Right ear, on the negative-azimuth side
    """
    LEFT = auto()
    RIGHT = auto()


class ShelfParams(NamedTuple):
    """
    Physical parameters of a first-order high-shelving filter.

    Attributes:
        g0: Gain at DC in dB
        ginf: High-frequency shelf gain in dB, relative to the DC gain
        fc: Corner frequency in Hz
    """
    g0: float
    ginf: float
    fc: float


class IIRCoefficients(NamedTuple):
    """
    Coefficients of H(z) = (b0 + b1 z^-1) / (1 + a1 z^-1).
    """
    b0: float
    b1: float
    a1: float

    @property
    def b(self) -> Tuple[float, float]:
        """Numerator in the layout expected by scipy.signal.lfilter."""
        return (self.b0, self.b1)

    @property
    def a(self) -> Tuple[float, float]:
        """Denominator in the layout expected by scipy.signal.lfilter."""
        return (1.0, self.a1)


class BinauralCoefficients(NamedTuple):
    """Near-field filter coefficients for both ears of one source."""
    left: IIRCoefficients
    right: IIRCoefficients

    def for_ear(self, ear: Ear) -> IIRCoefficients:
        return self.left if ear is Ear.LEFT else self.right


def db_to_magnitude(gain_db: float) -> float:
    """
    Convert a gain in dB to a linear magnitude.

    Raises:
        MathError.PrecisionError: If the magnitude is not representable as a float
    """
    try:
        return 10.0 ** (gain_db / 20.0)
    except OverflowError as e:
        raise MathError.PrecisionError(f"Gain of {gain_db} dB overflows") from e


def magnitude_to_db(magnitude: float) -> float:
    """Convert a linear magnitude to a gain in dB."""
    return 20.0 * math.log10(magnitude)


def require_finite(value: float, name: str) -> float:
    """
    Check that a scalar input is a finite real number.

    Raises:
        MathError.DomainError: If the value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise MathError.DomainError(f"{name} must be finite, got {value}")
    return value


def require_in_range(value: float, name: str, low: float, high: float) -> float:
    """
    Check that a scalar input lies in the closed interval [low, high].

    Raises:
        MathError.DomainError: If the value is non-finite or out of range
    """
    value = require_finite(value, name)
    if value < low or value > high:
        raise MathError.DomainError(f"{name} must be in [{low}, {high}], got {value}")
    return value
