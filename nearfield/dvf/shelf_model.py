"""
Near-Field Shelf Parameter Model

This module evaluates the near-field filter model of Spagnol et al. [1]: for a
source at ipsilateral angle theta and normalized distance rho (distance divided
by head radius), it returns the three parameters of a first-order high-shelving
filter that reproduces the distance-dependent coloration of a nearby source:

    g0(theta, rho)   = (p11 rho + p21) / (rho^2 + q11 rho + q21)            [dB]
    ginf(theta, rho) = (p12 rho + p22) / (rho^2 + q12 rho + q22)            [dB]
    fc(theta, rho)   = (p13 rho^2 + p23 rho + p33) / (rho^2 + q13 rho + q23)
                       * c / (2 pi a)                                       [Hz]

The model is sampled on 19 angles, 0 to 180 degrees in 10 degree steps. The
regression coefficients are the published fit (Table 1 in [1]) and must be
kept exactly as they are: they were fitted to simulated spherical-head
responses and cannot be re-derived or simplified.

[1] S. Spagnol, E. Tavazzi, and F. Avanzini, "Distance rendering and perception
    of nearby virtual sound sources with a near-field filter model," Applied
    Acoustics, vol. 115, pp. 61-73, Jan. 2017, doi:10.1016/j.apacoust.2016.08.015.

See Also:
    - interpolation: For evaluating the model at arbitrary angles
    - iir: For turning shelf parameters into filter coefficients
"""

import math
from typing import Tuple

import numpy as np

from .config import (DEFAULT_HEAD_RADIUS, GRID_STEP_DEGREES, MIN_RHO,
                     NUM_GRID_ANGLES, SPEED_OF_SOUND)
from .exceptions import MathError
from .utils import ShelfParams, require_finite

# Regression coefficients, one row per grid angle:
#   p11, p21, q11, q21,  p12, p22, q12, q22,  p13, p23, p33, q13, q23
_SHELF_COEFFICIENTS: Tuple[Tuple[float, ...], ...] = (
    (12.97, -9.69, -1.14, 0.219, -4.39, 2.123, -0.55, -0.06, 0.457, -0.67, 0.174, -1.75, 0.699),  #   0 deg
    (13.19, 234.2, 18.48, -8.5, -4.31, -2.78, 0.59, -0.17, 0.455, 0.142, -0.11, -0.01, -0.35),  #  10 deg
    (12.13, -11.2, -1.25, 0.346, -4.18, 4.224, -1.01, -0.02, -0.87, 3404.0, -1699.0, 7354.0, -5350.0),  #  20 deg
    (11.19, -9.03, -1.02, 0.336, -4.01, 3.039, -0.56, -0.32, 0.465, -0.91, 0.437, -2.18, 1.188),  #  30 deg
    (9.91, -7.87, -0.83, 0.379, -3.87, -0.57, 0.665, -1.13, 0.494, -0.67, 0.658, -1.2, 0.256),  #  40 deg
    (8.328, -7.42, -0.67, 0.421, -4.1, -34.7, 11.39, -8.3, 0.549, -1.21, 2.02, -1.59, 0.816),  #  50 deg
    (6.493, -7.31, -0.5, 0.423, -3.87, 3.271, -1.57, 0.637, 0.663, -1.76, 6.815, -1.23, 1.166),  #  60 deg
    (4.455, -7.28, -0.32, 0.382, -5.02, 0.023, -0.87, 0.325, 0.691, 4.655, 0.614, -0.89, 0.76),  #  70 deg
    (2.274, -7.29, -0.11, 0.314, -6.72, -8.96, 0.37, -0.08, 3.507, 55.09, 589.3, 29.23, 59.51),  #  80 deg
    (0.018, -7.48, -0.13, 0.24, -8.69, -58.4, 5.446, -1.19, -27.4, 10336.0, 16818.0, 1945.0, 1707.0),  #  90 deg
    (-2.24, -8.04, 0.395, 0.177, -11.2, 11.47, -1.13, 0.103, 6.371, 1.735, -9.39, -0.06, -1.12),  # 100 deg
    (-4.43, -9.23, 0.699, 0.132, -12.1, 8.716, -0.63, -0.12, 7.032, 40.88, -44.1, 5.635, -6.18),  # 110 deg
    (-6.49, -11.6, 1.084, 0.113, -11.1, 21.8, -2.01, 0.098, 7.092, 23.86, -23.6, 3.308, -3.39),  # 120 deg
    (-8.34, -17.4, 1.757, 0.142, -11.1, 1.91, 0.15, -0.4, 7.463, 102.8, -92.3, 13.88, -12.7),  # 130 deg
    (-9.93, -48.4, 4.764, 0.462, -9.72, -0.04, 0.243, -0.41, 7.453, -6.14, -1.81, -0.88, -0.19),  # 140 deg
    (-11.3, 9.149, -0.64, -0.14, -8.42, -0.66, 0.147, -0.34, 8.101, -18.1, 10.54, -2.23, 1.295),  # 150 deg
    (-12.2, 1.905, 0.109, -0.08, -7.44, 0.395, -0.18, -0.18, 8.702, -9.05, 0.532, -0.96, -0.02),  # 160 deg
    (-12.8, -0.75, 0.386, -0.06, -6.78, 2.662, -0.67, 0.05, 8.925, -9.03, 0.285, -0.9, -0.08),  # 170 deg
    (-13.0, -1.32, 0.45, -0.05, -6.58, 3.387, -0.84, 0.131, 9.317, -6.89, -2.08, -0.57, -0.4),  # 180 deg
)


def grid_angles() -> np.ndarray:
    """Return the 19 table angles in degrees."""
    return np.arange(NUM_GRID_ANGLES) * GRID_STEP_DEGREES


def check_rho(rho: float) -> float:
    """
    Validate a normalized source distance.

    Raises:
        MathError.DomainError: If rho is non-finite or inside the head (rho < 1)
    """
    rho = require_finite(rho, "Normalized distance rho")
    if rho < MIN_RHO:
        raise MathError.DomainError(f"Normalized distance rho must be >= {MIN_RHO}, got {rho}")
    return rho


def _rational(numerator: float, denominator: float, name: str, theta_index: int, rho: float) -> float:
    # The fitted denominators have real roots close to rho = 1 for some angles
    # (and at rho = 1.96 for the 120 degree ginf row)
    if denominator == 0.0:
        raise MathError.PrecisionError(
            f"Regression for {name} is singular at {theta_index * GRID_STEP_DEGREES:.0f} deg, rho={rho}")
    return numerator / denominator


def evaluate_shelf_params(theta_index: int, rho: float,
                          head_radius: float = DEFAULT_HEAD_RADIUS,
                          speed_of_sound: float = SPEED_OF_SOUND) -> ShelfParams:
    """
    Evaluate the high-shelf parameters at one grid angle.
    
    Args:
        theta_index: Index of the grid angle, theta = 10 * theta_index degrees (0-18)
        rho: Source distance normalized by the head radius (>= 1)
        head_radius: Listener head radius in meters, scales the corner frequency
        speed_of_sound: Speed of sound in m/s, scales the corner frequency
        
    Returns:
        ShelfParams(g0, ginf, fc) with gains in dB and fc in Hz
        
    Raises:
        MathError.DomainError: If theta_index or rho is out of range
        MathError.PrecisionError: If the regression is singular at rho
    
    Examples:
        >>> evaluate_shelf_params(0, 1.15)
        ShelfParams(g0=22.67028..., ginf=-4.64365..., fc=525.636...)
    """
    if isinstance(theta_index, bool) or not isinstance(theta_index, (int, np.integer)):
        raise MathError.DomainError(f"Grid angle index must be an integer, got {theta_index!r}")
    if theta_index < 0 or theta_index >= NUM_GRID_ANGLES:
        raise MathError.DomainError(
            f"Grid angle index must be in [0, {NUM_GRID_ANGLES - 1}], got {theta_index}")
    rho = check_rho(rho)
    
    (p11, p21, q11, q21,
     p12, p22, q12, q22,
     p13, p23, p33, q13, q23) = _SHELF_COEFFICIENTS[theta_index]
    
    rho2 = rho * rho
    g0 = _rational(p11 * rho + p21, rho2 + q11 * rho + q21, "g0", theta_index, rho)
    ginf = _rational(p12 * rho + p22, rho2 + q12 * rho + q22, "ginf", theta_index, rho)
    
    # The fc regression yields a normalized frequency
    fc_norm = _rational(p13 * rho2 + p23 * rho + p33, rho2 + q13 * rho + q23, "fc", theta_index, rho)
    fc = fc_norm * speed_of_sound / (2.0 * math.pi * head_radius)
    
    # rho * rho overflows for rho beyond about 1e154
    if not all(math.isfinite(v) for v in (g0, ginf, fc)):
        raise MathError.PrecisionError(
            f"Regression is not finite at {theta_index * GRID_STEP_DEGREES:.0f} deg, rho={rho}")
    
    return ShelfParams(g0, ginf, fc)


def shelf_parameter_table(rho: float,
                          head_radius: float = DEFAULT_HEAD_RADIUS,
                          speed_of_sound: float = SPEED_OF_SOUND) -> np.ndarray:
    """
    Evaluate the shelf parameters at every grid angle for one distance.
    
    Args:
        rho: Source distance normalized by the head radius (>= 1)
        head_radius: Listener head radius in meters
        speed_of_sound: Speed of sound in m/s
        
    Returns:
        Array of shape (19, 3) with columns (g0, ginf, fc)

    Raises:
        MathError.DomainError: If rho is out of range
        MathError.PrecisionError: If the regression is singular or overflows at rho
    """
    rho = check_rho(rho)
    coeffs = np.asarray(_SHELF_COEFFICIENTS)
    p11, p21, q11, q21, p12, p22, q12, q22, p13, p23, p33, q13, q23 = coeffs.T
    
    rho2 = rho * rho
    with np.errstate(divide="ignore", invalid="ignore"):
        g0 = (p11 * rho + p21) / (rho2 + q11 * rho + q21)
        ginf = (p12 * rho + p22) / (rho2 + q12 * rho + q22)
        fc = ((p13 * rho2 + p23 * rho + p33) / (rho2 + q13 * rho + q23)
              * speed_of_sound / (2.0 * math.pi * head_radius))
    
    table = np.column_stack([g0, ginf, fc])
    if not np.all(np.isfinite(table)):
        raise MathError.PrecisionError(f"Regression is singular at rho={rho}")
    
    return table
