"""
Angular Interpolation of Shelf Parameters

The shelf parameter model is only defined on a 10 degree grid. This module
evaluates it at arbitrary angles by linearly interpolating the three shelf
parameters between the two bracketing grid angles.
"""

import math
from typing import Tuple

from .config import (DEFAULT_HEAD_RADIUS, GRID_STEP_DEGREES, MAX_ANGLE_DEGREES,
                     NUM_GRID_ANGLES, SPEED_OF_SOUND)
from .shelf_model import check_rho, evaluate_shelf_params
from .utils import ShelfParams, require_in_range


def bracket_grid_angle(theta: float) -> Tuple[int, int, float]:
    """
    Find the grid angles enclosing theta.

    Args:
        theta: Ipsilateral angle in degrees (0-180)

    Returns:
        (index_lo, index_hi, fraction) where fraction is the relative position
        of theta between the two grid angles. On a grid angle both indices are
        equal and fraction is 0.

    Raises:
        MathError.DomainError: If theta is outside [0, 180]
    """
    theta = require_in_range(theta, "Angle theta", 0.0, MAX_ANGLE_DEGREES)

    index_lo = min(int(math.floor(theta / GRID_STEP_DEGREES)), NUM_GRID_ANGLES - 1)
    fraction = (theta - index_lo * GRID_STEP_DEGREES) / GRID_STEP_DEGREES
    if fraction == 0.0:
        return index_lo, index_lo, 0.0

    return index_lo, index_lo + 1, fraction


def interpolate_shelf_params(theta: float, rho: float,
                             head_radius: float = DEFAULT_HEAD_RADIUS,
                             speed_of_sound: float = SPEED_OF_SOUND) -> ShelfParams:
    """
    Evaluate the shelf parameters at an arbitrary angle.

    Args:
        theta: Ipsilateral angle in degrees (0-180)
        rho: Source distance normalized by the head radius (>= 1)
        head_radius: Listener head radius in meters
        speed_of_sound: Speed of sound in m/s

    Returns:
        ShelfParams(g0, ginf, fc) linearly interpolated between the grid angles

    Raises:
        MathError.DomainError: If theta or rho is out of range
    """
    rho = check_rho(rho)
    index_lo, index_hi, fraction = bracket_grid_angle(theta)

    lo = evaluate_shelf_params(index_lo, rho, head_radius, speed_of_sound)
    if index_lo == index_hi:
        return lo

    hi = evaluate_shelf_params(index_hi, rho, head_radius, speed_of_sound)
    return ShelfParams(*(l + (h - l) * fraction for l, h in zip(lo, hi)))
