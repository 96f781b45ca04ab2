"""
Source Geometry Conversions

The near-field model is parameterized by the ipsilateral angle, measured from
the interaural axis of one ear, and by the source distance normalized by the
head radius. This module converts listener-centred source positions into
those quantities.

Uses the convention:
- Azimuth: 0 = front, 90 = left, 180 = back, -90 = right (degrees unless noted)
- Elevation: -90 = down, 0 = horizon, 90 = up
- Cartesian: x = left, y = up, z = front
"""

import math
from typing import Tuple

import numpy as np

from .config import DEFAULT_HEAD_RADIUS
from .exceptions import MathError
from .shelf_model import check_rho
from .utils import CartesianCoord, SphericalCoord, require_finite, require_in_range


def frontal_to_ipsilateral(azimuth: float, elevation: float = 0.0) -> Tuple[float, float]:
    """
    Convert a frontal direction into the ipsilateral angle seen by each ear.

    The ipsilateral angle is the angle between the source direction and the
    ear's interaural axis: 0 degrees when the source faces the ear, 180 degrees
    when it faces the opposite ear.

    Args:
        azimuth: Azimuth in degrees (any value, wrapped internally)
        elevation: Elevation in degrees (-90 to 90)

    Returns:
        (left, right) ipsilateral angles in degrees, each in [0, 180]

    Raises:
        MathError.DomainError: If an angle is not finite or elevation is out of range

    Examples:
        >>> frontal_to_ipsilateral(90.0)
        (0.0, 180.0)
        >>> frontal_to_ipsilateral(0.0)
        (90.0, 90.0)
    """
    azimuth = require_finite(azimuth, "Azimuth")
    elevation = require_in_range(elevation, "Elevation", -90.0, 90.0)

    # Projection of the unit source direction onto the left interaural axis
    lateral = math.cos(math.radians(elevation)) * math.sin(math.radians(azimuth))
    lateral = max(-1.0, min(1.0, lateral))

    left = math.degrees(math.acos(lateral))
    right = math.degrees(math.acos(-lateral))

    return (left, right)


def distance_to_rho(distance: float, head_radius: float = DEFAULT_HEAD_RADIUS) -> float:
    """
    Normalize a source distance by the head radius.

    Args:
        distance: Distance from the head centre in meters
        head_radius: Listener head radius in meters

    Returns:
        Normalized distance rho (>= 1)

    Raises:
        MathError.DomainError: If the source lies inside the head
    """
    distance = require_finite(distance, "Distance")
    if head_radius <= 0:
        raise MathError.DomainError(f"Head radius must be positive, got {head_radius}")

    return check_rho(distance / head_radius)


def convert_to_spherical(cartesian: CartesianCoord) -> SphericalCoord:
    """
    Convert Cartesian coordinates (x, y, z) to spherical coordinates (azimuth, elevation, distance).

    Args:
        cartesian: (x, y, z) coordinates in meters

    Returns:
        (azimuth, elevation, distance) in radians and meters
    """
    x, y, z = cartesian

    # Calculate distance
    distance = math.sqrt(x*x + y*y + z*z)

    # Handle the origin
    if distance < 1e-10:
        return (0.0, 0.0, 0.0)

    elevation = math.asin(max(-1.0, min(1.0, y / distance)))
    azimuth = math.atan2(x, z)

    return (azimuth, elevation, distance)


def ipsilateral_angles(azimuths: np.ndarray, elevations: np.ndarray = None) -> np.ndarray:
    """
    Vectorized version of frontal_to_ipsilateral.

    Args:
        azimuths: Azimuths in degrees, shape (n,)
        elevations: Elevations in degrees, shape (n,), defaults to the horizon

    Returns:
        Array of shape (n, 2) with (left, right) ipsilateral angles in degrees
    """
    azimuths = np.asarray(azimuths, dtype=float)
    elevations = np.zeros_like(azimuths) if elevations is None else np.asarray(elevations, dtype=float)

    if not (np.all(np.isfinite(azimuths)) and np.all(np.isfinite(elevations))):
        raise MathError.DomainError("Angles must be finite")
    if np.any(np.abs(elevations) > 90.0):
        raise MathError.DomainError("Elevation must be in [-90, 90]")

    lateral = np.clip(np.cos(np.radians(elevations)) * np.sin(np.radians(azimuths)), -1.0, 1.0)

    return np.column_stack([np.degrees(np.arccos(lateral)), np.degrees(np.arccos(-lateral))])
