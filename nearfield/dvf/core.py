"""
Core Near-Field Filter Module

This module ties the shelf model, angular interpolation and filter synthesis
together into the calls a binaural renderer makes once per processing block:
coefficients for one ear from an ipsilateral angle and a metric distance, or
for both ears from a listener-centred source direction.

The host owns the filter state and is responsible for swapping coefficients
between blocks.
"""

import logging
import math
from typing import Optional

from .config import DVFConfig, default_config
from .exceptions import MathError
from .geometry import convert_to_spherical, distance_to_rho, frontal_to_ipsilateral
from .iir import synthesize_iir
from .interpolation import interpolate_shelf_params
from .utils import BinauralCoefficients, CartesianCoord, IIRCoefficients, require_finite

# Set up logging
logger = logging.getLogger(__name__)


def clamp_distance(distance: float, config: Optional[DVFConfig] = None) -> float:
    """
    Limit a source distance to the configured rendering range.

    Sources inside the head are rejected rather than clamped.

    Raises:
        MathError.DomainError: If the distance is non-finite or smaller than the head radius
    """
    config = config or default_config
    distance = require_finite(distance, "Distance")

    if distance < config.head_radius:
        raise MathError.DomainError(
            f"Source at {distance} m is inside the head (radius {config.head_radius} m)")

    clamped = min(max(distance, config.near_field_limit), config.far_field_limit)
    if clamped != distance:
        logger.debug(f"Distance {distance:.3f} m clamped to {clamped:.3f} m")

    return clamped


def calc_dvf_coeffs(alpha: float, distance: float, fs: Optional[float] = None,
                    config: Optional[DVFConfig] = None) -> IIRCoefficients:
    """
    Compute near-field filter coefficients for one ear.

    Args:
        alpha: Ipsilateral angle in degrees (0 = source facing the ear, 180 = opposite ear)
        distance: Source distance from the head centre in meters. Distances
            outside the configured rendering range are clamped to it.
        fs: Sample rate in Hz, defaults to the configured sample rate
        config: Listener and propagation settings, defaults to default_config

    Returns:
        IIRCoefficients(b0, b1, a1) for this ear

    Raises:
        MathError.DomainError: If alpha is outside [0, 180], the source is inside
            the head, or the sample rate is invalid
    """
    config = config or default_config
    fs = config.sample_rate if fs is None else fs

    rho = distance_to_rho(clamp_distance(distance, config), config.head_radius)
    params = interpolate_shelf_params(alpha, rho, config.head_radius, config.speed_of_sound)

    logger.debug(f"DVF alpha={alpha:.2f} deg, rho={rho:.3f}: g0={params.g0:.3f} dB, "
                 f"ginf={params.ginf:.3f} dB, fc={params.fc:.1f} Hz")

    return synthesize_iir(params.g0, params.ginf, params.fc, fs, config.head_radius)


def binaural_dvf_coeffs(azimuth: float, distance: float, fs: Optional[float] = None,
                        elevation: float = 0.0,
                        config: Optional[DVFConfig] = None) -> BinauralCoefficients:
    """
    Compute near-field filter coefficients for both ears of one source.

    Args:
        azimuth: Source azimuth in degrees (0 = front, 90 = left)
        distance: Source distance from the head centre in meters
        fs: Sample rate in Hz, defaults to the configured sample rate
        elevation: Source elevation in degrees (0 = horizon, 90 = up)
        config: Listener and propagation settings, defaults to default_config

    Returns:
        BinauralCoefficients(left, right)
    """
    alpha_left, alpha_right = frontal_to_ipsilateral(azimuth, elevation)

    left = calc_dvf_coeffs(alpha_left, distance, fs, config)
    right = calc_dvf_coeffs(alpha_right, distance, fs, config)

    return BinauralCoefficients(left, right)


def source_dvf_coeffs(position: CartesianCoord, fs: Optional[float] = None,
                      config: Optional[DVFConfig] = None) -> BinauralCoefficients:
    """
    Compute near-field filter coefficients for a source at a Cartesian position.

    Args:
        position: (x, y, z) in meters relative to the head centre (x = left, y = up, z = front)
        fs: Sample rate in Hz, defaults to the configured sample rate
        config: Listener and propagation settings, defaults to default_config

    Returns:
        BinauralCoefficients(left, right)
    """
    azimuth, elevation, distance = convert_to_spherical(position)

    return binaural_dvf_coeffs(math.degrees(azimuth), distance, fs,
                               elevation=math.degrees(elevation), config=config)
