"""
Near-Field Distance Variation Function (DVF) Package

Converts the position of a nearby sound source into the coefficients of a
first-order high-shelving filter that renders the spectral coloration of a
source close to the listener's head, following the near-field filter model
of Spagnol, Tavazzi and Avanzini (2017).
"""

from .shelf_model import evaluate_shelf_params, shelf_parameter_table, grid_angles
from .interpolation import interpolate_shelf_params, bracket_grid_angle
from .iir import synthesize_iir
from .core import calc_dvf_coeffs, binaural_dvf_coeffs, source_dvf_coeffs, clamp_distance
from .geometry import frontal_to_ipsilateral, distance_to_rho
from .utils import ShelfParams, IIRCoefficients, BinauralCoefficients, Ear
from .config import DVFConfig
from .exceptions import NearFieldError, MathError

__version__ = '0.1.0'
