"""
Configuration Management Module

This module provides centralized configuration management for the near-field
filter, including physical constants, default settings, and configuration
utilities.
"""

from typing import Dict, Any
from dataclasses import dataclass
import json
import logging
import math

from .exceptions import ConfigurationError, FileFormatError

# Set up logging
logger = logging.getLogger(__name__)


# =====================================================================================
# Constants
# =====================================================================================

# Physics constants
SPEED_OF_SOUND = 343.0  # m/s at room temperature

# Head geometry
DEFAULT_HEAD_RADIUS = 0.09096  # m, mean listener head radius (Algazi et al. 2001)
REFERENCE_HEAD_RADIUS = 0.0875  # m, head radius the regression table was fitted for

# Default sample rates
DEFAULT_SAMPLE_RATE = 48000  # Hz

# Angular grid of the shelf parameter table
GRID_STEP_DEGREES = 10.0
NUM_GRID_ANGLES = 19  # 0, 10, ..., 180 degrees
MAX_ANGLE_DEGREES = GRID_STEP_DEGREES * (NUM_GRID_ANGLES - 1)

# Smallest valid normalized distance (source on the head surface)
MIN_RHO = 1.0

# Rendering range of the binaural front end
DEFAULT_NEAR_FIELD_LIMIT = 0.15  # m, closer sources are rendered at this distance
DEFAULT_FAR_FIELD_LIMIT = 3.0  # m, the filter is close to flat beyond this distance


# =====================================================================================
# Configuration Classes
# =====================================================================================

@dataclass
class DVFConfig:
    """Configuration for near-field (distance variation function) filtering"""

    # Listener geometry
    head_radius: float = DEFAULT_HEAD_RADIUS

    # Propagation
    speed_of_sound: float = SPEED_OF_SOUND

    # Host audio settings
    sample_rate: float = DEFAULT_SAMPLE_RATE

    # Rendering range
    near_field_limit: float = DEFAULT_NEAR_FIELD_LIMIT
    far_field_limit: float = DEFAULT_FAR_FIELD_LIMIT

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not math.isfinite(self.head_radius) or self.head_radius <= 0:
            raise ConfigurationError(f"Head radius must be positive, got {self.head_radius}")

        if not math.isfinite(self.speed_of_sound) or self.speed_of_sound <= 0:
            raise ConfigurationError(f"Speed of sound must be positive, got {self.speed_of_sound}")

        if not math.isfinite(self.sample_rate) or self.sample_rate <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {self.sample_rate}")

        if not math.isfinite(self.far_field_limit) or not (
                self.head_radius <= self.near_field_limit < self.far_field_limit):
            raise ConfigurationError(
                f"Rendering range must satisfy head_radius <= near < far, got "
                f"near={self.near_field_limit}, far={self.far_field_limit}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization"""
        return {
            'head_radius': self.head_radius,
            'speed_of_sound': self.speed_of_sound,
            'sample_rate': self.sample_rate,
            'near_field_limit': self.near_field_limit,
            'far_field_limit': self.far_field_limit
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'DVFConfig':
        """Create configuration from dictionary"""
        unknown = set(config_dict) - {'head_radius', 'speed_of_sound', 'sample_rate',
                                      'near_field_limit', 'far_field_limit'}
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

        return cls(
            head_radius=config_dict.get('head_radius', DEFAULT_HEAD_RADIUS),
            speed_of_sound=config_dict.get('speed_of_sound', SPEED_OF_SOUND),
            sample_rate=config_dict.get('sample_rate', DEFAULT_SAMPLE_RATE),
            near_field_limit=config_dict.get('near_field_limit', DEFAULT_NEAR_FIELD_LIMIT),
            far_field_limit=config_dict.get('far_field_limit', DEFAULT_FAR_FIELD_LIMIT)
        )

    def save(self, file_path: str) -> None:
        """Save configuration to file"""
        logger.info(f"Saving configuration to {file_path}")
        with open(file_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, file_path: str) -> 'DVFConfig':
        """Load configuration from file"""
        logger.info(f"Loading configuration from {file_path}")
        with open(file_path, 'r') as f:
            try:
                config_dict = json.load(f)
            except json.JSONDecodeError as e:
                raise FileFormatError(f"Invalid configuration file {file_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise FileFormatError(f"Configuration file {file_path} must contain a JSON object")

        return cls.from_dict(config_dict)


# Create a default configuration
default_config = DVFConfig()
