"""
Pytest configuration file for near-field filter tests.
"""

import json
import os
import pytest
from nearfield.dvf.config import DVFConfig


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return os.path.join(os.path.dirname(__file__), 'fixtures')


def _load_fixture(fixtures_dir, name):
    with open(os.path.join(fixtures_dir, name), 'r') as f:
        return json.load(f)


@pytest.fixture
def shelf_reference(fixtures_dir):
    """Reference shelf parameters at the 19 grid angles for five distances."""
    return _load_fixture(fixtures_dir, 'shelf_params.json')


@pytest.fixture
def interpolated_reference(fixtures_dir):
    """Reference shelf parameters at off-grid angles."""
    return _load_fixture(fixtures_dir, 'interpolated_params.json')


@pytest.fixture
def iir_reference(fixtures_dir):
    """Reference filter coefficients at 44.1 kHz."""
    return _load_fixture(fixtures_dir, 'iir_coefficients.json')


@pytest.fixture
def test_config():
    """Return a test configuration with predefined settings."""
    return DVFConfig(sample_rate=44100)
