"""
Reference Table Generation

Builds tables of shelf parameters and filter coefficients over grids of
angles and normalized distances, for regression testing of host
implementations and for plotting. Tables are plain dictionaries of lists and
can be written to JSON.

Command line usage:
    python -m nearfield.dvf.tables --rho 1.15 1.25 1.57 --theta 0 47.614 180 \
        --fs 44100 --output dvf_tables.json
"""

import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from .config import DVFConfig, default_config
from .exceptions import NearFieldError, ValidationError
from .iir import synthesize_iir
from .interpolation import interpolate_shelf_params
from .shelf_model import grid_angles, shelf_parameter_table

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_RHOS = (1.15, 1.25, 1.57, 2.381, 3.99)
DEFAULT_THETAS = (0.0, 2.3, 47.614, 98.6, 166.2, 180.0)


def generate_reference_tables(rhos: Sequence[float] = DEFAULT_RHOS,
                              thetas: Sequence[float] = DEFAULT_THETAS,
                              fs: Optional[float] = None,
                              config: Optional[DVFConfig] = None) -> Dict[str, Any]:
    """
    Generate shelf parameter and coefficient tables.

    Args:
        rhos: Normalized distances, one table row per value
        thetas: Ipsilateral angles in degrees for the interpolated and IIR tables
        fs: Sample rate in Hz, defaults to the configured sample rate
        config: Listener and propagation settings, defaults to default_config

    Returns:
        Dictionary with keys 'rho', 'theta', 'fs', 'grid', 'interpolated' and
        'iir'. 'grid' holds g0/ginf/fc at the 19 grid angles, 'interpolated'
        holds g0/ginf/fc at each theta, 'iir' holds b0/b1/a1 at each theta.
        Every table is indexed [rho][angle].

    Raises:
        ValidationError: If rhos or thetas is empty
        MathError.DomainError: If any value is out of the model's domain
    """
    config = config or default_config
    fs = config.sample_rate if fs is None else fs

    if len(rhos) == 0 or len(thetas) == 0:
        raise ValidationError("At least one distance and one angle are required")

    grid = {'theta': grid_angles().tolist(), 'g0': [], 'ginf': [], 'fc': []}
    interpolated = {'g0': [], 'ginf': [], 'fc': []}
    iir = {'b0': [], 'b1': [], 'a1': []}

    for rho in rhos:
        table = shelf_parameter_table(rho, config.head_radius, config.speed_of_sound)
        for column, key in enumerate(('g0', 'ginf', 'fc')):
            grid[key].append(table[:, column].tolist())

        params = [interpolate_shelf_params(theta, rho, config.head_radius, config.speed_of_sound)
                  for theta in thetas]
        coeffs = [synthesize_iir(p.g0, p.ginf, p.fc, fs, config.head_radius) for p in params]

        for key in interpolated:
            interpolated[key].append([getattr(p, key) for p in params])
        for key in iir:
            iir[key].append([getattr(c, key) for c in coeffs])

    logger.info(f"Generated tables for {len(rhos)} distances and {len(thetas)} angles at {fs} Hz")

    return {
        'rho': [float(r) for r in rhos],
        'theta': [float(t) for t in thetas],
        'fs': float(fs),
        'grid': grid,
        'interpolated': interpolated,
        'iir': iir
    }


def save_reference_tables(tables: Dict[str, Any], file_path: str) -> None:
    """Write tables produced by generate_reference_tables to a JSON file."""
    logger.info(f"Writing reference tables to {file_path}")
    with open(file_path, 'w') as f:
        json.dump(tables, f, indent=2)


def print_iir_table(tables: Dict[str, Any]) -> None:
    """Print the IIR coefficients of a table set in a readable layout."""
    print(f"DVF coefficients at fs = {tables['fs']:.0f} Hz")
    header = "rho     theta      b0          b1          a1"
    print(header)
    print("-" * len(header))
    iir = tables['iir']
    for i, rho in enumerate(tables['rho']):
        for j, theta in enumerate(tables['theta']):
            print(f"{rho:<7.3f} {theta:<8.3f} {iir['b0'][i][j]:>11.6f} "
                  f"{iir['b1'][i][j]:>11.6f} {iir['a1'][i][j]:>11.6f}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point."""
    import argparse

    parser = argparse.ArgumentParser(description='Near-field DVF reference table generator')

    parser.add_argument('--rho', type=float, nargs='+', default=list(DEFAULT_RHOS),
                        help='Normalized distances (distance / head radius, >= 1)')
    parser.add_argument('--theta', type=float, nargs='+', default=list(DEFAULT_THETAS),
                        help='Ipsilateral angles in degrees (0-180)')
    parser.add_argument('--fs', type=float, default=None, help='Sample rate in Hz')
    parser.add_argument('--config', help='JSON configuration file')
    parser.add_argument('--output', help='Write the tables to this JSON file')

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = DVFConfig.load(args.config) if args.config else default_config
        tables = generate_reference_tables(args.rho, args.theta, args.fs, config)

        if args.output:
            save_reference_tables(tables, args.output)
        else:
            print_iir_table(tables)

    except (NearFieldError, OSError) as e:
        logger.error(f"Table generation failed: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
