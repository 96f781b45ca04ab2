"""
Example Usage and Demonstrations

This module contains example functions demonstrating the near-field filter:
coefficients for a source approaching the listener, and a plot of the shelf
responses at several distances.
"""

import numpy as np

from .analysis import dc_gain, frequency_response, nyquist_gain
from .config import DVFConfig
from .core import binaural_dvf_coeffs, calc_dvf_coeffs
from .geometry import ipsilateral_angles


def demonstrate_approaching_source(azimuth: float = 45.0, sample_rate: int = 48000):
    """
    Print the per-ear coefficients of a source moving toward the listener.

    The source travels along a straight line at a fixed azimuth from 1.5 m
    down to the head surface, one update per simulated processing block.
    """
    print(f"Source approaching at azimuth {azimuth:.1f} degrees, fs = {sample_rate} Hz")
    config = DVFConfig(sample_rate=sample_rate)

    distances = np.linspace(1.5, config.head_radius, 8)
    for distance in distances:
        coeffs = binaural_dvf_coeffs(azimuth, distance, config=config)
        print(f"  {distance:5.3f} m  "
              f"L: DC {dc_gain(coeffs.left):+6.2f} dB, Nyq {nyquist_gain(coeffs.left):+6.2f} dB  "
              f"R: DC {dc_gain(coeffs.right):+6.2f} dB, Nyq {nyquist_gain(coeffs.right):+6.2f} dB")

    return distances


def demonstrate_orbiting_source(distance: float = 0.2, n_steps: int = 12, sample_rate: int = 48000):
    """
    Print left-ear coefficients for a source orbiting the head at a fixed distance.
    """
    print(f"Source orbiting at {distance:.2f} m, fs = {sample_rate} Hz")
    config = DVFConfig(sample_rate=sample_rate)

    azimuths = np.linspace(-180.0, 180.0, n_steps, endpoint=False)
    angles = ipsilateral_angles(azimuths)
    for azimuth, (alpha_left, _) in zip(azimuths, angles):
        coeffs = calc_dvf_coeffs(alpha_left, distance, config=config)
        print(f"  az {azimuth:7.1f}  alpha {alpha_left:6.1f}  "
              f"b0 {coeffs.b0:9.6f}  b1 {coeffs.b1:9.6f}  a1 {coeffs.a1:9.6f}")

    return angles


def plot_shelf_responses(alpha: float = 0.0, distances=(0.1, 0.15, 0.25, 0.5, 1.0),
                         sample_rate: int = 48000, output_file: str = None):
    """
    Plot the magnitude responses of the near-field filter at several distances.

    Requires matplotlib (install the 'demo' extra).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for plotting. Install with: pip install matplotlib")

    config = DVFConfig(sample_rate=sample_rate)

    fig, ax = plt.subplots(figsize=(8, 5))
    for distance in distances:
        coeffs = calc_dvf_coeffs(alpha, distance, config=config)
        freqs, magnitude_db = frequency_response(coeffs, sample_rate, n_points=1024)
        ax.semilogx(freqs[1:], magnitude_db[1:], label=f"{distance:.2f} m")

    ax.set_xlabel("Frequency (Hz)")
    ax.set_ylabel("Magnitude (dB)")
    ax.set_title(f"Near-field shelf response, alpha = {alpha:.0f} deg")
    ax.grid(True, which='both', alpha=0.3)
    ax.legend()

    if output_file:
        fig.savefig(output_file, dpi=150)
    else:
        plt.show()

    return fig


def main():
    """Run all examples."""
    demonstrate_approaching_source()
    print()
    demonstrate_orbiting_source()


if __name__ == "__main__":
    main()
