"""Frequency band energies from a magnitude spectrum."""

from __future__ import annotations

from typing import Mapping

import numpy as np

from beatsync.core.models import FrequencyBand

BandTable = Mapping[str, tuple[float, float]]

DEFAULT_THRESHOLD = 0.7
DEFAULT_SCALE = 100.0


def band_energy(
    spectrum: np.ndarray,
    sample_rate: int,
    low_hz: float,
    high_hz: float,
    scale: float = DEFAULT_SCALE,
) -> float:
    """
    Normalized mean magnitude between *low_hz* and *high_hz*.

    Both edge bins are included. The upper bin is clamped to the spectrum;
    a range that starts above it has zero energy.
    """
    n = len(spectrum)
    if n == 0:
        return 0.0

    bin_size = (sample_rate / 2.0) / n
    low_bin = max(0, int(np.floor(low_hz / bin_size)))
    high_bin = min(int(np.floor(high_hz / bin_size)), n - 1)
    if low_bin > high_bin:
        return 0.0

    mean = float(np.mean(spectrum[low_bin : high_bin + 1]))
    return min(mean / scale, 1.0)


def analyze_bands(
    spectrum: np.ndarray,
    sample_rate: int,
    bands: BandTable,
    threshold: float = DEFAULT_THRESHOLD,
    scale: float = DEFAULT_SCALE,
) -> list[FrequencyBand]:
    """
    Energy and trigger state for every band in *bands*.

    Args:
        spectrum: Magnitude spectrum covering 0 Hz to Nyquist.
        sample_rate: Sample rate of the analysed window.
        bands: Ordered mapping of band name to (low_hz, high_hz).
        threshold: Energy above which a band counts as triggered.
        scale: Divisor that maps raw mean magnitude onto [0, 1].

    Returns:
        One FrequencyBand per table entry, in table order.
    """
    result = []
    for name, (low_hz, high_hz) in bands.items():
        energy = band_energy(spectrum, sample_rate, low_hz, high_hz, scale)
        result.append(
            FrequencyBand(
                name=name,
                range=(float(low_hz), float(high_hz)),
                energy=energy,
                threshold=threshold,
                triggered=energy > threshold,
            )
        )
    return result
