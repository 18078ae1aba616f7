"""
Energy-based beat detection.

The detector slices a (high-pass filtered) signal into overlapping windows,
picks windows whose mean-square energy is a strict local maximum above an
absolute threshold, and then drops beats that follow the previously kept
beat too closely.
"""

from __future__ import annotations

from typing import Iterable

import librosa
import numpy as np


def window_energies(
    samples: np.ndarray,
    window_size: int = 1024,
    hop_size: int = 512,
) -> np.ndarray:
    """
    Mean-square energy of every hop-aligned window.

    A window is emitted for each start ``i * hop_size`` that leaves a full
    ``window_size`` samples; shorter input yields an empty array.

    Args:
        samples: Audio signal.
        window_size: Window length in samples.
        hop_size: Distance between window starts in samples.

    Returns:
        Energy per window, ``sum(x**2) / window_size``.
    """
    y = np.asarray(samples, dtype=np.float64)
    if len(y) < window_size:
        return np.zeros(0, dtype=np.float64)

    frames = librosa.util.frame(y, frame_length=window_size, hop_length=hop_size)
    return np.sum(frames ** 2, axis=0) / window_size


def pick_energy_peaks(energies: np.ndarray, threshold: float = 0.3) -> np.ndarray:
    """
    Indices of strict local energy maxima above *threshold*.

    The first and last windows have only one neighbour and are never picked.
    """
    e = np.asarray(energies)
    if len(e) < 3:
        return np.zeros(0, dtype=int)

    current = e[1:-1]
    is_peak = (current > e[:-2]) & (current > e[2:]) & (current > threshold)
    return np.flatnonzero(is_peak) + 1


def normalize_beats(times: Iterable[float], min_interval: float = 0.1) -> list[float]:
    """
    Drop beats closer than *min_interval* to the last kept beat.

    The gap is measured from the last beat that survived, not from the
    previous raw candidate, so a dense cluster keeps every beat that is at
    least *min_interval* after the one before it in the output.
    """
    kept: list[float] = []
    for t in times:
        if not kept or t - kept[-1] >= min_interval:
            kept.append(float(t))
    return kept


def detect_beats(
    filtered: np.ndarray,
    sample_rate: int,
    window_size: int = 1024,
    hop_size: int = 512,
    threshold: float = 0.3,
    min_interval: float = 0.1,
) -> list[float]:
    """
    Detect beat timestamps in a filtered signal.

    Args:
        filtered: High-pass filtered audio.
        sample_rate: Sample rate in Hz.
        window_size: Energy window length in samples.
        hop_size: Hop between windows in samples.
        threshold: Minimum window energy for a beat.
        min_interval: Minimum spacing between kept beats, in seconds.

    Returns:
        Strictly increasing beat times in seconds.
    """
    energies = window_energies(filtered, window_size, hop_size)
    peaks = pick_energy_peaks(energies, threshold)
    candidates = peaks * hop_size / sample_rate
    return normalize_beats(candidates, min_interval)
