"""
Per-instant audio snapshot.

Combines loudness (RMS, peak), brightness (spectral centroid), noisiness
(zero-crossing rate) and band energies of one window into an AudioAnalysis.
Everything here is a pure function of the window and its spectrum.
"""

from typing import Iterable

import numpy as np

from beatsync.core.bands import DEFAULT_SCALE, DEFAULT_THRESHOLD, BandTable, analyze_bands
from beatsync.core.models import AudioAnalysis, FrequencyBand, MusicFeatures
from beatsync.core.spectrum import bin_frequencies

BASS_BAND_NAMES = ("bass", "sub_bass", "kick")
TREBLE_BAND_NAMES = ("treble", "highs", "brilliance", "presence")

# Band name -> effect suggestion shown when that band triggers
EFFECT_SUGGESTIONS = {
    **dict.fromkeys(("bass", "sub_bass", "kick"), "Low end triggered: screen shake or flash effects work well"),
    **dict.fromkeys(("treble", "highs", "brilliance", "presence"), "Highs triggered: try particles or glow effects"),
    **dict.fromkeys(("mid", "mids", "vocals"), "Mids triggered: color grading or a gentle zoom fits"),
    "snare": "Snare triggered: quick cuts or flashes emphasize the rhythm",
}


def rms(window: np.ndarray) -> float:
    if len(window) == 0:
        return 0.0
    x = np.asarray(window, dtype=np.float64)
    return float(np.sqrt(np.mean(x ** 2)))


def peak(window: np.ndarray) -> float:
    if len(window) == 0:
        return 0.0
    return float(np.max(np.abs(window)))


def spectral_centroid(spectrum: np.ndarray, sample_rate: int) -> float:
    """Magnitude-weighted mean frequency in Hz; 0 for an all-zero spectrum."""
    total = float(np.sum(spectrum))
    if total <= 0:
        return 0.0
    freqs = bin_frequencies(len(spectrum), sample_rate)
    return float(np.sum(freqs * spectrum) / total)


def zero_crossing_rate(window: np.ndarray) -> float:
    """Sign changes between adjacent samples divided by the window length.

    Zero counts as positive, so silence has no crossings.
    """
    if len(window) == 0:
        return 0.0
    non_negative = np.asarray(window) >= 0
    crossings = np.count_nonzero(non_negative[1:] != non_negative[:-1])
    return crossings / len(window)


def build_snapshot(
    window: np.ndarray,
    spectrum: np.ndarray,
    sample_rate: int,
    bands: BandTable,
    band_threshold: float = DEFAULT_THRESHOLD,
    band_scale: float = DEFAULT_SCALE,
) -> AudioAnalysis:
    """
    Build an AudioAnalysis from a window and its magnitude spectrum.

    Args:
        window: Samples the spectrum was computed from.
        spectrum: Output of magnitude_spectrum() for the same window.
        sample_rate: Sample rate in Hz.
        bands: Band table (name -> (low_hz, high_hz)).
        band_threshold: Trigger threshold stored on every band.
        band_scale: Magnitude divisor for band normalization.
    """
    frequency_bands = analyze_bands(
        spectrum,
        sample_rate,
        bands,
        threshold=band_threshold,
        scale=band_scale,
    )
    return AudioAnalysis(
        frequency_bands=tuple(frequency_bands),
        rms=rms(window),
        peak=peak(window),
        spectral_centroid=spectral_centroid(spectrum, sample_rate),
        zcr=zero_crossing_rate(window),
    )


def music_features(analysis: AudioAnalysis) -> MusicFeatures:
    """Summarize a snapshot as bass-heavy / trebly / dynamic range / brightness."""

    def _mean_energy(names):
        energies = [b.energy for b in analysis.frequency_bands if b.name.lower() in names]
        return float(np.mean(energies)) if energies else 0.0

    bass = _mean_energy(BASS_BAND_NAMES)
    treble = _mean_energy(TREBLE_BAND_NAMES)

    crest = analysis.peak - analysis.rms
    if crest < 0.3:
        dynamic_range = "low"
    elif crest < 0.6:
        dynamic_range = "medium"
    else:
        dynamic_range = "high"

    return MusicFeatures(
        bass_heavy=bass > 0.6,
        trebly=treble > 0.6,
        dynamic_range=dynamic_range,
        brightness=analysis.spectral_centroid,
    )


def suggest_effects(bands: Iterable[FrequencyBand]) -> list[str]:
    """
    Effect suggestions for the triggered bands, without duplicates.

    Suggestions keep the order of the first band that produced them. Bands
    with no known suggestion are ignored.
    """
    suggestions: list[str] = []
    for band in bands:
        if not band.triggered:
            continue
        suggestion = EFFECT_SUGGESTIONS.get(band.name.lower())
        if suggestion is not None and suggestion not in suggestions:
            suggestions.append(suggestion)
    return suggestions
