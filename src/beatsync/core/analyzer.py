"""
Audio analysis entry points.

Two operations are exposed to the editor:

* ``detect_bpm`` runs once per loaded track and returns the tempo, beat
  times and bar grid used for beat snapping.
* ``analyze_frequencies`` runs once per displayed frame and returns a
  snapshot of the audio at the playback position.

The analyzer only holds configuration; every call is independent, so one
instance can serve concurrent snapshot calls.
"""

import logging
from typing import Optional

import numpy as np

from beatsync.config import Settings, settings as default_settings
from beatsync.core.bands import BandTable
from beatsync.core.beats import detect_beats
from beatsync.core.filters import high_pass_filter
from beatsync.core.models import AudioAnalysis, BPMAnalysis, TimeSignature
from beatsync.core.snapshot import build_snapshot
from beatsync.core.spectrum import magnitude_spectrum
from beatsync.core.tempo import (
    BEATS_PER_BAR,
    build_bar_grid,
    estimate_confidence,
    estimate_tempo,
    round_bpm,
)
from beatsync.core.waveform import Waveform

logger = logging.getLogger(__name__)


class AudioAnalyzer:
    """
    Derives beat grids and instant snapshots from a decoded waveform.

    Features are computed from the first channel only; the waveform is never
    modified.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        bands: Optional[BandTable] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            settings: Detector and snapshot parameters (default: global settings).
            bands: Band table for snapshots. Overrides ``settings.bands`` so
                   several presets can be analysed side by side.
        """
        self.settings = settings or default_settings
        self.bands = dict(bands if bands is not None else self.settings.bands)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def window_at(self, waveform: Waveform, at_time: float) -> np.ndarray:
        """
        Sample window starting at *at_time* seconds.

        The window always has ``snapshot_window`` samples: negative times
        start at 0 and windows running past the end are zero-padded.
        """
        size = self.settings.snapshot_window
        start = waveform.sample_index(at_time)
        window = waveform.samples[start : start + size]
        return np.pad(window, (0, size - len(window)))

    # ------------------------------------------------------------------
    # Tempo and beat grid
    # ------------------------------------------------------------------

    def detect_bpm(self, waveform: Waveform) -> BPMAnalysis:
        """
        Estimate tempo, beat times and bar grid for a whole track.

        Never raises for short or silent input: fewer than 2 beats yields the
        default tempo and fewer than 4 beats a confidence of 0.1, so callers
        should treat low confidence as "no reliable tempo".

        Args:
            waveform: Decoded track.

        Returns:
            BPMAnalysis with a 4/4 bar grid.
        """
        cfg = self.settings
        sr = waveform.sample_rate
        logger.info(f"Detecting BPM over {waveform.duration:.1f}s of audio at {sr}Hz")

        filtered = high_pass_filter(waveform.samples, sr, cutoff=cfg.highpass_cutoff_hz)
        beat_times = detect_beats(
            filtered,
            sr,
            window_size=cfg.window_size,
            hop_size=cfg.hop_size,
            threshold=cfg.energy_threshold,
            min_interval=cfg.min_beat_interval,
        )
        logger.debug(f"  {len(beat_times)} beats detected")

        tempo = estimate_tempo(beat_times, default_bpm=cfg.default_bpm)
        bpm = round_bpm(tempo)
        confidence = estimate_confidence(beat_times, tempo)
        if len(beat_times) < 2:
            logger.debug(f"  Too few beats; falling back to {bpm} BPM")

        bars = build_bar_grid(beat_times, bpm, beats_per_bar=BEATS_PER_BAR)
        logger.info(f"  {bpm} BPM (confidence {confidence:.2f}), {len(bars)} bars")

        return BPMAnalysis(
            bpm=bpm,
            confidence=confidence,
            beat_times=tuple(beat_times),
            bars=tuple(bars),
            time_signature=TimeSignature(numerator=BEATS_PER_BAR, denominator=4),
        )

    # ------------------------------------------------------------------
    # Instant snapshots
    # ------------------------------------------------------------------

    def analyze_window(self, window: np.ndarray, sample_rate: int) -> AudioAnalysis:
        """Snapshot of an arbitrary sample window."""
        cfg = self.settings
        spectrum = magnitude_spectrum(window, method=cfg.spectrum_method)
        return build_snapshot(
            window,
            spectrum,
            sample_rate,
            self.bands,
            band_threshold=cfg.band_threshold,
            band_scale=cfg.band_scale,
        )

    def analyze_frequencies(self, waveform: Waveform, at_time: float) -> AudioAnalysis:
        """
        Snapshot of the audio at a playback position.

        Args:
            waveform: Decoded track.
            at_time: Playback position in seconds.

        Returns:
            AudioAnalysis for the window starting at *at_time*.
        """
        window = self.window_at(waveform, at_time)
        return self.analyze_window(window, waveform.sample_rate)


_default_analyzer: Optional[AudioAnalyzer] = None


def _get_default_analyzer() -> AudioAnalyzer:
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = AudioAnalyzer()
    return _default_analyzer


def detect_bpm(waveform: Waveform) -> BPMAnalysis:
    """Tempo and beat grid using the default settings."""
    return _get_default_analyzer().detect_bpm(waveform)


def analyze_frequencies(waveform: Waveform, at_time: float) -> AudioAnalysis:
    """Instant snapshot using the default settings."""
    return _get_default_analyzer().analyze_frequencies(waveform, at_time)
