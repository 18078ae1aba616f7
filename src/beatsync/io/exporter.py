"""
Manifest serialization module.

Exports the beat grid of a track and a per-frame series of instant
snapshots to JSON, aligned to a target FPS, for render jobs and timeline
previews that cannot run the analyzer themselves.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from beatsync.core.analyzer import AudioAnalyzer
from beatsync.core.models import AudioAnalysis, BPMAnalysis
from beatsync.core.waveform import Waveform

logger = logging.getLogger(__name__)


@dataclass
class ManifestMetadata:
    """Metadata header for the manifest."""

    bpm: int
    confidence: float
    duration: float
    sample_rate: int
    fps: int
    n_frames: int
    time_signature: str = "4/4"
    schema_version: str = "1.0"


class AnalysisExporter:
    """
    Exports analysis results to a JSON manifest.

    The manifest holds a ``metadata`` header, the ``beat_grid`` (beat and
    bar times) and one entry per video frame in ``frames``.
    """

    def __init__(self, analyzer: Optional[AudioAnalyzer] = None, precision: int = 4):
        """
        Initialize the exporter.

        Args:
            analyzer: Analyzer used for beat detection and snapshots.
            precision: Decimal places for floating point values.
        """
        self.analyzer = analyzer or AudioAnalyzer()
        self.precision = precision

    def _round(self, value: float) -> float:
        """Round to configured precision."""
        return round(float(value), self.precision)

    def bpm_to_dict(self, analysis: BPMAnalysis) -> dict[str, Any]:
        """Serialize a BPMAnalysis."""
        return {
            "bpm": analysis.bpm,
            "confidence": self._round(analysis.confidence),
            "beat_times": [self._round(t) for t in analysis.beat_times],
            "bars": [self._round(t) for t in analysis.bars],
            "time_signature": {
                "numerator": analysis.time_signature.numerator,
                "denominator": analysis.time_signature.denominator,
            },
        }

    def snapshot_to_dict(self, snapshot: AudioAnalysis) -> dict[str, Any]:
        """Serialize an AudioAnalysis."""
        return {
            "frequency_bands": [
                {
                    "name": band.name,
                    "range": [band.range[0], band.range[1]],
                    "energy": self._round(band.energy),
                    "threshold": band.threshold,
                    "triggered": band.triggered,
                }
                for band in snapshot.frequency_bands
            ],
            "rms": self._round(snapshot.rms),
            "peak": self._round(snapshot.peak),
            "spectral_centroid": self._round(snapshot.spectral_centroid),
            "zcr": self._round(snapshot.zcr),
        }

    def _build_frame(
        self,
        index: int,
        fps: int,
        waveform: Waveform,
        analysis: BPMAnalysis,
    ) -> dict[str, Any]:
        """
        Build a single frame's data dictionary.

        A frame is a beat (or bar) frame when a beat (or bar boundary) falls
        inside ``[t, t + 1/fps)``.
        """
        t = index / fps
        t_next = (index + 1) / fps

        beats = np.asarray(analysis.beat_times)
        bars = np.asarray(analysis.bars)
        is_beat = bool(np.any((beats >= t) & (beats < t_next)))
        is_bar = bool(np.any((bars >= t) & (bars < t_next)))

        # Bar position: index of the bar containing t and progress through it
        bar_index = max(0, int(np.searchsorted(bars, t, side="right")) - 1)
        if bar_index + 1 < len(bars):
            bar_start, bar_end = bars[bar_index], bars[bar_index + 1]
            bar_progress = (t - bar_start) / (bar_end - bar_start)
        else:
            bar_progress = 0.0

        snapshot = self.analyzer.analyze_frequencies(waveform, t)
        frame: dict[str, Any] = {
            "frame_index": index,
            "time": self._round(t),
            "is_beat": is_beat,
            "is_bar": is_bar,
            "bar_index": bar_index,
            "bar_progress": self._round(min(max(bar_progress, 0.0), 1.0)),
        }
        frame.update(self.snapshot_to_dict(snapshot))
        return frame

    def build_manifest(
        self,
        waveform: Waveform,
        fps: int = 30,
        analysis: Optional[BPMAnalysis] = None,
    ) -> dict[str, Any]:
        """
        Build the complete manifest dictionary.

        Args:
            waveform: Decoded track.
            fps: Frames per second of the target video.
            analysis: Precomputed BPMAnalysis (computed here if None).

        Returns:
            Complete manifest dictionary ready for serialization.
        """
        if analysis is None:
            analysis = self.analyzer.detect_bpm(waveform)

        n_frames = int(np.ceil(waveform.duration * fps))
        logger.info(f"Building manifest: {n_frames} frames at {fps}fps")

        metadata = ManifestMetadata(
            bpm=analysis.bpm,
            confidence=self._round(analysis.confidence),
            duration=self._round(waveform.duration),
            sample_rate=waveform.sample_rate,
            fps=fps,
            n_frames=n_frames,
            time_signature=analysis.time_signature.label,
        )

        return {
            "metadata": {
                "bpm": metadata.bpm,
                "confidence": metadata.confidence,
                "duration": metadata.duration,
                "sample_rate": metadata.sample_rate,
                "fps": metadata.fps,
                "n_frames": metadata.n_frames,
                "time_signature": metadata.time_signature,
                "schema_version": metadata.schema_version,
            },
            "beat_grid": self.bpm_to_dict(analysis),
            "frames": [
                self._build_frame(i, fps, waveform, analysis)
                for i in range(n_frames)
            ],
        }

    def export_json(
        self,
        waveform: Waveform,
        output_path: Union[str, Path],
        fps: int = 30,
        analysis: Optional[BPMAnalysis] = None,
        indent: int = 2,
    ) -> Path:
        """
        Export manifest to JSON file.

        Args:
            waveform: Decoded track.
            output_path: Path for output JSON file.
            fps: Frames per second of the target video.
            analysis: Precomputed BPMAnalysis (computed here if None).
            indent: JSON indentation level.

        Returns:
            Path to written file.
        """
        manifest = self.build_manifest(waveform, fps=fps, analysis=analysis)
        output_path = Path(output_path)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=indent)

        return output_path
