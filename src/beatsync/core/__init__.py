"""Core audio analysis modules."""

from beatsync.core.analyzer import AudioAnalyzer
from beatsync.core.waveform import Waveform

__all__ = ["AudioAnalyzer", "Waveform"]
