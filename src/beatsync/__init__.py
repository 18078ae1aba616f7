"""Tempo, beat grid and spectrum analysis for music-synced video editing."""

from beatsync.core.analyzer import AudioAnalyzer, analyze_frequencies, detect_bpm
from beatsync.core.models import AudioAnalysis, BPMAnalysis, FrequencyBand, TimeSignature
from beatsync.core.waveform import Waveform
from beatsync.io.exporter import AnalysisExporter
from beatsync.io.loader import DecodeError, load_waveform

__version__ = "0.1.0"
__all__ = [
    "AudioAnalyzer",
    "detect_bpm",
    "analyze_frequencies",
    "AudioAnalysis",
    "BPMAnalysis",
    "FrequencyBand",
    "TimeSignature",
    "Waveform",
    "AnalysisExporter",
    "DecodeError",
    "load_waveform",
]
