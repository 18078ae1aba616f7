"""
Result types produced by the analysis core.

Every result is a frozen dataclass: it is created once by the function that
computes it and never mutated afterwards.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimeSignature:
    """Musical time signature (always 4/4 for now)."""

    numerator: int = 4
    denominator: int = 4

    @property
    def label(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class BPMAnalysis:
    """Tempo and beat grid for a whole track."""

    bpm: int
    confidence: float            # [0,1]
    beat_times: tuple[float, ...]
    bars: tuple[float, ...]      # bar boundaries, bars[0] == 0
    time_signature: TimeSignature = field(default_factory=TimeSignature)


@dataclass(frozen=True)
class FrequencyBand:
    """Normalized energy of one named frequency range."""

    name: str
    range: tuple[float, float]   # (low_hz, high_hz)
    energy: float                # [0,1]
    threshold: float
    triggered: bool


@dataclass(frozen=True)
class AudioAnalysis:
    """Single-instant snapshot used to drive visuals during playback."""

    frequency_bands: tuple[FrequencyBand, ...]
    rms: float
    peak: float
    spectral_centroid: float     # Hz
    zcr: float                   # [0,1]

    def band(self, name: str) -> FrequencyBand | None:
        """Look up a band by name (case-insensitive)."""
        wanted = name.lower()
        for band in self.frequency_bands:
            if band.name.lower() == wanted:
                return band
        return None


@dataclass(frozen=True)
class BeatRegularity:
    """Spread of inter-beat intervals."""

    average_interval: float
    standard_deviation: float
    # "very_regular" | "regular" | "irregular" | "very_irregular"
    regularity: str


@dataclass(frozen=True)
class MusicFeatures:
    """Coarse character of a snapshot, used to suggest effects."""

    bass_heavy: bool
    trebly: bool
    dynamic_range: str           # "low" | "medium" | "high"
    brightness: float
