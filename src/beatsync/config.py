"""Application configuration."""

from pydantic_settings import BaseSettings

# Band tables map band name -> (low_hz, high_hz). Order is preserved in output.
SIMPLE_BANDS: dict[str, tuple[float, float]] = {
    "bass": (20.0, 250.0),
    "mid": (250.0, 4000.0),
    "treble": (4000.0, 20000.0),
}

DETAILED_BANDS: dict[str, tuple[float, float]] = {
    "sub_bass": (20.0, 60.0),
    "kick": (60.0, 100.0),
    "snare": (150.0, 300.0),
    "vocals": (300.0, 3000.0),
    "presence": (3000.0, 8000.0),
    "brilliance": (8000.0, 20000.0),
}

BAND_PRESETS: dict[str, dict[str, tuple[float, float]]] = {
    "simple": SIMPLE_BANDS,
    "detailed": DETAILED_BANDS,
}


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # High-pass filter
    highpass_cutoff_hz: float = 100.0

    # Beat detection
    window_size: int = 1024
    hop_size: int = 512
    energy_threshold: float = 0.3
    min_beat_interval: float = 0.1  # seconds

    # Tempo
    default_bpm: int = 120

    # Instant snapshots
    snapshot_window: int = 1024
    spectrum_method: str = "fft"  # "fft" | "dft"
    band_threshold: float = 0.7
    band_scale: float = 100.0
    bands: dict[str, tuple[float, float]] = SIMPLE_BANDS

    model_config = {"env_prefix": "BEATSYNC_"}


settings = Settings()
