"""
Decoded waveform container.

A Waveform is produced once at decode time and is read-only for the
analysis core. Only the first channel of multichannel audio is kept.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Waveform:
    """Mono sample buffer with its sample rate and duration."""

    samples: np.ndarray
    sample_rate: int
    duration: float

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if np.ndim(self.samples) != 1:
            raise ValueError(
                f"samples must be a 1-D array, got shape {np.shape(self.samples)}"
            )

    @classmethod
    def from_array(cls, samples, sample_rate: int) -> "Waveform":
        """
        Build a Waveform from raw samples.

        Multichannel input shaped (channels, n) keeps the first channel.
        Duration is derived from the sample count.
        """
        y = np.asarray(samples, dtype=np.float32)
        if y.ndim == 2:
            y = y[0]
        y = np.array(y, copy=True)
        y.setflags(write=False)
        return cls(samples=y, sample_rate=int(sample_rate), duration=len(y) / sample_rate)

    @property
    def n_samples(self) -> int:
        """Total number of samples in the buffer."""
        return len(self.samples)

    def sample_index(self, time_sec: float) -> int:
        """Sample index at *time_sec*, clamped to be non-negative."""
        return max(0, int(np.floor(time_sec * self.sample_rate)))


def peak_envelope(waveform: Waveform, width: int) -> np.ndarray:
    """
    Min/max envelope for drawing a waveform at *width* pixels.

    Returns ``2 * width`` values alternating block maximum (even index) and
    block minimum (odd index). Both start from 0, so a silent block is 0/0.
    """
    n_blocks = 2 * width
    peaks = np.zeros(n_blocks, dtype=np.float32)
    block_size = waveform.n_samples // n_blocks if n_blocks else 0
    if block_size == 0:
        return peaks

    blocks = waveform.samples[: block_size * n_blocks].reshape(n_blocks, block_size)
    maxima = np.maximum(blocks.max(axis=1), 0.0)
    minima = np.minimum(blocks.min(axis=1), 0.0)
    peaks[0::2] = maxima[0::2]
    peaks[1::2] = minima[1::2]
    return peaks
