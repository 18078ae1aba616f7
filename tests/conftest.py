"""Shared synthetic-signal fixtures."""

import numpy as np
import pytest

from beatsync.core.waveform import Waveform

TEST_SR = 44100
WINDOW = 1024


def generate_click_track(
    bpm: float,
    duration_seconds: float = 10.0,
    sr: int = TEST_SR,
    offset: float = 0.25,
    click_freq: float = 3000.0,
    click_seconds: float = 0.15,
) -> np.ndarray:
    """Periodic decaying tone bursts, one per beat starting at *offset*.

    Each burst is a full-scale sine with a slow exponential decay, so the
    window that contains its onset holds well over the 0.3 energy threshold
    and energy falls monotonically afterwards.
    """
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    click_samples = int(click_seconds * sr)
    t_click = np.arange(click_samples) / sr
    click = np.sin(2 * np.pi * click_freq * t_click) * np.exp(-t_click * 5)

    beat_interval = 60.0 / bpm
    time = offset
    while time < duration_seconds:
        start = int(round(time * sr))
        end = min(start + click_samples, n_samples)
        audio[start:end] += click[: end - start]
        time += beat_interval

    return audio


def bin_sine(k: int, amplitude: float = 1.0, duration: float = 1.0, sr: int = TEST_SR) -> np.ndarray:
    """Sine at the centre of FFT bin *k* for a WINDOW-sample window."""
    freq = k * sr / WINDOW
    t = np.arange(int(duration * sr)) / sr
    return (amplitude * np.sin(2 * np.pi * freq * t)).astype(np.float32)


@pytest.fixture
def click_120():
    """10 s click track at 120 BPM."""
    return Waveform.from_array(generate_click_track(bpm=120), TEST_SR)


@pytest.fixture
def silence():
    """2 s of digital silence."""
    return Waveform.from_array(np.zeros(2 * TEST_SR, dtype=np.float32), TEST_SR)


@pytest.fixture
def impulse_train():
    """2 s buffer with unit impulses every 0.5 s (at 0, 0.5, 1.0, 1.5 s)."""
    y = np.zeros(2 * TEST_SR, dtype=np.float32)
    y[:: TEST_SR // 2] = 1.0
    return Waveform.from_array(y, TEST_SR)


@pytest.fixture
def noise():
    """3 s of seeded white noise at half scale."""
    rng = np.random.default_rng(1234)
    y = rng.uniform(-0.5, 0.5, 3 * TEST_SR).astype(np.float32)
    return Waveform.from_array(y, TEST_SR)
