"""Signal filtering utilities."""

from __future__ import annotations

import numpy as np
from scipy.signal import lfilter


def highpass_alpha(sample_rate: int, cutoff: float) -> float:
    """Smoothing coefficient of a one-pole RC high-pass filter."""
    rc = 1.0 / (2.0 * np.pi * cutoff)
    dt = 1.0 / sample_rate
    return rc / (rc + dt)


def high_pass_filter(
    samples: np.ndarray,
    sample_rate: int,
    cutoff: float = 100.0,
) -> np.ndarray:
    """Apply a one-pole RC high-pass filter.

    Computes ``y[0] = x[0]`` and ``y[i] = alpha * (y[i-1] + x[i] - x[i-1])``
    as a single linear-filter scan, so the output has the input's length and
    depends only on the input.

    Parameters
    ----------
    samples:
        Input audio signal.
    sample_rate:
        Sample rate in Hz.
    cutoff:
        Cutoff frequency in Hz. Defaults to 100 Hz, which removes most of the
        sustained low end and leaves percussive transients.
    """
    x = np.asarray(samples, dtype=np.float64)
    if len(x) == 0:
        return x.copy()

    alpha = highpass_alpha(sample_rate, cutoff)
    b = [alpha, -alpha]
    a = [1.0, -alpha]
    # Initial state makes the first output equal the first input.
    zi = np.array([(1.0 - alpha) * x[0]])
    y, _ = lfilter(b, a, x, zi=zi)
    return y
