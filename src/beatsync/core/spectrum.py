"""
Magnitude spectrum of a sample window.

Both methods return ``ceil(N / 2)`` magnitudes for an N-sample window:

* ``"dft"`` evaluates the discrete transform directly, O(N^2).
* ``"fft"`` uses a real FFT and keeps the same bins. It is the default since
  snapshots are computed once per rendered frame.
"""

import numpy as np

SPECTRUM_METHODS = ("fft", "dft")


def n_bins(window_length: int) -> int:
    """Number of magnitude bins for a window of *window_length* samples."""
    return (window_length + 1) // 2


def dft_magnitudes(window: np.ndarray) -> np.ndarray:
    """Direct discrete transform magnitudes."""
    x = np.asarray(window, dtype=np.float64)
    n = len(x)
    k = np.arange(n_bins(n))[:, np.newaxis]
    angle = -2.0 * np.pi * k * np.arange(n) / n
    real = np.cos(angle) @ x
    imag = np.sin(angle) @ x
    return np.sqrt(real ** 2 + imag ** 2)


def fft_magnitudes(window: np.ndarray) -> np.ndarray:
    """Real-FFT magnitudes truncated to the DFT bin count."""
    x = np.asarray(window, dtype=np.float64)
    return np.abs(np.fft.rfft(x))[: n_bins(len(x))]


def magnitude_spectrum(window: np.ndarray, method: str = "fft") -> np.ndarray:
    """
    Magnitude per frequency bin for *window*.

    Args:
        window: Contiguous block of samples.
        method: "fft" (default) or "dft".

    Returns:
        Array of ``ceil(len(window) / 2)`` magnitudes; empty for an empty window.
    """
    if method not in SPECTRUM_METHODS:
        raise ValueError(f"Unknown spectrum method {method!r}; expected one of {SPECTRUM_METHODS}")
    if len(window) == 0:
        return np.zeros(0, dtype=np.float64)
    if method == "dft":
        return dft_magnitudes(window)
    return fft_magnitudes(window)


def bin_frequencies(n_spectrum_bins: int, sample_rate: int) -> np.ndarray:
    """Centre frequency of each bin, ``k * sr / (2 * n_bins)``."""
    if n_spectrum_bins == 0:
        return np.zeros(0, dtype=np.float64)
    return np.arange(n_spectrum_bins) * sample_rate / (2.0 * n_spectrum_bins)
