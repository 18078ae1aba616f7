"""Tempo estimation, bar grid and beat-grid helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from beatsync.core.models import BeatRegularity

DEFAULT_BPM = 120
LOW_CONFIDENCE = 0.1
MIN_BPM = 1
BEATS_PER_BAR = 4


def estimate_tempo(beat_times: Sequence[float], default_bpm: float = DEFAULT_BPM) -> float:
    """Unrounded tempo from the median inter-beat interval.

    The median is the upper-middle element of the sorted intervals
    (index ``n // 2``), which stays stable when a few beats are missed or
    doubled.
    """
    if len(beat_times) < 2:
        return float(default_bpm)

    intervals = np.sort(np.diff(np.asarray(beat_times, dtype=np.float64)))
    median = float(intervals[len(intervals) // 2])
    if median <= 0:
        return float(default_bpm)
    return 60.0 / median


def estimate_bpm(
    beat_times: Sequence[float],
    duration: float | None = None,
    default_bpm: int = DEFAULT_BPM,
) -> int:
    """Integer BPM of a beat sequence; *default_bpm* with fewer than 2 beats.

    *duration* is accepted for callers that have it but does not change the
    estimate.
    """
    return round_bpm(estimate_tempo(beat_times, default_bpm))


def round_bpm(tempo: float) -> int:
    """Nearest whole BPM, never below MIN_BPM.

    Beats more than two minutes apart would otherwise round to 0, which has
    no beat length.
    """
    return max(MIN_BPM, int(round(tempo)))


def estimate_confidence(beat_times: Sequence[float], bpm: float) -> float:
    """
    How periodic the beats are at *bpm*, in [0, 1].

    Fewer than 4 beats always gives 0.1. Otherwise the mean relative error
    between each interval and ``60 / bpm`` is mapped to ``1 - 2 * error``
    and floored at 0.
    """
    if len(beat_times) < 4:
        return LOW_CONFIDENCE

    expected = 60.0 / bpm
    intervals = np.diff(np.asarray(beat_times, dtype=np.float64))
    avg_error = float(np.mean(np.abs(intervals - expected) / expected))
    return max(0.0, 1.0 - 2.0 * avg_error)


def beat_interval(bpm: float) -> float:
    """Seconds per beat."""
    return 60.0 / bpm


def bar_interval(bpm: float, beats_per_bar: int = BEATS_PER_BAR) -> float:
    """Seconds per bar."""
    return beat_interval(bpm) * beats_per_bar


def adjust_effect_for_bpm(original_bpm: float, new_bpm: float, effect_duration: float) -> float:
    """Rescale an effect duration tuned at *original_bpm* to *new_bpm*."""
    return effect_duration * original_bpm / new_bpm


def build_bar_grid(
    beat_times: Sequence[float],
    bpm: float,
    beats_per_bar: int = BEATS_PER_BAR,
) -> list[float]:
    """
    Bar boundaries from 0 up to the first one at or past the last beat.

    Boundaries are multiples of the bar length, so ``bars[0] == 0`` and each
    bar is one bar length after the previous one.
    """
    bar_length = bar_interval(bpm, beats_per_bar)
    last_beat = float(beat_times[-1]) if len(beat_times) else 0.0

    bars = [0.0]
    while bars[-1] < last_beat:
        bars.append(len(bars) * bar_length)
    return bars


def closest_time(time: float, grid: Sequence[float]) -> float:
    """Nearest grid entry to *time*, or *time* itself when the grid is empty."""
    if len(grid) == 0:
        return time
    arr = np.asarray(grid, dtype=np.float64)
    return float(arr[np.argmin(np.abs(arr - time))])


def snap_distance(pixels_per_second: float, bpm: float, subdivisions: int) -> float:
    """Width in pixels of one beat subdivision on a timeline."""
    return beat_interval(bpm) / subdivisions * pixels_per_second


def analyze_regularity(beat_times: Sequence[float]) -> BeatRegularity:
    """Classify beat spacing by the coefficient of variation of its intervals."""
    if len(beat_times) < 2:
        return BeatRegularity(
            average_interval=0.0,
            standard_deviation=0.0,
            regularity="very_irregular",
        )

    intervals = np.diff(np.asarray(beat_times, dtype=np.float64))
    mean = float(np.mean(intervals))
    std = float(np.std(intervals))
    cv = std / mean if mean > 0 else float("inf")

    if cv < 0.05:
        regularity = "very_regular"
    elif cv < 0.1:
        regularity = "regular"
    elif cv < 0.2:
        regularity = "irregular"
    else:
        regularity = "very_irregular"

    return BeatRegularity(
        average_interval=mean,
        standard_deviation=std,
        regularity=regularity,
    )


def guess_genre(bpm: float) -> str:
    """Rough genre label for a tempo."""
    if bpm < 70:
        return "Ambient/Downtempo"
    elif bpm < 90:
        return "Hip-Hop/Trap"
    elif bpm < 100:
        return "Lo-fi/Chill"
    elif bpm < 120:
        return "Pop/Rock"
    elif bpm < 130:
        return "House/Dance"
    elif bpm < 140:
        return "Techno/Trance"
    elif bpm < 160:
        return "Drum & Bass"
    elif bpm < 180:
        return "Hardcore/Gabber"
    return "Speedcore"
