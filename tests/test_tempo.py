"""Tests for tempo estimation, confidence and the bar grid."""

import numpy as np
import pytest

from beatsync.core.tempo import (
    adjust_effect_for_bpm,
    analyze_regularity,
    bar_interval,
    beat_interval,
    build_bar_grid,
    closest_time,
    estimate_bpm,
    estimate_confidence,
    estimate_tempo,
    guess_genre,
    round_bpm,
    snap_distance,
)


def _periodic(ibi: float, n: int, start: float = 0.0) -> list[float]:
    return [start + i * ibi for i in range(n)]


class TestEstimateBpm:
    def test_default_with_no_beats(self):
        assert estimate_bpm([]) == 120

    def test_default_with_one_beat(self):
        assert estimate_bpm([1.0]) == 120

    def test_two_beats(self):
        assert estimate_bpm([0.0, 0.5]) == 120

    def test_periodic(self):
        assert estimate_bpm(_periodic(0.6, 16)) == 100

    def test_median_uses_upper_middle_interval(self):
        # Sorted intervals 0.4, 0.5, 0.6, 0.75 -> index 2 -> 0.6 s -> 100 BPM
        beats = np.cumsum([0.0, 0.5, 0.75, 0.4, 0.6]).tolist()
        assert estimate_bpm(beats) == 100

    def test_robust_to_missed_beat(self):
        beats = _periodic(0.5, 12)
        del beats[5]
        assert estimate_bpm(beats) == 120

    def test_returns_int(self):
        assert isinstance(estimate_bpm(_periodic(0.47, 10)), int)

    def test_unrounded_tempo(self):
        assert estimate_tempo(_periodic(0.47, 10)) == pytest.approx(60 / 0.47)

    def test_duration_is_informational(self):
        beats = _periodic(0.5, 8)
        assert estimate_bpm(beats, duration=4.0) == estimate_bpm(beats)

    def test_beats_minutes_apart_floor_at_one(self):
        # 130 s between beats is under 0.5 BPM
        assert estimate_bpm([0.0, 130.0]) == 1
        assert round_bpm(60.0 / 130.0) == 1


class TestEstimateConfidence:
    @pytest.mark.parametrize("n", [0, 1, 2, 3])
    def test_low_confidence_below_four_beats(self, n):
        assert estimate_confidence(_periodic(0.5, n), 120) == 0.1

    def test_perfectly_periodic(self):
        assert estimate_confidence(_periodic(0.5, 16), 120) == pytest.approx(1.0)

    def test_jitter_lowers_confidence(self):
        rng = np.random.default_rng(7)
        clean = np.array(_periodic(0.5, 32))
        jittered = clean + rng.uniform(-0.05, 0.05, len(clean))
        jittered.sort()
        assert estimate_confidence(jittered, 120) < estimate_confidence(clean, 120)

    def test_floored_at_zero(self):
        beats = [0.0, 0.1, 2.0, 2.1, 5.0]
        assert estimate_confidence(beats, 120) == 0.0

    def test_formula(self):
        beats = [0.0, 0.5, 1.0, 1.6]
        errors = [0.0, 0.0, 0.1 / 0.5]
        expected = 1.0 - 2.0 * np.mean(errors)
        assert estimate_confidence(beats, 120) == pytest.approx(expected)


class TestBarGrid:
    def test_starts_at_zero(self):
        assert build_bar_grid(_periodic(0.5, 10, start=0.3), 120)[0] == 0.0

    def test_spacing(self):
        bars = build_bar_grid(_periodic(0.5, 20), 120)
        np.testing.assert_allclose(np.diff(bars), 4 * 60 / 120)

    def test_covers_last_beat(self):
        beats = _periodic(0.5, 20)  # last beat at 9.5 s
        bars = build_bar_grid(beats, 120)
        assert bars[-1] >= beats[-1]
        assert bars[-2] < beats[-1]

    def test_no_beats(self):
        assert build_bar_grid([], 120) == [0.0]

    def test_slowest_tempo(self):
        bpm = estimate_bpm([0.0, 130.0])
        assert build_bar_grid([0.0, 130.0], bpm) == [0.0, 240.0]

    def test_strictly_increasing(self):
        bars = build_bar_grid(_periodic(0.37, 50), 97)
        assert np.all(np.diff(bars) > 0)


class TestGridHelpers:
    def test_intervals(self):
        assert beat_interval(120) == pytest.approx(0.5)
        assert bar_interval(120) == pytest.approx(2.0)
        assert bar_interval(120, beats_per_bar=3) == pytest.approx(1.5)

    def test_closest_time(self):
        assert closest_time(1.2, [0.0, 1.0, 2.0]) == 1.0
        assert closest_time(1.7, [0.0, 1.0, 2.0]) == 2.0

    def test_closest_time_empty_grid(self):
        assert closest_time(3.3, []) == 3.3

    def test_snap_distance(self):
        # 0.5 s per beat, quarter subdivisions, 100 px/s
        assert snap_distance(100, 120, 4) == pytest.approx(12.5)

    def test_adjust_effect_for_bpm(self):
        assert adjust_effect_for_bpm(120, 60, 0.5) == pytest.approx(1.0)
        assert adjust_effect_for_bpm(100, 150, 3.0) == pytest.approx(2.0)
        assert adjust_effect_for_bpm(128, 128, 0.25) == pytest.approx(0.25)


class TestRegularity:
    def test_very_regular(self):
        result = analyze_regularity(_periodic(0.5, 10))
        assert result.regularity == "very_regular"
        assert result.average_interval == pytest.approx(0.5)
        assert result.standard_deviation == pytest.approx(0.0, abs=1e-12)

    def test_irregular(self):
        result = analyze_regularity(np.cumsum([0.0, 0.5, 0.3, 0.7, 0.4, 0.6]).tolist())
        assert result.regularity == "very_irregular"

    def test_too_few_beats(self):
        result = analyze_regularity([1.0])
        assert result.regularity == "very_irregular"
        assert result.average_interval == 0.0


@pytest.mark.parametrize(
    "bpm,genre",
    [(60, "Ambient/Downtempo"), (125, "House/Dance"), (174, "Hardcore/Gabber"), (200, "Speedcore")],
)
def test_guess_genre(bpm, genre):
    assert guess_genre(bpm) == genre
