"""Tests for heuristic tempo estimation."""

import pytest

from runbeats.analysis.estimator import (
    DEFAULT_WEIGHTS,
    calculate_median_tempo,
    candidate_tempos,
    estimate_tempo,
    genre_weights,
    seeded_random,
    select_weighted,
)
from runbeats.models import AnalysisSection, Artist, RawTrack


def make_raw(track_id: str, name: str = "Song", artist: str = "Someone") -> RawTrack:
    return RawTrack(
        id=track_id,
        name=name,
        artists=[Artist(id=f"artist-{artist}", name=artist)],
        duration_ms=200_000,
    )


def test_seeded_random_matches_lcg():
    # ord("a") == 97 -> (97 * 9301 + 49297) % 233280 == 18374
    assert seeded_random("a") == pytest.approx(18374 / 233280)
    assert seeded_random("j") == pytest.approx(102083 / 233280)


def test_seeded_random_is_stable_and_order_free():
    assert seeded_random("4uLU6hMCjMI75M1A2tKUQC") == seeded_random("4uLU6hMCjMI75M1A2tKUQC")
    # Only the character sum matters
    assert seeded_random("ab") == seeded_random("ba")
    assert 0.0 <= seeded_random("") < 1.0


def test_genre_weights_first_keyword_wins():
    assert genre_weights("techno anthem dj") == (0.4, 0.2, 0.4)
    assert genre_weights("metal heart band") == (0.5, 0.25, 0.25)
    assert genre_weights("hip hop classic") == (0.3, 0.4, 0.3)
    assert genre_weights("country roads") == (0.6, 0.2, 0.2)
    # "dance" is checked before "rock"
    assert genre_weights("dance rock") == (0.4, 0.2, 0.4)


def test_genre_weights_substring_quirks():
    # "stop" contains "top"
    assert genre_weights("don't stop me now queen") == (0.35, 0.3, 0.35)
    assert genre_weights("quiet song") == DEFAULT_WEIGHTS


def test_select_weighted_cumulative():
    items = [10.0, 20.0, 30.0]
    weights = [0.4, 0.3, 0.3]
    assert select_weighted(items, weights, 0.0) == 10.0
    assert select_weighted(items, weights, 0.4) == 10.0
    assert select_weighted(items, weights, 0.41) == 20.0
    assert select_weighted(items, weights, 0.99) == 30.0


def test_select_weighted_falls_back_to_last():
    assert select_weighted([1.0, 2.0, 3.0], [0.1, 0.1, 0.1], 0.9) == 3.0


def test_candidate_tempos_floor_at_60():
    candidates = candidate_tempos(100, 0.0)
    assert candidates == [95.0, 60.0, 195.0]


def test_estimate_tempo_base_candidate():
    tempo = estimate_tempo(make_raw("a"), 175)
    assert tempo == pytest.approx(175 + (18374 / 233280 - 0.5) * 10)


def test_estimate_tempo_half_and_double_candidates():
    half = estimate_tempo(make_raw("j"), 175)
    double = estimate_tempo(make_raw("q"), 175)
    assert half == pytest.approx(87.5 + (seeded_random("j") - 0.5) * 10)
    assert double == pytest.approx(350 + (seeded_random("q") - 0.5) * 10)


def test_estimate_tempo_uses_genre_keywords():
    # r ~= 0.4376 picks half under default weights but base under country weights
    country = estimate_tempo(make_raw("j", name="Folk Song"), 175)
    assert country == pytest.approx(175 + (seeded_random("j") - 0.5) * 10)


def test_estimate_tempo_is_deterministic():
    track = make_raw("6habFhsOp2NvshLv26DqMb", name="Levitating", artist="Dua Lipa")
    assert estimate_tempo(track, 172) == estimate_tempo(track, 172)


def test_median_tempo_prefers_confident_sections():
    sections = [
        AnalysisSection(duration=10, confidence=0.9, tempo=170, tempo_confidence=0.8),
        AnalysisSection(duration=50, confidence=0.2, tempo=90, tempo_confidence=0.1),
    ]
    assert calculate_median_tempo(sections) == 170


def test_median_tempo_weights_by_duration():
    sections = [
        AnalysisSection(duration=1.0, confidence=0.1, tempo=120, tempo_confidence=0.1),
        AnalysisSection(duration=3.0, confidence=0.1, tempo=174, tempo_confidence=0.1),
    ]
    assert calculate_median_tempo(sections) == 174


def test_median_tempo_even_count_averages():
    sections = [
        AnalysisSection(duration=0.1, confidence=0.9, tempo=100, tempo_confidence=0.9),
        AnalysisSection(duration=0.1, confidence=0.9, tempo=110, tempo_confidence=0.9),
    ]
    assert calculate_median_tempo(sections) == 105


def test_median_tempo_empty():
    assert calculate_median_tempo([]) == 0.0
    assert calculate_median_tempo([AnalysisSection(tempo=0.0)]) == 0.0
