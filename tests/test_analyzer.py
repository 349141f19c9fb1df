"""Tests for track analysis and the admission gate."""

import logging
from unittest.mock import patch

import pytest

from runbeats.analysis.analyzer import ESTIMATE_CONFIDENCE, analyze_track, analyze_tracks
from runbeats.models import Artist, RawTrack


def make_raw(track_id: str, name: str = "Song", artists: tuple[str, ...] = ("Someone",), popularity: int | None = 50) -> RawTrack:
    return RawTrack(
        id=track_id,
        name=name,
        artists=[Artist(id=f"id-{a}", name=a) for a in artists],
        preview_url=f"https://p.scdn.co/mp3-preview/{track_id}",
        duration_ms=210_000,
        popularity=popularity,
    )


def test_analyze_track_annotates_fields():
    track = analyze_track(make_raw("a", artists=("Dua Lipa", "DaBaby")), 175)
    assert track is not None
    assert track.artist == "Dua Lipa, DaBaby"
    assert track.mapping == "normal"
    assert track.original_tempo == pytest.approx(170.7876, abs=1e-3)
    assert track.mapped_bpm == track.original_tempo
    assert track.confidence == ESTIMATE_CONFIDENCE
    assert track.duration_ms == 210_000
    assert track.popularity == 50


def test_analyze_track_maps_half_and_double_estimates():
    half_estimate = analyze_track(make_raw("j"), 175)
    double_estimate = analyze_track(make_raw("q"), 175)
    assert half_estimate is not None and half_estimate.mapping == "double"
    assert double_estimate is not None and double_estimate.mapping == "half"
    assert abs(half_estimate.mapped_bpm - 175) <= 175 * 0.03
    assert abs(double_estimate.mapped_bpm - 175) <= 175 * 0.03


def test_analyze_track_rejects_outside_admission_gate():
    # At cadence 100 the half candidate is floored to 60 BPM, 40% away
    assert analyze_track(make_raw("j"), 100) is None


def test_exact_estimate_is_admitted_for_main():
    with patch("runbeats.analysis.analyzer.estimate_tempo", return_value=175.0):
        track = analyze_track(make_raw("x"), 175)
    assert track is not None
    assert track.mapping == "normal"
    assert track.mapped_bpm == 175.0


def test_analyze_tracks_preserves_order():
    tracks = [make_raw("q"), make_raw("a"), make_raw("j")]
    analyzed = analyze_tracks(tracks, 175)
    assert [t.id for t in analyzed] == ["q", "a", "j"]


def test_analyze_tracks_skips_failures(caplog):
    tracks = [make_raw("a"), make_raw("b"), make_raw("c")]
    with (
        patch(
            "runbeats.analysis.analyzer.estimate_tempo",
            side_effect=[175.0, RuntimeError("bad metadata"), 174.0],
        ),
        caplog.at_level(logging.WARNING, logger="runbeats.analysis.analyzer"),
    ):
        analyzed = analyze_tracks(tracks, 175)

    assert [t.id for t in analyzed] == ["a", "c"]
    assert "Error processing track b" in caplog.text


def test_analyze_tracks_empty():
    assert analyze_tracks([], 175) == []
