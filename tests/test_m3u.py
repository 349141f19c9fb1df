"""Tests for M3U export."""

from runbeats.export.m3u import export_m3u
from runbeats.models import PaceInput, Playlist, PlaylistSection, Recommendation, TrackData
from runbeats.planning.sections import calculate_section_targets


def make_track(track_id: str, preview_url: str | None = None) -> TrackData:
    return TrackData(
        id=track_id,
        name=f"Song {track_id}",
        artist=f"Artist {track_id}",
        preview_url=preview_url,
        original_tempo=175.0,
        mapped_bpm=175.0,
        mapping="normal",
        confidence=0.7,
        duration_ms=215_400,
    )


def make_recommendation() -> Recommendation:
    playlist = Playlist(sections=(
        PlaylistSection(type="warmup", target_bpm=170, tracks=(make_track("w1", "https://p.scdn.co/w1"),)),
        PlaylistSection(type="main", target_bpm=175, tracks=(make_track("m1"),)),
    ))
    return Recommendation(
        playlist=playlist,
        cadence=175,
        section_targets=calculate_section_targets(175),
        pace=PaceInput(minutes=5, seconds=0, unit="km"),
    )


def test_export_m3u_writes_sections_in_order(tmp_path):
    out = tmp_path / "nested" / "run.m3u"
    path = export_m3u(make_recommendation(), str(out))

    assert path == str(out)
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "#EXTM3U",
        "#PLAYLIST:Running Playlist - 5:00 min/km @ 175 SPM",
        "#EXTINF:215,Artist w1 - Song w1",
        "https://p.scdn.co/w1",
        "#EXTINF:215,Artist m1 - Song m1",
        "spotify:track:m1",
    ]


def test_export_m3u_default_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = export_m3u(make_recommendation())
    assert path == "Running_Playlist_-_5-00_min-km_@_175_SPM.m3u"
    assert (tmp_path / path).exists()
