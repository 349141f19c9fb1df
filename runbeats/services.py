"""End-to-end playlist recommendation: catalog fetch through assembly."""

import logging
import random
from collections.abc import Sequence

import spotipy

from runbeats.analysis.analyzer import analyze_tracks
from runbeats.config import get_settings
from runbeats.discovery.genres import filter_tracks_by_genres
from runbeats.discovery.spotify import artist_genre_map, fetch_candidate_pool, get_spotify_client
from runbeats.errors import InvalidPaceError
from runbeats.models import PaceInput, RawTrack, Recommendation, SectionTargets
from runbeats.pace import format_pace
from runbeats.planning.assembler import create_structured_playlist
from runbeats.planning.sections import calculate_section_targets

logger = logging.getLogger(__name__)


def build_recommendation(
    tracks: Sequence[RawTrack],
    cadence: int,
    targets: SectionTargets | None = None,
    genres: Sequence[str] = (),
    pace: PaceInput | None = None,
) -> Recommendation:
    """Run analysis and assembly over an already-fetched, genre-filtered pool."""
    targets = targets or calculate_section_targets(cadence)
    analyzed = analyze_tracks(tracks, cadence)
    playlist = create_structured_playlist(analyzed, targets)
    logger.info(
        "Cadence %d: %d candidates, %d analyzed, %d in playlist",
        cadence, len(tracks), len(analyzed), playlist.total_tracks,
    )
    return Recommendation(
        playlist=playlist,
        cadence=cadence,
        section_targets=targets,
        genres=list(genres),
        pace=pace,
    )


def recommend_playlist(
    cadence: int,
    genres: Sequence[str] | None = None,
    pace: PaceInput | None = None,
    client: spotipy.Spotify | None = None,
    rng: random.Random | None = None,
) -> Recommendation:
    """Fetch candidates from the catalog and build a cadence-matched playlist."""
    if cadence <= 0:
        raise InvalidPaceError(f"Cadence must be positive, got {cadence}")

    settings = get_settings()
    selected = list(genres) if genres else list(settings.default_genres)
    sp = client or get_spotify_client()

    targets = calculate_section_targets(cadence)
    pool = fetch_candidate_pool(sp, rng)
    genre_map = artist_genre_map(sp, pool)
    filtered = filter_tracks_by_genres(pool, genre_map, selected, settings.genre_min_tracks)

    return build_recommendation(filtered, cadence, targets, selected, pace)


def playlist_name(pace: PaceInput | None, cadence: int) -> str:
    pace_label = format_pace(pace) if pace else "Custom"
    return f"Running Playlist - {pace_label} @ {cadence} SPM"
