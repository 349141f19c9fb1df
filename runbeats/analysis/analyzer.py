"""Tempo analysis of catalog tracks: estimate, map, admit."""

import logging
from collections.abc import Iterable

from runbeats.analysis.estimator import estimate_tempo
from runbeats.analysis.mapping import find_best_tempo_mapping
from runbeats.models import RawTrack, TrackData

logger = logging.getLogger(__name__)

# Tracks whose best mapping is further than this from the cadence are dropped
ADMISSION_ERROR_PCT = 10.0

# Estimated tempos carry no signal strength, so every track gets the same confidence
ESTIMATE_CONFIDENCE = 0.7


def analyze_track(track: RawTrack, target_cadence: float) -> TrackData | None:
    """Annotate one track, or return None if it misses the admission gate."""
    original_tempo = estimate_tempo(track, target_cadence)
    mapping = find_best_tempo_mapping(original_tempo, target_cadence)

    if mapping.error / target_cadence * 100 > ADMISSION_ERROR_PCT:
        return None

    return TrackData(
        id=track.id,
        name=track.name,
        artist=track.artist_names,
        preview_url=track.preview_url,
        original_tempo=original_tempo,
        mapped_bpm=mapping.mapped_bpm,
        mapping=mapping.mapping,
        confidence=ESTIMATE_CONFIDENCE,
        duration_ms=track.duration_ms,
        popularity=track.popularity,
    )


def analyze_tracks(tracks: Iterable[RawTrack], target_cadence: float) -> list[TrackData]:
    """Analyze tracks in order. A track that fails is logged and skipped."""
    analyzed: list[TrackData] = []
    rejected = 0

    for track in tracks:
        try:
            result = analyze_track(track, target_cadence)
        except Exception as exc:
            logger.warning("Error processing track %s: %s", track.id, exc)
            logger.debug("Traceback for track %s", track.id, exc_info=True)
            continue

        if result is None:
            rejected += 1
            continue
        analyzed.append(result)

    logger.debug("Analyzed %d tracks, %d outside the admission gate", len(analyzed), rejected)
    return analyzed
