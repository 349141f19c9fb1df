"""Per-section BPM targets, suitability and candidate ranking."""

import math
from collections.abc import Iterable

from runbeats.models import SectionTargets, SectionType, TrackData

WARMUP_OFFSET = 5  # BPM below the base cadence
COOLDOWN_RATIO = 0.9

# Allowed |mapped - target| as a fraction of the target. Main is the tightest.
SECTION_TOLERANCE: dict[SectionType, float] = {
    "main": 0.02,
    "warmup": 0.05,
    "cooldown": 0.08,
}

BPM_WEIGHT = 0.7
POPULARITY_WEIGHT = 0.3
MAX_ACCEPTABLE_ERROR_RATIO = 0.08


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_section_targets(base_cadence: float) -> SectionTargets:
    """Warm-up sits 5 BPM under the cadence, cool-down at 90% of it."""
    return SectionTargets(
        warmup=_round_half_up(base_cadence - WARMUP_OFFSET),
        main=base_cadence,
        cooldown=_round_half_up(base_cadence * COOLDOWN_RATIO),
    )


def is_track_suitable_for_section(mapped_bpm: float, target_bpm: float, section_type: SectionType) -> bool:
    tolerance = target_bpm * SECTION_TOLERANCE[section_type]
    return abs(mapped_bpm - target_bpm) <= tolerance


def bpm_match_score(track: TrackData, target_bpm: float) -> float:
    """Blend of tempo fit and popularity (0.0-1.0).

    Tempo fit falls linearly to zero at 8% of the target (at least 1 BPM).
    Missing popularity counts as 0.
    """
    bpm_error = abs(track.mapped_bpm - target_bpm)
    max_acceptable_error = max(1.0, target_bpm * MAX_ACCEPTABLE_ERROR_RATIO)
    bpm_score = max(0.0, 1 - bpm_error / max_acceptable_error)
    popularity_score = (track.popularity or 0) / 100
    return BPM_WEIGHT * bpm_score + POPULARITY_WEIGHT * popularity_score


def sort_tracks_by_bpm_match(tracks: Iterable[TrackData], target_bpm: float) -> list[TrackData]:
    """Best score first; equal scores keep input order."""
    return sorted(tracks, key=lambda t: bpm_match_score(t, target_bpm), reverse=True)


def candidates_for_section(
    tracks: Iterable[TrackData],
    target_bpm: float,
    section_type: SectionType,
) -> list[TrackData]:
    suitable = [t for t in tracks if is_track_suitable_for_section(t.mapped_bpm, target_bpm, section_type)]
    return sort_tracks_by_bpm_match(suitable, target_bpm)
