"""Heuristic tempo estimation from track metadata.

No audio is analyzed here. Each track gets a stable stand-in tempo near the
target cadence (or its half/double), biased by genre keywords found in the
title and artist names and made track-specific by a seed derived from the
track id.
"""

import math
from collections.abc import Sequence

from runbeats.models import AnalysisSection, RawTrack

# Linear congruential step constants
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

MIN_TEMPO = 60.0
JITTER_SPAN = 10.0  # BPM, centred on zero

# Weights over the candidates in order (base, half, double).
# Checked top to bottom, first keyword hit wins.
GENRE_WEIGHTS: list[tuple[tuple[str, ...], tuple[float, float, float]]] = [
    (("electronic", "dance", "edm", "house", "techno"), (0.4, 0.2, 0.4)),
    (("rock", "metal", "punk"), (0.5, 0.25, 0.25)),
    (("hip hop", "rap", "r&b"), (0.3, 0.4, 0.3)),
    (("pop", "top"), (0.35, 0.3, 0.35)),
    (("country", "folk"), (0.6, 0.2, 0.2)),
]
DEFAULT_WEIGHTS = (0.4, 0.3, 0.3)

HIGH_CONFIDENCE = 0.7


def seeded_random(identifier: str) -> float:
    """Deterministic value in [0, 1) derived from an identifier."""
    seed = sum(ord(char) for char in identifier)
    return ((seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS) / LCG_MODULUS


def genre_weights(text: str) -> tuple[float, float, float]:
    """Pick the candidate weights for a lowercased title+artist string."""
    for keywords, weights in GENRE_WEIGHTS:
        if any(keyword in text for keyword in keywords):
            return weights
    return DEFAULT_WEIGHTS


def select_weighted(items: Sequence[float], weights: Sequence[float], draw: float) -> float:
    """Cumulative-probability draw; falls back to the last item on rounding."""
    cumulative = 0.0
    for item, weight in zip(items, weights):
        cumulative += weight
        if draw <= cumulative:
            return item
    return items[-1]


def candidate_tempos(target_cadence: float, draw: float) -> list[float]:
    jitter = (draw - 0.5) * JITTER_SPAN
    return [
        max(MIN_TEMPO, tempo + jitter)
        for tempo in (target_cadence, target_cadence / 2, target_cadence * 2)
    ]


def estimate_tempo(track: RawTrack, target_cadence: float) -> float:
    """Estimate a plausible original tempo for a track."""
    artist_names = " ".join(a.name for a in track.artists)
    combined = f"{track.name} {artist_names}".lower()

    draw = seeded_random(track.id)
    candidates = candidate_tempos(target_cadence, draw)
    return select_weighted(candidates, genre_weights(combined), draw)


def calculate_median_tempo(sections: Sequence[AnalysisSection]) -> float:
    """Duration-weighted median tempo of audio-analysis sections.

    Prefers sections where both confidence values are at least 0.7, falls
    back to every section with a positive tempo. Returns 0.0 if nothing
    usable remains.
    """
    confident = [
        s for s in sections
        if s.confidence >= HIGH_CONFIDENCE and s.tempo_confidence >= HIGH_CONFIDENCE
    ]
    if confident:
        return _weighted_median(confident)

    return _weighted_median([s for s in sections if s.tempo > 0])


def _weighted_median(sections: Sequence[AnalysisSection]) -> float:
    if not sections:
        return 0.0
    if len(sections) == 1:
        return sections[0].tempo

    # Each section counts once per tenth of a second, at least once
    weighted: list[float] = []
    for section in sections:
        weight = max(1, math.floor(section.duration * 10 + 0.5))
        weighted.extend([section.tempo] * weight)

    weighted.sort()
    mid = len(weighted) // 2
    if len(weighted) % 2 == 0:
        return (weighted[mid - 1] + weighted[mid]) / 2
    return weighted[mid]
