"""Greedy playlist assembly with artist caps and title de-duplication."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from runbeats.models import Playlist, PlaylistSection, SectionTargets, SectionType, TrackData
from runbeats.planning.sections import candidates_for_section

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown"


@dataclass(frozen=True)
class SectionRule:
    section_type: SectionType
    limit: int
    max_per_artist: int


WARMUP_RULE = SectionRule("warmup", limit=5, max_per_artist=1)
MAIN_RULE = SectionRule("main", limit=20, max_per_artist=2)

# Cool-down has a target but is not assembled yet
ASSEMBLED_SECTIONS: tuple[SectionRule, ...] = (WARMUP_RULE, MAIN_RULE)


@dataclass(frozen=True)
class AssemblyState:
    """Picks made so far, threaded through each section pass."""

    used_names: frozenset[str] = frozenset()
    used_ids: frozenset[str] = frozenset()
    sections: tuple[PlaylistSection, ...] = ()


def normalize_name(name: str) -> str:
    return name.strip().casefold()


def pick_tracks(
    candidates: Iterable[TrackData],
    used_names: frozenset[str],
    max_per_artist: int,
    limit: int,
) -> tuple[list[TrackData], frozenset[str]]:
    """Take candidates in order, skipping reused titles and capped artists.

    Returns the picks and the title set extended with them.
    """
    artist_count: dict[str, int] = {}
    names = set(used_names)
    picked: list[TrackData] = []

    for track in candidates:
        if len(picked) >= limit:
            break

        name_key = normalize_name(track.name)
        if not name_key or name_key in names:
            continue

        artist = track.artist or UNKNOWN_ARTIST
        count = artist_count.get(artist, 0)
        if count >= max_per_artist:
            continue

        picked.append(track)
        artist_count[artist] = count + 1
        names.add(name_key)

    return picked, frozenset(names)


def assemble_section(
    tracks: Sequence[TrackData],
    target_bpm: float,
    rule: SectionRule,
    state: AssemblyState,
) -> AssemblyState:
    """Build one section and return the state with it appended."""
    candidates = [
        t for t in candidates_for_section(tracks, target_bpm, rule.section_type)
        if t.id not in state.used_ids
    ]
    picked, used_names = pick_tracks(candidates, state.used_names, rule.max_per_artist, rule.limit)
    logger.debug(
        "%s: %d candidates around %.0f BPM, picked %d",
        rule.section_type, len(candidates), target_bpm, len(picked),
    )

    section = PlaylistSection(type=rule.section_type, target_bpm=target_bpm, tracks=tuple(picked))
    return AssemblyState(
        used_names=used_names,
        used_ids=state.used_ids | {t.id for t in picked},
        sections=state.sections + (section,),
    )


def create_structured_playlist(tracks: Sequence[TrackData], targets: SectionTargets) -> Playlist:
    """Assemble warm-up then main from analyzed tracks.

    Titles are unique across the whole playlist; artist caps apply per section.
    """
    state = AssemblyState()
    for rule in ASSEMBLED_SECTIONS:
        state = assemble_section(tracks, targets.for_section(rule.section_type), rule, state)
    return Playlist(sections=state.sections)
