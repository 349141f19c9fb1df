"""Genre filtering of catalog tracks using artist genre tags."""

from collections.abc import Mapping, Sequence

from runbeats.models import RawTrack

# Extra artist-genre substrings accepted for each selectable genre
GENRE_SYNONYMS: dict[str, tuple[str, ...]] = {
    "hip-hop": (
        "hip hop", "rap", "trap", "drill",
        "conscious hip hop", "gangster rap", "melodic rap",
    ),
    "electronic": (
        "electronic", "edm", "house", "techno",
        "electro", "synthpop", "dance", "dubstep",
    ),
    "pop": (
        "pop", "contemporary r&b", "electropop",
        "dance pop", "art pop", "indie pop",
    ),
    "rock": (
        "rock", "alternative", "indie rock", "pop rock", "modern rock",
    ),
    "dance": (
        "dance", "house", "edm", "electronic dance", "club",
    ),
    "indie": (
        "indie", "alternative", "art pop", "chamber pop",
        "indie rock", "indie pop", "indie folk", "bedroom pop",
        "dream pop", "shoegaze", "lo-fi", "alternative rock",
        "alternative pop", "alt-pop", "new wave", "post-punk",
        "synthwave", "chillwave",
    ),
}


def genre_matches(artist_genre: str, selected_genre: str) -> bool:
    genre = artist_genre.lower()
    selected = selected_genre.lower()

    if genre in selected or selected in genre:
        return True
    return any(synonym in genre for synonym in GENRE_SYNONYMS.get(selected, ()))


def track_matches_genres(
    track: RawTrack,
    artist_genres: Mapping[str, Sequence[str]],
    selected_genres: Sequence[str],
) -> bool:
    """True if any artist on the track has a genre matching any selected genre."""
    return any(
        genre_matches(artist_genre, selected)
        for artist in track.artists
        for artist_genre in artist_genres.get(artist.id, ())
        for selected in selected_genres
    )


def filter_tracks_by_genres(
    tracks: Sequence[RawTrack],
    artist_genres: Mapping[str, Sequence[str]],
    selected_genres: Sequence[str],
    min_count: int = 20,
) -> list[RawTrack]:
    """Keep tracks in the selected genres, topping up with popular others.

    If fewer than min_count tracks match, the most popular non-matching
    tracks are appended until min_count is reached.
    """
    matched = [t for t in tracks if track_matches_genres(t, artist_genres, selected_genres)]
    if len(matched) >= min_count:
        return matched

    matched_ids = {t.id for t in matched}
    backfill = sorted(
        (t for t in tracks if t.id not in matched_ids),
        key=lambda t: t.popularity or 0,
        reverse=True,
    )
    return matched + backfill[:min_count - len(matched)]
