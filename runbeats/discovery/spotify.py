"""Spotify catalog access: candidate search, artist genres, playlist sync."""

import logging
import random
from collections.abc import Sequence

import requests
import spotipy
from pydantic import ValidationError
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOAuth, SpotifyOauthError

from runbeats.config import get_settings
from runbeats.errors import CatalogError
from runbeats.models import RawTrack, TrackData

logger = logging.getLogger(__name__)

ARTIST_BATCH_SIZE = 50
PLAYLIST_ADD_BATCH_SIZE = 100
PLAYLIST_SCOPE = "playlist-modify-private"

POPULAR_SEARCHES = [
    "year:2023-2024",
    "year:2022-2024",
    "year:2021-2024",
    "top hits 2024",
    "top hits 2023",
    "billboard hot 100",
    "global top 50",
    "viral 50",
    "workout",
    "running",
    "cardio",
    "gym",
    "energetic",
    "upbeat",
    "dance hits",
    "pop hits",
    "rock hits",
    "hip hop hits",
    "electronic hits",
]
POPULAR_SEARCH_LIMIT = 15

POPULAR_ARTISTS = [
    "Dua Lipa", "The Weeknd", "Harry Styles", "Taylor Swift", "Ed Sheeran",
    "Drake", "Bad Bunny", "Post Malone", "Travis Scott", "Kendrick Lamar",
    "Calvin Harris", "David Guetta", "Marshmello", "Zedd", "Martin Garrix",
    "Imagine Dragons", "OneRepublic", "Coldplay", "Maroon 5", "The Killers",
    "Ariana Grande", "Billie Eilish", "Olivia Rodrigo", "Doja Cat", "SZA",
]
POPULAR_ARTIST_GROUP = 3
POPULAR_ARTIST_LIMIT = 8

INDIE_ARTISTS = [
    "Tame Impala", "Arctic Monkeys", "The Strokes", "Foster the People",
    "MGMT", "Vampire Weekend", "Two Door Cinema Club", "Phoenix",
    "Cage the Elephant", "Portugal. The Man", "Glass Animals", "Alt-J",
    "The Killers", "Franz Ferdinand", "Interpol", "Yeah Yeah Yeahs",
    "Modest Mouse", "The Shins", "Death Cab for Cutie", "Bloc Party",
    "Grizzly Bear", "Animal Collective", "Panda Bear", "Beach House",
    "Real Estate", "Mac DeMarco", "Clairo", "Rex Orange County",
]
INDIE_ARTIST_GROUP = 4
INDIE_ARTIST_LIMIT = 12

FALLBACK_SEARCH = "popular music 2024"
FALLBACK_LIMIT = 30


def get_spotify_client() -> spotipy.Spotify:
    """App-level client using the client-credentials flow."""
    settings = get_settings()
    if not settings.has_spotify_credentials():
        raise CatalogError("Spotify credentials not set. Add SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET to .env")

    auth = SpotifyClientCredentials(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
    )
    return spotipy.Spotify(auth_manager=auth, requests_timeout=settings.spotify_timeout)


def get_user_client() -> spotipy.Spotify:
    """User-authorized client; spotipy runs the browser login and caches the token."""
    settings = get_settings()
    if not settings.has_spotify_credentials():
        raise CatalogError("Spotify credentials not set. Add SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET to .env")

    auth = SpotifyOAuth(
        client_id=settings.spotify_client_id,
        client_secret=settings.spotify_client_secret,
        redirect_uri=settings.spotify_redirect_uri,
        scope=PLAYLIST_SCOPE,
    )
    return spotipy.Spotify(auth_manager=auth, requests_timeout=settings.spotify_timeout)


def search_tracks(client: spotipy.Spotify, query: str, limit: int = 50) -> list[RawTrack]:
    """Search the catalog for tracks. Items without artists are dropped."""
    results = client.search(q=query, type="track", limit=limit)

    tracks = []
    for item in results.get("tracks", {}).get("items", []):
        if not item or not item.get("artists"):
            continue
        try:
            tracks.append(RawTrack.from_spotify(item))
        except (KeyError, ValidationError) as exc:
            logger.debug("Skipping malformed item %s: %s", item.get("id"), exc)
    return tracks


def get_artists(client: spotipy.Spotify, artist_ids: Sequence[str]) -> list[dict]:
    """Fetch artists in batches of 50. A failing batch is skipped.

    Returns list of dicts with: id, name, genres
    """
    artists = []
    for start in range(0, len(artist_ids), ARTIST_BATCH_SIZE):
        batch = list(artist_ids[start:start + ARTIST_BATCH_SIZE])
        try:
            response = client.artists(batch)
        except SpotifyOauthError as exc:
            raise CatalogError(f"Spotify authorization failed: {exc}") from exc
        except (spotipy.SpotifyException, requests.RequestException) as exc:
            logger.warning("Failed to get artists batch: %s", exc)
            continue

        for artist in response.get("artists", []):
            if not artist:
                continue
            artists.append({
                "id": artist["id"],
                "name": artist["name"],
                "genres": artist.get("genres") or [],
            })
    return artists


def artist_genre_map(client: spotipy.Spotify, tracks: Sequence[RawTrack]) -> dict[str, list[str]]:
    """Genres for every artist appearing on the given tracks."""
    artist_ids = list(dict.fromkeys(a.id for t in tracks for a in t.artists))
    return {artist["id"]: artist["genres"] for artist in get_artists(client, artist_ids)}


def _artist_queries(artists: Sequence[str], group_size: int) -> list[str]:
    return [
        " OR ".join(f'artist:"{name}"' for name in artists[i:i + group_size])
        for i in range(0, len(artists), group_size)
    ]


def _safe_search(client: spotipy.Spotify, query: str, limit: int) -> list[RawTrack] | None:
    try:
        return search_tracks(client, query, limit)
    except SpotifyOauthError as exc:
        raise CatalogError(f"Spotify authorization failed: {exc}") from exc
    except (spotipy.SpotifyException, requests.RequestException) as exc:
        logger.warning("Search failed for %r: %s", query, exc)
        return None


def fetch_candidate_pool(client: spotipy.Spotify, rng: random.Random | None = None) -> list[RawTrack]:
    """Gather a shuffled pool of popular tracks from a fixed set of searches.

    Failed queries are skipped. Tracks are de-duplicated by id, popular ones
    are preferred, and the pool is backfilled with less popular tracks up to
    the configured pool size.
    """
    settings = get_settings()
    rng = rng or random.Random()

    queries = [(term, POPULAR_SEARCH_LIMIT) for term in POPULAR_SEARCHES]
    queries += [(q, POPULAR_ARTIST_LIMIT) for q in _artist_queries(POPULAR_ARTISTS, POPULAR_ARTIST_GROUP)]
    queries += [(q, INDIE_ARTIST_LIMIT) for q in _artist_queries(INDIE_ARTISTS, INDIE_ARTIST_GROUP)]

    all_tracks: list[RawTrack] = []
    succeeded = 0
    for query, limit in queries:
        results = _safe_search(client, query, limit)
        if results is None:
            continue
        succeeded += 1
        all_tracks.extend(results)

    if succeeded == 0:
        logger.warning("Every catalog search failed, trying %r", FALLBACK_SEARCH)
        all_tracks.extend(_safe_search(client, FALLBACK_SEARCH, FALLBACK_LIMIT) or [])

    seen: set[str] = set()
    unique = []
    for track in all_tracks:
        if track.id not in seen:
            seen.add(track.id)
            unique.append(track)

    popular = sorted(
        (t for t in unique if t.popularity and t.popularity > settings.min_popularity),
        key=lambda t: t.popularity or 0,
        reverse=True,
    )
    pool = popular
    if len(popular) < settings.pool_size:
        rest = [t for t in unique if not t.popularity or t.popularity <= settings.min_popularity]
        pool = popular + rest[:settings.pool_size - len(popular)]

    rng.shuffle(pool)
    logger.debug("Candidate pool: %d unique of %d fetched, %d kept", len(unique), len(all_tracks), len(pool))
    return pool


def create_playlist(name: str, tracks: Sequence[TrackData], client: spotipy.Spotify | None = None) -> dict:
    """Create a private playlist on the user's account with the tracks in order.

    Returns dict with: id, name, url
    """
    if not tracks:
        raise CatalogError("No tracks available to sync")

    sp = client or get_user_client()
    try:
        user_id = sp.current_user()["id"]
        created = sp.user_playlist_create(
            user_id,
            name,
            public=False,
            description="Cadence-matched running playlist",
        )
        uris = [f"spotify:track:{t.id}" for t in tracks]
        for start in range(0, len(uris), PLAYLIST_ADD_BATCH_SIZE):
            sp.playlist_add_items(created["id"], uris[start:start + PLAYLIST_ADD_BATCH_SIZE])
    except (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException) as exc:
        raise CatalogError(f"Failed to create playlist: {exc}") from exc

    return {
        "id": created["id"],
        "name": created.get("name", name),
        "url": created.get("external_urls", {}).get("spotify", ""),
    }
