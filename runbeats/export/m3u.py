"""M3U playlist export."""

from pathlib import Path

from runbeats.models import Recommendation, TrackData
from runbeats.services import playlist_name


def track_location(track: TrackData) -> str:
    return track.preview_url or f"spotify:track:{track.id}"


def export_m3u(recommendation: Recommendation, output_path: str | None = None) -> str:
    """Export a recommended playlist as an M3U file, sections in order.

    Returns the output file path.
    """
    name = playlist_name(recommendation.pace, recommendation.cadence)

    if not output_path:
        safe_name = name.replace(" ", "_").replace("/", "-").replace(":", "-")
        output_path = f"{safe_name}.m3u"

    output_file = Path(output_path).expanduser()
    output_file.parent.mkdir(parents=True, exist_ok=True)

    lines = ["#EXTM3U", f"#PLAYLIST:{name}"]
    for track in recommendation.playlist.all_tracks():
        duration = track.duration_ms // 1000
        lines.append(f"#EXTINF:{duration},{track.display_name}")
        lines.append(track_location(track))

    output_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(output_file)
