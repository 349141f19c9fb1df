"""RunBeats CLI: cadence-matched running playlists."""

import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from runbeats.config import get_settings
from runbeats.errors import RunBeatsError
from runbeats.log import setup_logging
from runbeats.models import PaceInput

app = typer.Typer(
    name="runbeats",
    help="Build running playlists whose tempo matches your step cadence.",
    no_args_is_help=True,
)
console = Console()

SECTION_TITLES = {
    "warmup": "Warm-up",
    "main": "Main",
    "cooldown": "Cool-down",
}
UNITS = ("km", "mi")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


def _pace_or_exit(pace: str, unit: str) -> PaceInput:
    from runbeats.pace import make_pace

    if unit not in UNITS:
        console.print(f"[red]Error:[/red] Unknown unit '{unit}'. Use 'km' or 'mi'.")
        raise typer.Exit(1)
    try:
        return make_pace(pace, unit)
    except RunBeatsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def cadence(
    pace: str = typer.Argument(..., help="Running pace, e.g. '5:30'"),
    unit: str = typer.Option("km", "--unit", "-u", help="Pace unit: km or mi"),
):
    """Suggest a step cadence for a pace."""
    from runbeats.pace import format_pace, pace_to_suggested_cadence

    pace_input = _pace_or_exit(pace, unit)
    suggested = pace_to_suggested_cadence(pace_input)
    console.print(f"{format_pace(pace_input)} → [bold]{suggested}[/bold] steps/min")


@app.command()
def recommend(
    pace: str = typer.Argument(..., help="Running pace, e.g. '7:30'"),
    unit: str = typer.Option("km", "--unit", "-u", help="Pace unit: km or mi"),
    cadence: Optional[int] = typer.Option(None, "--cadence", "-c", min=1, help="Target steps/min (default: suggested from pace)"),
    genre: Optional[List[str]] = typer.Option(None, "--genre", "-g", help="Genre to include; repeat for more"),
    seed: Optional[int] = typer.Option(None, help="Seed for the candidate shuffle"),
    as_json: bool = typer.Option(False, "--json", help="Print the playlist as JSON"),
    export: Optional[str] = typer.Option(None, "--export", "-o", help="Write an M3U file"),
    sync: bool = typer.Option(False, "--sync", help="Save the playlist to your Spotify account"),
):
    """Build a warm-up + main playlist matched to your cadence."""
    from runbeats.analysis.mapping import mapping_label
    from runbeats.pace import format_pace, pace_to_suggested_cadence
    from runbeats.services import playlist_name, recommend_playlist

    pace_input = _pace_or_exit(pace, unit)
    target = cadence or pace_to_suggested_cadence(pace_input)
    rng = random.Random(seed) if seed is not None else None

    try:
        if not as_json:
            console.print(f"Finding tracks for [bold]{format_pace(pace_input)}[/bold] @ [bold]{target}[/bold] SPM...")
        result = recommend_playlist(target, genres=genre, pace=pace_input, rng=rng)
    except RunBeatsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        targets = result.section_targets
        console.print(
            f"Targets: warm-up {targets.warmup:.0f} | main {targets.main:.0f} | cool-down {targets.cooldown:.0f} BPM"
        )

        for section in result.playlist.sections:
            if section.type == "cooldown":
                continue

            table = Table(title=f"{SECTION_TITLES[section.type]} ({section.target_bpm:.0f} BPM)")
            table.add_column("#", style="dim")
            table.add_column("Artist")
            table.add_column("Title")
            table.add_column("Tempo", justify="center")
            table.add_column("Orig", justify="right")
            table.add_column("BPM", justify="right")
            table.add_column("Pop", justify="right")

            for i, t in enumerate(section.tracks, 1):
                table.add_row(
                    str(i), t.artist, t.name, mapping_label(t.mapping),
                    f"{t.original_tempo:.0f}", f"{t.mapped_bpm:.0f}",
                    str(t.popularity) if t.popularity is not None else "-",
                )

            if not section.tracks:
                console.print(f"[yellow]No tracks fit the {SECTION_TITLES[section.type].lower()} window.[/yellow]")
            else:
                console.print(table)

        console.print(f"\n[green]{result.playlist.total_tracks} tracks[/green]")

    if export:
        from runbeats.export.m3u import export_m3u
        path = export_m3u(result, export)
        console.print(f"[green]Exported:[/green] {path}")

    if sync:
        from runbeats.discovery.spotify import create_playlist

        try:
            created = create_playlist(playlist_name(pace_input, target), result.playlist.all_tracks())
        except RunBeatsError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        console.print(f"[green]Playlist '{created['name']}' created![/green] {created['url']}")


if __name__ == "__main__":
    app()
