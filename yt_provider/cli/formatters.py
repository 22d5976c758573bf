"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from yt_provider.models.config import ProviderConfig
from yt_provider.models.track import QueryResult
from yt_provider.utils.formatting import format_duration

_DRIFT_SUGGESTIONS = [
    "• YouTube may have changed the layout of its search page.",
    "• Run `yt-provider diagnose` to check the payload boundaries.",
    "• Run the command with -vv for detailed logs.",
]


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "BoundaryNotFoundError": _DRIFT_SUGGESTIONS,
        "InvalidRangeError": _DRIFT_SUGGESTIONS,
        "MalformedPayloadError": _DRIFT_SUGGESTIONS,
        "MissingFieldError": _DRIFT_SUGGESTIONS,
        "InvalidUrlError": _DRIFT_SUGGESTIONS,
        "InvalidDurationError": _DRIFT_SUGGESTIONS,
        "SearchRequestError": [
            "• Check your internet connection.",
            "• YouTube may be rate-limiting or blocking this address.",
        ],
        "ResolutionToolFailedError": [
            "• Make sure the resolver (yt-dlp) is installed and up to date.",
            "• The video may be private, removed, or region-locked.",
        ],
        "NoOutputProducedError": [
            "• Update the resolver: `yt-dlp -U`.",
        ],
        "NoUrlInOutputError": [
            "• Update the resolver: `yt-dlp -U`.",
            "• Check `resolver_path` in your configuration.",
        ],
        "SpawnFailedError": [
            "• Make sure yt-dlp and ffmpeg are installed and on your PATH.",
            "• Or set `downloader_path` / `transcoder_path` in the configuration.",
        ],
        "ConfigurationError": [
            "• Fix the value in your configuration file.",
            "• Or regenerate it with `yt-provider init --force`.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_results_table(results: QueryResult, limit: int | None = None):
    """Displays search results as a numbered table."""
    console = Console()
    if not results:
        console.print("[yellow]No tracks found.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan", overflow="fold")
    table.add_column("Artist", style="green")
    table.add_column("Length", justify="right")
    table.add_column("URL", style="dim")

    tracks = results.tracks[:limit] if limit else results.tracks
    for i, track in enumerate(tracks, 1):
        table.add_row(
            str(i),
            track.title,
            track.artist_name,
            format_duration(track.duration),
            track.url,
        )
    console.print(table)


def print_config(config_path: Path, config: ProviderConfig):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key in sorted(ProviderConfig.get_ini_keys()):
        content += f"{key} = {getattr(config, key)}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )
