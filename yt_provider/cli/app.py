"""
Defines the command-line interface for the provider using Typer.
"""

import asyncio
import logging
import os
import shutil
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import typer
from rich.console import Console
from rich.logging import RichHandler

from yt_provider import __version__
from yt_provider.core.provider import YouTubeProvider
from yt_provider.exceptions import YouTubeProviderError
from yt_provider.models.config import ProviderConfig
from yt_provider.storage.config_manager import ConfigManager
from yt_provider.utils.formatting import output_path, track_file_name
from yt_provider.utils.structured_logger import create_structured_logger

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_results_table,
)

console = Console()

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("yt_provider")

app = typer.Typer(
    name="yt-provider",
    help=(
        "Search YouTube and save results as local audio files. Use 'yt-provider"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "yt-provider"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
    log_dir: Path | None = typer.Option(  # noqa: B008
        None,
        "--log-dir",
        help="Write structured JSON-lines event logs into this directory.",
    ),
):
    """YouTube audio provider CLI"""
    if version:
        console.print(f"[bold]yt-provider[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("yt_provider").setLevel(log_level)

    ctx.obj = {"log_dir": log_dir}

    if show_config:
        config = _load_config()
        print_config(CONFIG_FILE, config)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _load_config(cli_options: dict | None = None) -> ProviderConfig:
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except YouTubeProviderError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


def _run_provider(ctx: typer.Context, config: ProviderConfig, action) -> None:
    """Runs ``action(provider)`` in an event loop, reporting provider errors."""
    log_dir = (ctx.obj or {}).get("log_dir")

    async def _runner():
        base, search_events, process_events = create_structured_logger(
            log_dir=log_dir, enable_json=log_dir is not None
        )
        try:
            async with YouTubeProvider(
                config,
                search_events=search_events,
                process_events=process_events,
            ) as provider:
                await action(provider)
        finally:
            base.close()

    try:
        asyncio.run(_runner())
    except YouTubeProviderError as e:
        console.print(format_error_with_suggestions(e, {"kind": e.kind}))
        raise typer.Exit(code=1) from e


async def _wait_for(process: asyncio.subprocess.Process, target: str) -> None:
    """Waits for a spawned tool and reports how it ended."""
    stdout, _ = await process.communicate()
    for line in stdout.decode("utf-8", errors="replace").splitlines():
        log.debug(line)

    if process.returncode == 0:
        console.print(f"[green]✓ Saved to '{target}'[/green]")
    else:
        console.print(f"[red]✗ Process exited with code {process.returncode}[/red]")
        raise typer.Exit(code=process.returncode)


def _video_id(url: str) -> str:
    video_ids = parse_qs(urlparse(url).query).get("v")
    return video_ids[0] if video_ids else "track"


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with default values."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except YouTubeProviderError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Free-text search query."),
    limit: int | None = typer.Option(
        None, "-n", "--limit", min=1, help="Show at most this many results."
    ),
):
    """Search YouTube and list the matching tracks."""
    config = _load_config()

    async def _search(provider: YouTubeProvider):
        results = await provider.search(query)
        print_results_table(results, limit)

    _run_provider(ctx, config, _search)


@app.command()
def download(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Watch page URL of the track."),
    name: str | None = typer.Option(
        None,
        "-o",
        "--output",
        help="Base file name (the extension is added by the downloader).",
    ),
    audio_format: str | None = typer.Option(
        None, "-f", "--format", help="Audio format to extract (default: mp3)."
    ),
):
    """Download the audio of a track with the download tool."""
    cli_options = {"audio_format": audio_format} if audio_format else None
    config = _load_config(cli_options)
    target = output_path(config.output_dir, name or _video_id(url))

    async def _download(provider: YouTubeProvider):
        process = await provider.download(url, target)
        await _wait_for(process, f"{target}.{config.file_extension}")

    _run_provider(ctx, config, _download)


@app.command()
def stream(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Watch page URL of the track."),
    destination: Path = typer.Argument(  # noqa: B008
        ..., help="Destination audio file. Overwritten if it exists."
    ),
):
    """Transcode a track's audio stream directly into a local file."""
    config = _load_config()

    async def _stream(provider: YouTubeProvider):
        process = await provider.stream(url, str(destination))
        await _wait_for(process, str(destination))

    _run_provider(ctx, config, _stream)


@app.command()
def get(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Free-text search query."),
    index: int = typer.Option(
        1, "-i", "--index", min=1, help="Which search result to fetch (1-based)."
    ),
    use_stream: bool = typer.Option(
        False, "--stream", help="Transcode the stream instead of downloading."
    ),
):
    """Search YouTube and save one of the results as an audio file."""
    config = _load_config()

    async def _get(provider: YouTubeProvider):
        results = await provider.search(query)
        if index > len(results):
            console.print(
                f"[red]✗ Only {len(results)} results found for '{query}'.[/red]"
            )
            raise typer.Exit(code=1)

        track = results[index - 1]
        target = output_path(config.output_dir, track_file_name(track))
        console.print(f"[cyan]Fetching '{track.title}' by {track.artist_name}[/cyan]")

        if use_stream:
            destination = f"{target}.{config.file_extension}"
            process = await provider.stream(track.url, destination)
            await _wait_for(process, destination)
        else:
            process = await provider.download(track.url, target)
            await _wait_for(process, f"{target}.{config.file_extension}")

    _run_provider(ctx, config, _get)


@app.command()
def diagnose(
    query: str = typer.Option(
        "music", "--query", help="Query used for the live search check."
    ),
):
    """Check the configuration, external tools and search page layout."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False

    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        console.print("[green]✓[/] Configuration is valid.")
    except YouTubeProviderError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    for label, executable in (
        ("Downloader", config.downloader_path),
        ("Resolver", config.resolver_path),
        ("Transcoder", config.transcoder_path),
    ):
        if path := shutil.which(executable):
            console.print(f"[green]✓[/] {label} found: [dim]{path}[/dim]")
        else:
            console.print(f"[red]✗ {label} '{executable}' not found on PATH.[/red]")
            issues_found = True

    console.print("\n[dim]Testing search and payload extraction...[/dim]")

    async def _check_search() -> bool:
        async with YouTubeProvider(config) as provider:
            try:
                results = await provider.search(query)
            except YouTubeProviderError as e:
                console.print(f"[red]✗ {e.kind}: {e}[/red]")
                return False
        if not results:
            console.print("[yellow]⚠️  Search page parsed but held no tracks.[/yellow]")
            return False
        console.print(f"[green]✓[/] Search page parsed ({len(results)} tracks).")
        return True

    if not asyncio.run(_check_search()):
        issues_found = True

    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
