import os

import pytest

from yt_provider.exceptions import (
    NoOutputProducedError,
    NoUrlInOutputError,
    ResolutionError,
    ResolutionToolFailedError,
)
from yt_provider.media.resolver import MediaResolver, extract_trailing_url
from yt_provider.media.tools import RESOLVE_TOOL

WATCH = "https://youtube.com/watch?v=dQw4w9WgXcQ"

posix_only = pytest.mark.skipif(os.name == "nt", reason="fake tools are sh scripts")


def test_extract_trailing_url_picks_last_line():
    output = (
        "https://rr1.googlevideo.com/videoplayback?itag=137\n"
        "https://rr1.googlevideo.com/videoplayback?itag=251  \n"
    )
    assert extract_trailing_url(output) == (
        "https://rr1.googlevideo.com/videoplayback?itag=251"
    )


def test_extract_trailing_url_without_trailing_newline():
    assert extract_trailing_url("https://media.example/a") == "https://media.example/a"


def test_extract_trailing_url_with_no_https_line():
    with pytest.raises(NoUrlInOutputError):
        extract_trailing_url("WARNING: something\nhttp://insecure.example/a\n")


def test_extract_trailing_url_ignores_url_followed_by_text():
    with pytest.raises(NoUrlInOutputError):
        extract_trailing_url("https://media.example/a\nERROR: throttled\n")


def test_extract_trailing_url_with_blank_output():
    with pytest.raises(NoOutputProducedError):
        extract_trailing_url("  \n\n")


@posix_only
async def test_resolve_returns_trailing_url(fake_tool):
    tool = fake_tool(
        "resolver",
        'echo "https://media.example/video"\necho "https://media.example/audio"',
    )
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(tool))

    assert await resolver.resolve(WATCH) == "https://media.example/audio"


@posix_only
async def test_resolve_passes_url_as_argument(fake_tool):
    tool = fake_tool("resolver", 'echo "https://media.example/?args=$*"')
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(tool))

    assert await resolver.resolve(WATCH) == f"https://media.example/?args=-g {WATCH}"


@posix_only
async def test_resolve_without_url_raises_no_url_in_output(fake_tool):
    tool = fake_tool("resolver", 'echo "no formats found"')
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(tool))

    with pytest.raises(NoUrlInOutputError):
        await resolver.resolve(WATCH)


@posix_only
async def test_resolve_with_empty_output_raises_no_output(fake_tool):
    tool = fake_tool("resolver", "exit 0")
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(tool))

    with pytest.raises(NoOutputProducedError):
        await resolver.resolve(WATCH)


@posix_only
async def test_resolve_non_zero_exit_raises_tool_failed(fake_tool):
    tool = fake_tool(
        "resolver", 'echo "https://media.example/a"\necho "ERROR: Private video" >&2\nexit 1'
    )
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(tool))

    with pytest.raises(ResolutionToolFailedError) as exc_info:
        await resolver.resolve(WATCH)

    assert exc_info.value.returncode == 1
    assert "Private video" in str(exc_info.value)


async def test_resolve_missing_executable_raises_tool_failed(tmp_path):
    resolver = MediaResolver(RESOLVE_TOOL.with_executable(str(tmp_path / "missing")))

    with pytest.raises(ResolutionToolFailedError) as exc_info:
        await resolver.resolve(WATCH)

    assert exc_info.value.returncode is None
    assert isinstance(exc_info.value, ResolutionError)
