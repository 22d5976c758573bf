import os

import pytest

from yt_provider.exceptions import NoUrlInOutputError, SpawnFailedError
from yt_provider.media.orchestrator import ProcessOrchestrator
from yt_provider.media.resolver import MediaResolver
from yt_provider.media.tools import (
    DOWNLOAD_TOOL,
    RESOLVE_TOOL,
    TRANSCODE_TOOL,
    ExternalTool,
)
from yt_provider.models.config import ProviderConfig

pytestmark = pytest.mark.skipif(os.name == "nt", reason="fake tools are sh scripts")

WATCH = "https://youtube.com/watch?v=dQw4w9WgXcQ"


class RecordingEvents:
    def __init__(self):
        self.calls = []

    def stream_resolved(self, url, duration_ms):
        self.calls.append(("stream_resolved", url))

    def process_spawned(self, pipeline, url, target, pid):
        self.calls.append(("process_spawned", pipeline, target))

    def process_failed(self, pipeline, url, error):
        self.calls.append(("process_failed", pipeline, error.kind))


def _echo_tool(fake_tool, name):
    return fake_tool(name, 'echo "$@"')


async def test_download_spawns_audio_extraction(fake_tool, tmp_path):
    downloader = DOWNLOAD_TOOL.with_executable(_echo_tool(fake_tool, "yt-dlp"))
    orchestrator = ProcessOrchestrator(downloader=downloader)
    target = str(tmp_path / "song")

    process = await orchestrator.download(WATCH, target)
    stdout, stderr = await process.communicate()

    assert stderr is None
    assert process.returncode == 0
    assert stdout.decode().split() == [
        "--extract-audio",
        "--audio-format",
        "mp3",
        "-o",
        f"{target}.%(ext)s",
        WATCH,
    ]


async def test_download_returns_before_the_process_exits(fake_tool, tmp_path):
    downloader = ExternalTool(fake_tool("slow", "sleep 5"))
    orchestrator = ProcessOrchestrator(downloader=downloader)

    process = await orchestrator.download(WATCH, str(tmp_path / "song"))
    try:
        assert process.returncode is None
    finally:
        process.kill()
        await process.wait()


async def test_download_uses_configured_audio_format(fake_tool, tmp_path):
    config = ProviderConfig(
        downloader_path=_echo_tool(fake_tool, "dl"), audio_format="opus"
    )
    orchestrator = ProcessOrchestrator.from_config(config)

    process = await orchestrator.download(WATCH, str(tmp_path / "song"))
    stdout, _ = await process.communicate()

    assert "--audio-format opus" in stdout.decode()


async def test_download_missing_executable_raises_spawn_failed(tmp_path):
    events = RecordingEvents()
    orchestrator = ProcessOrchestrator(
        downloader=DOWNLOAD_TOOL.with_executable(str(tmp_path / "missing")),
        events=events,
    )

    with pytest.raises(SpawnFailedError) as exc_info:
        await orchestrator.download(WATCH, str(tmp_path / "song"))

    assert exc_info.value.executable.endswith("missing")
    assert events.calls == [("process_failed", "download", "spawn_failed")]


async def test_download_non_executable_raises_spawn_failed(tmp_path):
    script = tmp_path / "not-executable"
    script.write_text("#!/bin/sh\necho hi\n")
    script.chmod(0o644)
    orchestrator = ProcessOrchestrator(downloader=ExternalTool(str(script)))

    with pytest.raises(SpawnFailedError):
        await orchestrator.download(WATCH, str(tmp_path / "song"))


async def test_stream_encodes_with_codec_of_configured_format(fake_tool, tmp_path):
    resolver = MediaResolver(
        RESOLVE_TOOL.with_executable(
            fake_tool("resolver", 'echo "https://media.example/audio"')
        )
    )
    config = ProviderConfig(
        transcoder_path=_echo_tool(fake_tool, "ffmpeg"), audio_format="vorbis"
    )
    orchestrator = ProcessOrchestrator.from_config(config, resolver=resolver)

    process = await orchestrator.stream(WATCH, str(tmp_path / "song.ogg"))
    stdout, _ = await process.communicate()

    assert "-c:a libvorbis" in stdout.decode()


async def test_stream_resolves_then_transcodes(fake_tool, tmp_path):
    resolver = MediaResolver(
        RESOLVE_TOOL.with_executable(
            fake_tool("resolver", 'echo "https://media.example/audio?sig=1"')
        )
    )
    transcoder = TRANSCODE_TOOL.with_executable(_echo_tool(fake_tool, "ffmpeg"))
    events = RecordingEvents()
    orchestrator = ProcessOrchestrator(
        transcoder=transcoder, resolver=resolver, events=events
    )
    destination = str(tmp_path / "out.mp3")

    process = await orchestrator.stream(WATCH, destination)
    stdout, _ = await process.communicate()

    assert stdout.decode().split() == [
        "-i",
        "https://media.example/audio?sig=1",
        "-c:a",
        "libmp3lame",
        f"file:{destination}",
        "-y",
    ]
    assert events.calls == [
        ("stream_resolved", WATCH),
        ("process_spawned", "stream", destination),
    ]


async def test_stream_resolution_failure_skips_transcoder(fake_tool, tmp_path):
    marker = tmp_path / "transcoder-ran"
    resolver = MediaResolver(
        RESOLVE_TOOL.with_executable(fake_tool("resolver", 'echo "nothing here"'))
    )
    transcoder = ExternalTool(fake_tool("ffmpeg", f'touch "{marker}"'))
    orchestrator = ProcessOrchestrator(transcoder=transcoder, resolver=resolver)

    with pytest.raises(NoUrlInOutputError):
        await orchestrator.stream(WATCH, str(tmp_path / "out.mp3"))

    assert not marker.exists()


async def test_stream_missing_transcoder_raises_spawn_failed(fake_tool, tmp_path):
    resolver = MediaResolver(
        RESOLVE_TOOL.with_executable(
            fake_tool("resolver", 'echo "https://media.example/audio"')
        )
    )
    orchestrator = ProcessOrchestrator(
        transcoder=TRANSCODE_TOOL.with_executable(str(tmp_path / "no-ffmpeg")),
        resolver=resolver,
    )

    with pytest.raises(SpawnFailedError):
        await orchestrator.stream(WATCH, str(tmp_path / "out.mp3"))


def test_tool_argv_fills_template():
    tool = ExternalTool("ffmpeg", ("-i", "{source}", "file:{destination}"))

    assert tool.argv(source="https://a", destination="x {y}.mp3") == [
        "ffmpeg",
        "-i",
        "https://a",
        "file:x {y}.mp3",
    ]
