"""
Pydantic model for provider configuration.
Provides validation for all settings.
"""

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

SEARCH_URL = "https://youtube.com/results"
WATCH_URL = "https://youtube.com/watch"
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/104.0.5112.102 Safari/537.36"
)

# yt-dlp --audio-format value -> (file extension it writes, ffmpeg encoders
# for that container). The first encoder is used when audio_codec is empty.
AUDIO_FORMATS: dict[str, tuple[str, tuple[str, ...]]] = {
    "mp3": ("mp3", ("libmp3lame", "libshine")),
    "m4a": ("m4a", ("aac", "libfdk_aac", "alac")),
    "aac": ("m4a", ("aac", "libfdk_aac")),
    "opus": ("opus", ("libopus",)),
    "vorbis": ("ogg", ("libvorbis",)),
    "flac": ("flac", ("flac",)),
    "wav": ("wav", ("pcm_s16le", "pcm_s24le", "pcm_f32le")),
}


class ProviderConfig(BaseModel):
    """A validated configuration model for the provider."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Search
    search_url: str = SEARCH_URL
    watch_url: str = WATCH_URL
    user_agent: str = USER_AGENT
    request_timeout: int = 30

    # External tools
    downloader_path: str = "yt-dlp"
    resolver_path: str = "yt-dlp"
    transcoder_path: str = "ffmpeg"

    # Output
    audio_format: str = "mp3"
    audio_codec: str = ""
    output_dir: str = "."

    @field_validator("search_url", "watch_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensures endpoints are absolute http(s) URLs without a query string."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Must be an absolute http(s) URL, got: {v!r}")
        if parsed.query:
            raise ValueError("Must not contain a query string.")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 1 or v > 120:
            raise ValueError("Request timeout must be between 1 and 120 seconds.")
        return v

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        v = v.lower()
        if v not in AUDIO_FORMATS:
            raise ValueError(f"Audio format must be one of: {', '.join(AUDIO_FORMATS)}.")
        return v

    @field_validator("user_agent", "downloader_path", "resolver_path", "transcoder_path")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Value cannot be empty.")
        return v

    @model_validator(mode="after")
    def validate_codec_matches_format(self) -> "ProviderConfig":
        _, codecs = AUDIO_FORMATS[self.audio_format]
        if self.audio_codec and self.audio_codec not in codecs:
            raise ValueError(
                f"Audio codec '{self.audio_codec}' cannot be written as"
                f" {self.audio_format}; use one of: {', '.join(codecs)}"
                " (or leave it empty)."
            )
        return self

    @property
    def file_extension(self) -> str:
        """Extension of the files produced for the configured audio format."""
        return AUDIO_FORMATS[self.audio_format][0]

    @property
    def transcode_codec(self) -> str:
        return self.audio_codec or AUDIO_FORMATS[self.audio_format][1][0]

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        return set(cls.model_fields)
