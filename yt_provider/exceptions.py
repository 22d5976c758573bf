"""
Defines custom exceptions for the provider to allow for more specific error handling.

Each component raises its own family of errors. Every exception carries a
stable ``kind`` string so callers can branch on the failure without parsing
the message text.
"""


class YouTubeProviderError(Exception):
    """Base exception for all provider-specific errors."""

    kind = "provider_error"


class ConfigurationError(YouTubeProviderError):
    """Raised for issues related to configuration loading or validation."""

    kind = "configuration"


class SearchRequestError(YouTubeProviderError):
    """Raised when the search page could not be fetched."""

    kind = "search_request"

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


# Extraction


class ExtractionError(YouTubeProviderError):
    """Raised when the embedded results payload cannot be located or decoded."""

    kind = "extraction"


class BoundaryNotFoundError(ExtractionError):
    """Raised when a boundary pattern matches nowhere in the response text."""

    kind = "boundary_not_found"

    def __init__(self, boundary: str):
        super().__init__(
            f"The {boundary} boundary of the results payload was not found in the "
            "response. The page layout may have changed."
        )
        self.boundary = boundary


class InvalidRangeError(ExtractionError):
    """Raised when the begin boundary does not precede the end boundary."""

    kind = "invalid_range"

    def __init__(self, start: int, end: int):
        super().__init__(
            f"Payload boundaries are out of order (begin offset {start}, "
            f"end offset {end})."
        )
        self.start = start
        self.end = end


class MalformedPayloadError(ExtractionError):
    """Raised when the text between the boundaries is not valid JSON."""

    kind = "malformed_payload"

    def __init__(self, detail: str):
        super().__init__(f"The extracted results payload is not valid JSON: {detail}")
        self.detail = detail


# Parsing


class ParsingError(YouTubeProviderError):
    """Raised when a results item does not match the expected schema."""

    kind = "parsing"


class MissingFieldError(ParsingError):
    """
    Raised when a field is absent, empty, or of the wrong type.

    ``path`` is the full location of the field, e.g.
    ``videoRenderer.title.runs[0].text``.
    """

    kind = "missing_field"

    def __init__(self, path: str, reason: str = "missing"):
        super().__init__(f"Field '{path}' is {reason}.")
        self.path = path
        self.reason = reason


class InvalidUrlError(ParsingError):
    """Raised when a URL field is not an absolute http(s) URL."""

    kind = "invalid_url"

    def __init__(self, path: str, value: str):
        super().__init__(f"Field '{path}' is not an absolute URL: {value!r}")
        self.path = path
        self.value = value


class InvalidDurationError(ParsingError):
    """Raised when a duration string is not colon-delimited digits."""

    kind = "invalid_duration"

    def __init__(self, value: str):
        super().__init__(f"Invalid duration string: {value!r}")
        self.value = value


# Resolution


class ResolutionError(YouTubeProviderError):
    """Raised when a direct media URL could not be resolved."""

    kind = "resolution"


class ResolutionToolFailedError(ResolutionError):
    """Raised when the resolution tool cannot be launched or exits non-zero."""

    kind = "resolution_tool_failed"

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class NoOutputProducedError(ResolutionError):
    """Raised when the resolution tool printed nothing."""

    kind = "no_output_produced"


class NoUrlInOutputError(ResolutionError):
    """Raised when the resolution tool output holds no trailing https:// line."""

    kind = "no_url_in_output"


# Processes


class ProcessError(YouTubeProviderError):
    """Raised for failures around external download/transcode processes."""

    kind = "process"


class SpawnFailedError(ProcessError):
    """Raised when an external tool cannot be started."""

    kind = "spawn_failed"

    def __init__(self, executable: str, cause: OSError):
        super().__init__(f"Could not start '{executable}': {cause}")
        self.executable = executable
