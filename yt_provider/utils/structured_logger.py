"""
Structured logging system for better log analysis and debugging.
Provides JSON-formatted logs with context and metadata.
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any


class StructuredLogger:
    """
    Logger that outputs both human-readable and machine-parseable logs.

    Usage:
        logger = StructuredLogger("yt_provider", log_dir=Path("logs"))
        logger.info("search_completed", query="lofi", results=20)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            log_dir: Directory for JSON log files (None = disabled)
            enable_json: Enable JSON file logging
            enable_console: Enable console output
        """
        self.name = name
        self.log_dir = log_dir
        self.enable_json = enable_json and log_dir is not None
        self.enable_console = enable_console

        self._logger = logging.getLogger(name)

        self._json_file = None
        self.json_log_path: Path | None = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.json_log_path = log_dir / f"yt_provider_{timestamp}.jsonl"
            self._json_file = open(self.json_log_path, "a", encoding="utf-8")  # noqa: SIM115

        # Session context (added to all log entries)
        self._session_context: dict[str, Any] = {
            "session_id": f"{int(time.time())}_{id(self)}",
        }

    def set_session_context(self, **kwargs) -> None:
        """Set session-level context that appears in all logs."""
        self._session_context.update(kwargs)

    def _format_message(self, event: str, **context) -> str:
        parts = [f"[{event}]"]
        for key, value in context.items():
            parts.append(f"{key}={value}")
        return " ".join(parts)

    def _write_json(self, level: str, event: str, **context) -> None:
        if not self._json_file or self._json_file.closed:
            return

        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "event": event,
            **self._session_context,
            **context,
        }

        try:
            self._json_file.write(json.dumps(entry, default=str) + "\n")
            self._json_file.flush()
        except OSError as e:
            print(f"JSON logging failed: {e}", file=sys.stderr)

    def _log(self, level: int, event: str, **context) -> None:
        if self.enable_console:
            self._logger.log(level, self._format_message(event, **context))
        if self.enable_json:
            self._write_json(logging.getLevelName(level), event, **context)

    def debug(self, event: str, **context) -> None:
        self._log(logging.DEBUG, event, **context)

    def info(self, event: str, **context) -> None:
        self._log(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        self._log(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        self._log(logging.ERROR, event, **context)

    def close(self) -> None:
        """Close JSON log file."""
        if self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class SearchLogger:
    """Specialized logger for search events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def search_completed(
        self, query: str, results: int, page_chars: int, duration_ms: float
    ):
        """Log a search that produced a result list."""
        self.logger.debug(
            "search_completed",
            query=query,
            results=results,
            page_chars=page_chars,
            duration_ms=round(duration_ms, 2),
        )

    def search_failed(self, query: str, error: Exception):
        """Log a search that failed, keeping the failure kind for drift analysis."""
        self.logger.error(
            "search_failed",
            query=query,
            kind=getattr(error, "kind", type(error).__name__),
            error=str(error),
        )


class ProcessLogger:
    """Specialized logger for external process events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def stream_resolved(self, url: str, duration_ms: float):
        self.logger.debug(
            "stream_resolved", url=url, duration_ms=round(duration_ms, 2)
        )

    def process_spawned(self, pipeline: str, url: str, target: str, pid: int):
        self.logger.debug(
            "process_spawned", pipeline=pipeline, url=url, target=target, pid=pid
        )

    def process_failed(self, pipeline: str, url: str, error: Exception):
        self.logger.error(
            "process_failed",
            pipeline=pipeline,
            url=url,
            kind=getattr(error, "kind", type(error).__name__),
            error=str(error),
        )


def create_structured_logger(
    log_dir: Path | None = None, enable_json: bool = False
) -> tuple[StructuredLogger, SearchLogger, ProcessLogger]:
    """
    Create all structured loggers.

    Returns:
        Tuple of (base_logger, search_logger, process_logger)
    """
    base = StructuredLogger("yt_provider", log_dir=log_dir, enable_json=enable_json)
    return base, SearchLogger(base), ProcessLogger(base)
