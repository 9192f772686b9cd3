"""Structured editing-session logging.

Responsibilities:
- Emit concise, deterministic `[session]` lines through `loguru`.
- Never log document text; only stages, events, and small identifiers.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [f"{key}={_sanitize_context_value(context[key])}" for key in sorted(context)]
    return " " + " ".join(tokens)


class SessionLogger:
    """Emit deterministic lifecycle logs for one editing session.

    Passing a `sink` routes all loguru output to it with a bare `{message}`
    format; without one, the process-wide loguru configuration is left alone.
    """

    def __init__(self, page: str, sink: TextIO | None = None) -> None:
        self._page = page
        if sink is not None:
            _loguru_logger.remove()
            _loguru_logger.add(sink, format="{message}", level="DEBUG", colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured session log line."""

        context.setdefault("page", self._page)
        line = f"[session] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def log_loaded(self, alignment: str, override_paths: int) -> None:
        """Emit a load event with the number of captured override leaves."""

        self._emit("INFO", "loaded", "load", alignment=alignment, override_paths=override_paths)

    def log_edit(self, operation: str, path: str, locale: str | None = None) -> None:
        """Emit a debug-level edit event."""

        self._emit("DEBUG", operation, "edit", path=path, locale=locale or "default")

    def log_unmatched_override(self, path: str) -> None:
        """Emit a warning for an override with no matching list element."""

        self._emit("WARNING", "unmatched-override", "merge", path=path)

    def log_save_start(self) -> None:
        self._emit("INFO", "start", "save")

    def log_save_complete(self) -> None:
        self._emit("INFO", "complete", "save")

    def log_save_failure(self, error_type: str) -> None:
        """Emit a save failure without the transport's message payload."""

        self._emit("ERROR", "failure", "save", error_type=error_type)

    def log_discard(self) -> None:
        self._emit("INFO", "discard", "edit")

    def log_reload(self) -> None:
        self._emit("INFO", "reload", "load")
