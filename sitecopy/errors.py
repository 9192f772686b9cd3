"""Domain exceptions for configuration, schema, and CLI diagnostics.

Malformed persisted documents are never an error: the document engine absorbs
them into default values. These exceptions cover programmer and operator
mistakes only.
"""

from __future__ import annotations


class SitecopyError(RuntimeError):
    """Raised when a specific command stage fails."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class SchemaError(ValueError):
    """Raised when a page schema descriptor is malformed or not registered."""
