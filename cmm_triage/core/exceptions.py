"""Custom exception hierarchy for the CMM defect triage package.

The deduction pipeline itself never raises: malformed report lines are
skipped and empty reports produce a degenerate but well-formed result.
These exceptions belong to the outer layers (threshold loading, report
file ingestion, HTML rendering) and all inherit from ``CmmTriageError``
so callers can install a single top-level handler.

Exception tree::

    CmmTriageError
    ├── ConfigurationError
    ├── ReportInputError
    └── ReportRenderError
"""

from __future__ import annotations


class CmmTriageError(Exception):
    """Base exception for all CMM triage errors.

    Attributes:
        message: Human-readable error description.
        source: Optional file or template the error relates to.
        details: Optional mapping of additional contextual data.

    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize with a message, optional source context, and details."""
        self.message = message
        self.source = source
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional source context."""
        parts: list[str] = []
        if self.source:
            parts.append(f"[{self.source}]")
        parts.append(self.message)
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class ConfigurationError(CmmTriageError):
    """Raised when a threshold table cannot be loaded.

    Examples:
        - Threshold file missing or not valid YAML
        - Top-level document is not a mapping
        - Unknown threshold name
        - Non-numeric threshold value

    """


class ReportInputError(CmmTriageError):
    """Raised when a CMM report cannot be read from its source.

    Examples:
        - Report file not found
        - File is not decodable as UTF-8 text

    """


class ReportRenderError(CmmTriageError):
    """Raised when the HTML inspection report cannot be rendered.

    Examples:
        - Template directory or template file missing
        - Template syntax error

    """
