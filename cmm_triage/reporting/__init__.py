"""Inspection report generation in HTML.

Uses Jinja2 templates to render per-part verdicts, engineered metrics,
and parsed feature tables.
"""

from .report_generator import ReportGenerator

__all__ = ["ReportGenerator"]
