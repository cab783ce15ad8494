"""Core module providing data models, the report parser, and exceptions.

This module contains the foundational components of the deduction
pipeline: the feature and metrics records shared by every stage, the
tolerant CMM report parser, and the custom exception hierarchy.
"""

from .exceptions import (
    CmmTriageError,
    ConfigurationError,
    ReportInputError,
    ReportRenderError,
)
from .models import (
    DefectLabel,
    DefectSeverity,
    EngineeredMetrics,
    FeatureMeasurement,
    SectionType,
)
from .parser import ParsedReport, ReportParser, parse_report

__all__ = [
    "CmmTriageError",
    "ConfigurationError",
    "DefectLabel",
    "DefectSeverity",
    "EngineeredMetrics",
    "FeatureMeasurement",
    "ParsedReport",
    "ReportInputError",
    "ReportParser",
    "ReportRenderError",
    "SectionType",
    "parse_report",
]
