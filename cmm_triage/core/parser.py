"""Tolerant parser for free-form tabular CMM inspection reports.

CMM exports vary between machines and operators, so the parser makes no
attempt to validate layout.  Every line is classified independently as
metadata, a control line (``Part No`` / ``Feature``), or a candidate data
row; anything that does not carry at least six numeric tokens is dropped
without complaint.

Usage::

    parser = ReportParser()
    parsed = parser.parse(report_text)
    for feature in parsed.features:
        print(feature.feature_id, feature.deviation)
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace

from .models import AXIS_TOKENS, FeatureMeasurement, SectionType

logger = logging.getLogger(__name__)

DEFAULT_PART_ID = "A3188-337-00"
DEFAULT_FEATURE_ID = "Feature"
VALUES_PER_ROW = 6

METADATA_PREFIXES: tuple[str, ...] = (
    "Report Name",
    "Part Name",
    "Inspector",
    "Company",
    "Date",
    "Unit",
    "Feature Nom",
)
METADATA_MARKER = "Label:"
PART_NUMBER_PREFIX = "Part No"
FEATURE_PREFIX = "Feature "

# Checked in order; the first keyword group found in the feature id wins.
SECTION_KEYWORDS: tuple[tuple[SectionType, tuple[str, ...]], ...] = (
    (SectionType.THICK, ("thick", "boss", "cylinder", "circle9", "circle21")),
    (SectionType.THIN, ("thin", "rib", "point62", "point67", "point68")),
    (SectionType.ANGULAR, ("ang", "angle")),
    (SectionType.STRUCTURAL, ("line", "point", "plane")),
)

_NUMERIC_TOKEN = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")
_LEADING_NUMBER = re.compile(r"^[-+]?(?:\d|\.\d)")
_PART_NUMBER_SPLIT = re.compile(r"[:\s]")


@dataclass(frozen=True)
class ParsedReport:
    """Structured content extracted from a report.

    Attributes:
        part_id: Part number read from the ``Part No`` line.
        features: Measurements in report order.

    """

    part_id: str = DEFAULT_PART_ID
    features: tuple[FeatureMeasurement, ...] = ()


@dataclass(frozen=True)
class _ParseState:
    """Accumulator threaded through the line fold."""

    part_id: str = DEFAULT_PART_ID
    current_feature: str = DEFAULT_FEATURE_ID
    features: tuple[FeatureMeasurement, ...] = ()


def classify_section(feature_id: str) -> SectionType:
    """Infer the casting region of a feature from its identifier."""
    lowered = feature_id.lower()
    for section, keywords in SECTION_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return section
    return SectionType.STRUCTURAL


def resolve_axis(tokens: list[str], feature_id: str) -> str:
    """Pick the axis token of a row, falling back to the feature id suffix."""
    for token in tokens:
        if token.upper() in AXIS_TOKENS:
            return token.upper()
    segments = feature_id.split("_")
    if len(segments) > 1:
        return segments[-1] or "D"
    return "D"


def is_metadata_line(line: str) -> bool:
    """Return ``True`` for header lines that carry no measurement data."""
    return line.startswith(METADATA_PREFIXES) or METADATA_MARKER in line


class ReportParser:
    """Turn raw CMM report text into ordered feature measurements.

    The ``Feature`` context carried between lines is folded through an
    immutable accumulator, so a parser instance holds no per-report
    state and may be reused freely.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def parse(self, text: str) -> ParsedReport:
        """Parse a complete report.

        Args:
            text: Multi-line report content.

        Returns:
            A ``ParsedReport``; empty input yields no features and the
            default part id.

        """
        state = _ParseState()
        for line in text.splitlines():
            state = self._step(state, line.strip())

        self._logger.debug(
            "Parsed %d feature rows for part %s", len(state.features), state.part_id
        )
        return ParsedReport(part_id=state.part_id, features=state.features)

    # -- Internal helpers ---------------------------------------------------

    def _step(self, state: _ParseState, line: str) -> _ParseState:
        """Fold a single stripped line into the parse state."""
        if not line or is_metadata_line(line):
            return state

        if line.startswith(PART_NUMBER_PREFIX):
            token = _PART_NUMBER_SPLIT.split(line)[-1].strip()
            return replace(state, part_id=token or state.part_id)

        if line.startswith(FEATURE_PREFIX):
            return replace(state, current_feature=line.split()[1])

        feature = self._parse_row(line, state.current_feature)
        if feature is None:
            return state
        return replace(state, features=(*state.features, feature))

    def _parse_row(self, line: str, current_feature: str) -> FeatureMeasurement | None:
        """Build a measurement from a data row, or ``None`` if it has too few numbers."""
        tokens = line.split()
        numbers = [float(token) for token in tokens if _NUMERIC_TOKEN.match(token)]
        if len(numbers) < VALUES_PER_ROW:
            self._logger.debug("Skipping non-data line: %r", line)
            return None

        nominal, actual, deviation, lower, upper, flag = numbers[-VALUES_PER_ROW:]

        feature_id = current_feature
        first = tokens[0]
        if (
            not _LEADING_NUMBER.match(first)
            and first.upper() not in AXIS_TOKENS
            and "." not in first
        ):
            feature_id = first

        return FeatureMeasurement(
            feature_id=feature_id,
            axis=resolve_axis(tokens, feature_id),
            nominal=nominal,
            actual=actual,
            deviation=deviation,
            lower_tolerance=lower,
            upper_tolerance=upper,
            out_of_tolerance=math.floor(flag + 0.5) != 0,
            section_type=classify_section(feature_id),
        )


def parse_report(text: str) -> ParsedReport:
    """Parse ``text`` with a default ``ReportParser``."""
    return ReportParser().parse(text)
