"""Data models shared by every stage of the deduction pipeline.

Each record is produced by exactly one stage and handed by value to the
next: the parser emits ``FeatureMeasurement`` rows, the metrics engine
reduces them to ``EngineeredMetrics``, and the inference engine turns
those into a classification.  All records are frozen.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

AXIS_TOKENS: frozenset[str] = frozenset({"X", "Y", "Z", "XZ", "YZ", "XY", "D", "R", "A", "S"})


class SectionType(StrEnum):
    """Physical region of the casting a measurement belongs to."""

    THICK = "thick"
    THIN = "thin"
    STRUCTURAL = "structural"
    ANGULAR = "angular"


class DefectLabel(StrEnum):
    """Defect hypotheses scored by the inference engine.

    Declaration order is the tie-break priority when two hypotheses
    end a scoring pass with equal scores.
    """

    SHRINKAGE_POROSITY = "Shrinkage_Porosity"
    GAS_POROSITY = "Gas_Porosity"
    COLD_SHUT = "Cold_Shut"
    FEATURE_OFFSET = "Feature_Offset"
    OTHER_DEFECT = "Other_Defect"
    GOOD = "Good"


class DefectSeverity(StrEnum):
    """Severity rating attached to every classification."""

    MINOR = "Minor"
    MODERATE = "Moderate"
    CRITICAL = "Critical"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeatureMeasurement:
    """One inspected dimension or angle from a CMM report.

    Attributes:
        feature_id: Feature group name (e.g. ``CIRCLE9_THICK_X``).
        axis: Axis token, descriptive only.
        nominal: Design value.
        actual: Measured value.
        deviation: Reported deviation; used downstream as-is.
        lower_tolerance: Lower bound of acceptable deviation.
        upper_tolerance: Upper bound of acceptable deviation.
        out_of_tolerance: ``True`` when the report flagged the row.
        section_type: Region of the part inferred from ``feature_id``.

    """

    feature_id: str
    axis: str
    nominal: float
    actual: float
    deviation: float
    lower_tolerance: float
    upper_tolerance: float
    out_of_tolerance: bool
    section_type: SectionType = SectionType.STRUCTURAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for rendering."""
        data = asdict(self)
        data["section_type"] = self.section_type.value
        return data


@dataclass(frozen=True)
class EngineeredMetrics:
    """Aggregate deviation statistics for a single analysis run.

    Attributes:
        thickness_ratio: Heavy-section error relative to light/angular error.
        std_dev: Population standard deviation of all deviations.
        oot_count: Number of out-of-tolerance measurements.
        oot_ratio: ``oot_count`` over the feature count.
        mean_deviation: Signed mean of all deviations.
        directionality: Share of deviations with the majority sign.
        thick_mean_dev: Signed mean deviation of thick features.
        thin_mean_dev: Signed mean deviation of thin and structural features.
        angular_mean_abs_dev: Mean absolute deviation of angular features.
        abs_mean_dev: Mean absolute deviation of all features.
        max_angular_dev: Largest absolute angular deviation.
        thick_count: Number of thick features.
        thin_count: Number of thin and structural features.

    """

    thickness_ratio: float = 0.0
    std_dev: float = 0.0
    oot_count: int = 0
    oot_ratio: float = 0.0
    mean_deviation: float = 0.0
    directionality: float = 0.0
    thick_mean_dev: float = 0.0
    thin_mean_dev: float = 0.0
    angular_mean_abs_dev: float = 0.0
    abs_mean_dev: float = 0.0
    max_angular_dev: float = 0.0
    thick_count: int = 0
    thin_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for display or audit."""
        return asdict(self)
