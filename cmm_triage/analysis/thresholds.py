"""Calibration table for the morphological deduction rules.

Every threshold, score weight, and bound used by the metrics and
inference engines lives in ``DeductionThresholds``.  The defaults encode
the hand-derived signatures; a YAML file can override any subset of them
when an inspector recalibrates against parts that were misclassified.

Example ``thresholds.yml``::

    gas_min_std_dev: 0.12
    offset_min_directionality: 0.9

Usage::

    thresholds = DeductionThresholds.from_yaml("thresholds.yml")
    engine = InferenceEngine(thresholds)
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionThresholds:
    """Named constants for the deduction pipeline.

    Attributes:
        noise_floor: Light-section error below which the thickness ratio
            is normalised against this floor instead.
        good_max_std_dev: Scatter ceiling for a good part.
        good_max_abs_mean: Bias ceiling for a good part.
        shrinkage_min_ratio: Thickness ratio that signals shrinkage.
        shrinkage_contraction: Thick mean deviation below which the
            contraction bonus applies.
        offset_min_directionality: Directional bias that signals an offset.
        offset_max_ratio: Thickness ratio ceiling for an offset.
        offset_min_std_dev: Scatter needed to flag an in-tolerance offset.
        gas_min_std_dev: Scatter that signals gas porosity.
        gas_max_directionality: Directional bias ceiling for gas porosity.
        cold_shut_min_angular_dev: Angular deviation that signals a cold shut.
        cold_shut_max_ratio: Thickness ratio ceiling for a cold shut.
        critical_oot_ratio: OOT share above which severity is critical.
        critical_std_dev: Scatter above which severity is critical.
        moderate_std_dev: Scatter above which severity is moderate.
        moderate_angular_dev: Angular deviation above which severity is moderate.
        good_score: Score for a part passing every good check.
        good_disqualified_score: Score for a part failing any good check.
        shrinkage_score: Base shrinkage score.
        shrinkage_contraction_bonus: Extra shrinkage score for contraction.
        shrinkage_offset_penalty: Offset penalty applied by shrinkage.
        offset_oot_score: Offset score with OOT features.
        offset_scatter_score: Offset score without OOT features.
        gas_score: Gas porosity score.
        cold_shut_score: Cold shut score.
        cold_shut_offset_penalty: Offset penalty applied by a cold shut.
        min_confidence: Lower confidence bound.
        max_confidence: Upper confidence bound.

    """

    noise_floor: float = 0.05

    good_max_std_dev: float = 0.04
    good_max_abs_mean: float = 0.05
    shrinkage_min_ratio: float = 1.6
    shrinkage_contraction: float = -0.1
    offset_min_directionality: float = 0.88
    offset_max_ratio: float = 1.4
    offset_min_std_dev: float = 0.05
    gas_min_std_dev: float = 0.15
    gas_max_directionality: float = 0.75
    cold_shut_min_angular_dev: float = 0.4
    cold_shut_max_ratio: float = 1.2

    critical_oot_ratio: float = 0.4
    critical_std_dev: float = 0.3
    moderate_std_dev: float = 0.1
    moderate_angular_dev: float = 0.5

    good_score: float = 100
    good_disqualified_score: float = -1000
    shrinkage_score: float = 80
    shrinkage_contraction_bonus: float = 20
    shrinkage_offset_penalty: float = 80
    offset_oot_score: float = 95
    offset_scatter_score: float = 40
    gas_score: float = 98
    cold_shut_score: float = 96
    cold_shut_offset_penalty: float = 50

    min_confidence: float = 5
    max_confidence: float = 99

    @classmethod
    def names(cls) -> list[str]:
        """Return every threshold name in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, overrides: dict[str, Any]) -> DeductionThresholds:
        """Build a table from defaults plus ``overrides``.

        Raises:
            ConfigurationError: On unknown or non-string names, or
                non-numeric values.

        """
        invalid = [name for name in overrides if not isinstance(name, str)]
        if invalid:
            raise ConfigurationError(
                "Unknown threshold name(s)",
                details={"unknown": [repr(name) for name in invalid]},
            )
        return cls().with_overrides(**overrides)

    @classmethod
    def from_yaml(cls, path: str | Path) -> DeductionThresholds:
        """Load threshold overrides from a YAML mapping.

        Args:
            path: YAML file; keys are threshold names.

        Returns:
            A new ``DeductionThresholds`` with overrides applied.

        Raises:
            ConfigurationError: If the file is missing, unparsable, or
                contains invalid entries.

        """
        import yaml

        config_path = Path(path)
        source = str(config_path)
        if not config_path.exists():
            raise ConfigurationError("Threshold file not found", source=source)
        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                "Threshold file is not valid YAML",
                source=source,
                details={"error": str(exc)},
            ) from exc

        if not isinstance(raw, dict):
            raise ConfigurationError(
                "Threshold file must contain a mapping",
                source=source,
                details={"type": type(raw).__name__},
            )

        try:
            thresholds = cls.from_mapping(raw)
        except ConfigurationError as exc:
            raise ConfigurationError(exc.message, source=source, details=exc.details) from exc
        logger.info("Loaded %d threshold override(s) from %s", len(raw), config_path)
        return thresholds

    def with_overrides(self, **overrides: Any) -> DeductionThresholds:
        """Return a recalibrated copy of this table.

        Raises:
            ConfigurationError: On unknown names or non-numeric values.

        """
        known = set(self.names())
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown threshold name(s)",
                details={"unknown": unknown},
            )

        cleaned: dict[str, float] = {}
        for name, value in overrides.items():
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ConfigurationError(
                    f"Threshold '{name}' must be numeric",
                    details={"value": value},
                )
            cleaned[name] = float(value)

        if cleaned.get("noise_floor", self.noise_floor) <= 0:
            raise ConfigurationError(
                "Threshold 'noise_floor' must be positive",
                details={"value": cleaned.get("noise_floor")},
            )
        return replace(self, **cleaned)

    def to_dict(self) -> dict[str, float]:
        """Export the table as a plain mapping."""
        return asdict(self)


DEFAULT_THRESHOLDS = DeductionThresholds()
