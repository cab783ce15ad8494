"""Rule-based deduction of the defect class from engineered metrics.

Each defect hypothesis has a morphological signature expressed as guard
conditions over the metrics.  Scoring is a single pass over an ordered
rule table: every rule whose guard holds applies its adjustments to a
shared score map, which lets one hypothesis suppress another (localised
shrinkage and angular mis-fusion both count as evidence against a
uniform feature offset).  Guards always read the original metrics, never
the running scores.

Signatures::

    Shrinkage_Porosity  thickness ratio >= 1.6, contraction in thick sections
    Gas_Porosity        std dev > 0.15 with low directional bias (< 0.75)
    Cold_Shut           max angular dev > 0.4 with ratio < 1.2
    Feature_Offset      directionality > 0.88 with ratio < 1.4 and OOT rows
    Good                no OOT, std dev < 0.04, |mean dev| < 0.05

Usage::

    engine = InferenceEngine()
    result = engine.classify("A3188-337-00", metrics)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..analysis.thresholds import DEFAULT_THRESHOLDS, DeductionThresholds
from ..core.models import DefectLabel, DefectSeverity, EngineeredMetrics
from .defect_report import ClassificationResult
from .reasoning import generate_reasoning

logger = logging.getLogger(__name__)

Condition = Callable[[EngineeredMetrics, DeductionThresholds], bool]

RESIDUAL_LABEL = DefectLabel.OTHER_DEFECT


class ScoreOp(StrEnum):
    """How an adjustment combines with the running score."""

    SET = "set"
    ADD = "add"


@dataclass(frozen=True)
class ScoreAdjustment:
    """Change applied to one hypothesis when a rule fires.

    Attributes:
        label: Hypothesis whose score changes.
        op: Whether the weight replaces or is added to the score.
        weight: Name of the ``DeductionThresholds`` field holding the weight.
        sign: ``-1`` turns the weight into a penalty.

    """

    label: DefectLabel
    op: ScoreOp
    weight: str
    sign: int = 1

    def apply(self, scores: dict[DefectLabel, float], thresholds: DeductionThresholds) -> None:
        """Apply this adjustment to ``scores`` in place."""
        value = self.sign * getattr(thresholds, self.weight)
        if self.op == ScoreOp.SET:
            scores[self.label] = value
        else:
            scores[self.label] += value


@dataclass(frozen=True)
class ScoringRule:
    """Guard condition plus the adjustments it triggers."""

    name: str
    condition: Condition
    adjustments: tuple[ScoreAdjustment, ...]


# ---------------------------------------------------------------------------
# Signature guards
# ---------------------------------------------------------------------------


def _passes_good_checks(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return (
        m.oot_count == 0
        and m.std_dev < t.good_max_std_dev
        and abs(m.mean_deviation) < t.good_max_abs_mean
    )


def _fails_good_checks(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return not _passes_good_checks(m, t)


def _has_thick_section_bias(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return m.thickness_ratio >= t.shrinkage_min_ratio


def _has_thick_contraction(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return _has_thick_section_bias(m, t) and m.thick_mean_dev < t.shrinkage_contraction


def _is_uniformly_directional(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return (
        m.directionality > t.offset_min_directionality
        and m.thickness_ratio < t.offset_max_ratio
    )


def _is_offset_with_failures(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return _is_uniformly_directional(m, t) and m.oot_count > 0


def _is_offset_with_scatter(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return (
        _is_uniformly_directional(m, t)
        and m.oot_count == 0
        and m.std_dev > t.offset_min_std_dev
    )


def _is_turbulent_scatter(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    return m.std_dev > t.gas_min_std_dev and m.directionality < t.gas_max_directionality


def _is_angular_misfusion(m: EngineeredMetrics, t: DeductionThresholds) -> bool:
    if not (
        m.max_angular_dev > t.cold_shut_min_angular_dev
        and m.thickness_ratio < t.cold_shut_max_ratio
    ):
        return False
    return m.oot_count == 0 or m.max_angular_dev > m.abs_mean_dev


SCORING_RULES: tuple[ScoringRule, ...] = (
    ScoringRule(
        name="good_pass",
        condition=_passes_good_checks,
        adjustments=(ScoreAdjustment(DefectLabel.GOOD, ScoreOp.SET, "good_score"),),
    ),
    ScoringRule(
        name="good_disqualified",
        condition=_fails_good_checks,
        adjustments=(
            ScoreAdjustment(DefectLabel.GOOD, ScoreOp.SET, "good_disqualified_score"),
        ),
    ),
    ScoringRule(
        name="shrinkage",
        condition=_has_thick_section_bias,
        adjustments=(
            ScoreAdjustment(DefectLabel.SHRINKAGE_POROSITY, ScoreOp.ADD, "shrinkage_score"),
            ScoreAdjustment(
                DefectLabel.FEATURE_OFFSET, ScoreOp.ADD, "shrinkage_offset_penalty", sign=-1
            ),
        ),
    ),
    ScoringRule(
        name="shrinkage_contraction",
        condition=_has_thick_contraction,
        adjustments=(
            ScoreAdjustment(
                DefectLabel.SHRINKAGE_POROSITY, ScoreOp.ADD, "shrinkage_contraction_bonus"
            ),
        ),
    ),
    ScoringRule(
        name="offset_out_of_tolerance",
        condition=_is_offset_with_failures,
        adjustments=(
            ScoreAdjustment(DefectLabel.FEATURE_OFFSET, ScoreOp.ADD, "offset_oot_score"),
        ),
    ),
    ScoringRule(
        name="offset_scatter",
        condition=_is_offset_with_scatter,
        adjustments=(
            ScoreAdjustment(DefectLabel.FEATURE_OFFSET, ScoreOp.ADD, "offset_scatter_score"),
        ),
    ),
    ScoringRule(
        name="gas_porosity",
        condition=_is_turbulent_scatter,
        adjustments=(ScoreAdjustment(DefectLabel.GAS_POROSITY, ScoreOp.SET, "gas_score"),),
    ),
    ScoringRule(
        name="cold_shut",
        condition=_is_angular_misfusion,
        adjustments=(
            ScoreAdjustment(DefectLabel.COLD_SHUT, ScoreOp.SET, "cold_shut_score"),
            ScoreAdjustment(
                DefectLabel.FEATURE_OFFSET, ScoreOp.ADD, "cold_shut_offset_penalty", sign=-1
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class InferenceEngine:
    """Score defect hypotheses and pick the most probable one.

    Args:
        thresholds: Calibration table for guards, weights, and bounds.
        rules: Ordered scoring rules; defaults to ``SCORING_RULES``.

    """

    def __init__(
        self,
        thresholds: DeductionThresholds = DEFAULT_THRESHOLDS,
        rules: tuple[ScoringRule, ...] = SCORING_RULES,
    ) -> None:
        """Initialize the engine with a threshold table and rule set."""
        self._thresholds = thresholds
        self._rules = rules
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def thresholds(self) -> DeductionThresholds:
        """Return the calibration table in use."""
        return self._thresholds

    def score(self, metrics: EngineeredMetrics) -> dict[DefectLabel, float]:
        """Run one scoring pass over the rule table.

        Args:
            metrics: Metrics for the part under analysis.

        Returns:
            Score per hypothesis, keyed in ``DefectLabel`` declaration order.

        """
        scores: dict[DefectLabel, float] = {label: 0 for label in DefectLabel}
        for rule in self._rules:
            if rule.condition(metrics, self._thresholds):
                self._logger.debug("Rule '%s' fired", rule.name)
                for adjustment in rule.adjustments:
                    adjustment.apply(scores, self._thresholds)
        return scores

    @staticmethod
    def select_winner(scores: dict[DefectLabel, float]) -> tuple[DefectLabel, float]:
        """Return the highest-scoring hypothesis and its score.

        Ties go to the hypothesis declared first in ``DefectLabel``.  When
        no hypothesis scores above zero the residual ``Other_Defect`` wins.
        """
        ranked = sorted(
            ((label, scores.get(label, 0)) for label in DefectLabel),
            key=lambda item: item[1],
            reverse=True,
        )
        label, score = ranked[0]
        if score <= 0:
            return RESIDUAL_LABEL, scores.get(RESIDUAL_LABEL, 0)
        return label, score

    def rate_severity(self, metrics: EngineeredMetrics) -> DefectSeverity:
        """Rate severity from the metrics alone, independent of the label."""
        t = self._thresholds
        if metrics.oot_ratio > t.critical_oot_ratio or metrics.std_dev > t.critical_std_dev:
            return DefectSeverity.CRITICAL
        if (
            metrics.oot_count > 0
            or metrics.std_dev > t.moderate_std_dev
            or metrics.max_angular_dev > t.moderate_angular_dev
        ):
            return DefectSeverity.MODERATE
        return DefectSeverity.MINOR

    def classify(self, part_id: str, metrics: EngineeredMetrics) -> ClassificationResult:
        """Classify a part from its engineered metrics.

        Args:
            part_id: Part number carried into the result.
            metrics: Metrics for the part under analysis.

        Returns:
            An immutable ``ClassificationResult``.

        """
        scores = self.score(metrics)
        label, raw_score = self.select_winner(scores)
        confidence = float(
            min(
                max(raw_score, self._thresholds.min_confidence),
                self._thresholds.max_confidence,
            )
        )
        reasoning = generate_reasoning(label, metrics)

        return ClassificationResult(
            part_id=part_id,
            label=label,
            confidence=confidence,
            severity=self.rate_severity(metrics),
            root_cause=reasoning.root_cause,
            recommended_action=reasoning.recommended_action,
        )
