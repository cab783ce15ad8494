"""Shared pytest fixtures for the CMM triage test suite.

Provides the canonical scenario reports, ready-made pipeline components,
and a factory for synthetic measurements and metrics.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from cmm_triage.analysis.thresholds import DeductionThresholds
from cmm_triage.core.models import EngineeredMetrics, FeatureMeasurement, SectionType
from cmm_triage.core.parser import ReportParser
from cmm_triage.pipeline import DeductionPipeline
from cmm_triage.scenarios import SCENARIOS
from cmm_triage.triage.inference import InferenceEngine

# ---------------------------------------------------------------------------
# Scenario report fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def good_report() -> str:
    """In-tolerance part with negligible scatter."""
    return SCENARIOS["good"]


@pytest.fixture
def offset_report() -> str:
    """Uniform positive translation with OOT rows."""
    return SCENARIOS["offset"]


@pytest.fixture
def shrinkage_report() -> str:
    """Contraction concentrated in thick sections."""
    return SCENARIOS["shrinkage"]


@pytest.fixture
def gas_report() -> str:
    """High two-sided scatter in thin sections."""
    return SCENARIOS["gas"]


@pytest.fixture
def coldshut_report() -> str:
    """Large angular deviations with accurate thick sections."""
    return SCENARIOS["coldshut"]


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parser() -> ReportParser:
    """A ReportParser instance."""
    return ReportParser()


@pytest.fixture
def thresholds() -> DeductionThresholds:
    """The default calibration table."""
    return DeductionThresholds()


@pytest.fixture
def engine(thresholds: DeductionThresholds) -> InferenceEngine:
    """An InferenceEngine with default thresholds."""
    return InferenceEngine(thresholds)


@pytest.fixture
def pipeline() -> DeductionPipeline:
    """A DeductionPipeline with default thresholds."""
    return DeductionPipeline()


# ---------------------------------------------------------------------------
# Synthetic data factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_feature() -> Callable[..., FeatureMeasurement]:
    """Factory for FeatureMeasurement rows with sensible defaults."""

    def _make(
        deviation: float,
        section_type: SectionType = SectionType.STRUCTURAL,
        out_of_tolerance: bool = False,
        feature_id: str = "POINT1_X",
    ) -> FeatureMeasurement:
        return FeatureMeasurement(
            feature_id=feature_id,
            axis="X",
            nominal=10.0,
            actual=10.0 + deviation,
            deviation=deviation,
            lower_tolerance=-0.1,
            upper_tolerance=0.1,
            out_of_tolerance=out_of_tolerance,
            section_type=section_type,
        )

    return _make


@pytest.fixture
def make_metrics() -> Callable[..., EngineeredMetrics]:
    """Factory for EngineeredMetrics that start from a neutral baseline.

    The baseline fails the good checks (scatter 0.2) but triggers no
    defect signature, so tests only set the fields they exercise.
    """

    def _make(**overrides: Any) -> EngineeredMetrics:
        baseline: dict[str, Any] = {
            "thickness_ratio": 1.0,
            "std_dev": 0.2,
            "oot_count": 0,
            "oot_ratio": 0.0,
            "mean_deviation": 0.0,
            "directionality": 0.8,
            "thick_mean_dev": 0.0,
            "thin_mean_dev": 0.0,
            "angular_mean_abs_dev": 0.0,
            "abs_mean_dev": 0.1,
            "max_angular_dev": 0.0,
            "thick_count": 1,
            "thin_count": 1,
        }
        baseline.update(overrides)
        return EngineeredMetrics(**baseline)

    return _make
