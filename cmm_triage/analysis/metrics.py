"""Reduction of feature measurements to engineered deviation metrics.

The metrics describe the *shape* of the dimensional error rather than
individual failures: how much it scatters, whether it leans one way, and
whether it concentrates in heavy sections or in angular features.  Every
mean guards its denominator, so an empty report produces an all-zero
record instead of an error.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..core.models import EngineeredMetrics, FeatureMeasurement, SectionType
from .thresholds import DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> float:
    """Arithmetic mean, ``0.0`` for an empty sequence."""
    return sum(values) / len(values) if values else 0.0


def _abs_mean(features: Sequence[FeatureMeasurement]) -> float:
    return _mean([abs(f.deviation) for f in features])


def compute_metrics(
    features: Sequence[FeatureMeasurement],
    noise_floor: float = DEFAULT_THRESHOLDS.noise_floor,
) -> EngineeredMetrics:
    """Compute the engineered metrics for one analysis run.

    Args:
        features: Parsed measurements, possibly empty.
        noise_floor: Light-section error below which the thickness ratio
            is normalised against the floor itself.

    Returns:
        An immutable ``EngineeredMetrics`` record.

    """
    deviations = [f.deviation for f in features]
    n = len(deviations) or 1

    mean_deviation = sum(deviations) / n
    std_dev = math.sqrt(sum((d - mean_deviation) ** 2 for d in deviations) / n)

    thick = [f for f in features if f.section_type == SectionType.THICK]
    thin = [
        f
        for f in features
        if f.section_type in (SectionType.THIN, SectionType.STRUCTURAL)
    ]
    angular = [f for f in features if f.section_type == SectionType.ANGULAR]

    thick_abs_mean = _abs_mean(thick)
    thin_abs_mean = _abs_mean(thin)
    angular_abs_mean = _abs_mean(angular)

    light_error = thin_abs_mean + angular_abs_mean
    if light_error < noise_floor:
        thickness_ratio = thick_abs_mean / noise_floor
    else:
        populated = int(bool(thin)) + int(bool(angular))
        thickness_ratio = thick_abs_mean / (light_error / populated)

    oot_count = sum(1 for f in features if f.out_of_tolerance)
    positive = sum(1 for d in deviations if d > 0)
    negative = sum(1 for d in deviations if d < 0)

    metrics = EngineeredMetrics(
        thickness_ratio=thickness_ratio,
        std_dev=std_dev,
        oot_count=oot_count,
        oot_ratio=oot_count / n,
        mean_deviation=mean_deviation,
        directionality=max(positive, negative) / n,
        thick_mean_dev=_mean([f.deviation for f in thick]),
        thin_mean_dev=_mean([f.deviation for f in thin]),
        angular_mean_abs_dev=angular_abs_mean,
        abs_mean_dev=sum(abs(d) for d in deviations) / n,
        max_angular_dev=max((abs(f.deviation) for f in angular), default=0.0),
        thick_count=len(thick),
        thin_count=len(thin),
    )
    logger.debug("Computed metrics over %d features: %s", len(deviations), metrics)
    return metrics
