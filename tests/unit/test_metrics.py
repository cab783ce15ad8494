"""Unit tests for compute_metrics."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from cmm_triage.analysis.metrics import compute_metrics
from cmm_triage.core.models import EngineeredMetrics, FeatureMeasurement, SectionType
from cmm_triage.core.parser import parse_report

MakeFeature = Callable[..., FeatureMeasurement]


class TestEmptyInput:
    """Degenerate inputs must not divide by zero."""

    def test_no_features_yields_zero_metrics(self) -> None:
        assert compute_metrics([]) == EngineeredMetrics()

    def test_to_dict_has_every_field(self) -> None:
        data = compute_metrics([]).to_dict()
        assert set(data) == {
            "thickness_ratio",
            "std_dev",
            "oot_count",
            "oot_ratio",
            "mean_deviation",
            "directionality",
            "thick_mean_dev",
            "thin_mean_dev",
            "angular_mean_abs_dev",
            "abs_mean_dev",
            "max_angular_dev",
            "thick_count",
            "thin_count",
        }


class TestBasicStatistics:
    """Mean, scatter, OOT, and directionality."""

    def test_mean_and_population_std(self, make_feature: MakeFeature) -> None:
        metrics = compute_metrics([make_feature(0.1), make_feature(-0.1)])
        assert metrics.mean_deviation == pytest.approx(0.0)
        assert metrics.std_dev == pytest.approx(0.1)
        assert metrics.abs_mean_dev == pytest.approx(0.1)

    def test_oot_count_and_ratio(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(0.2, out_of_tolerance=True),
            make_feature(0.01),
            make_feature(0.02),
            make_feature(-0.3, out_of_tolerance=True),
        ]
        metrics = compute_metrics(features)
        assert metrics.oot_count == 2
        assert metrics.oot_ratio == pytest.approx(0.5)

    def test_directionality_counts_majority_sign(self, make_feature: MakeFeature) -> None:
        features = [make_feature(0.1), make_feature(0.2), make_feature(0.3), make_feature(-0.1)]
        assert compute_metrics(features).directionality == pytest.approx(0.75)

    def test_zero_deviation_is_unsigned(self, make_feature: MakeFeature) -> None:
        features = [make_feature(0.0), make_feature(0.0), make_feature(0.1), make_feature(-0.1)]
        assert compute_metrics(features).directionality == pytest.approx(0.25)


class TestSectionPartitions:
    """Per-section statistics and the thickness ratio."""

    def test_thin_and_structural_share_partition(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(0.1, SectionType.THIN),
            make_feature(-0.3, SectionType.STRUCTURAL),
            make_feature(0.5, SectionType.THICK),
        ]
        metrics = compute_metrics(features)
        assert metrics.thin_count == 2
        assert metrics.thick_count == 1
        assert metrics.thin_mean_dev == pytest.approx(-0.1)
        assert metrics.thick_mean_dev == pytest.approx(0.5)

    def test_ratio_uses_noise_floor_for_quiet_light_sections(
        self, make_feature: MakeFeature
    ) -> None:
        features = [
            make_feature(-0.4, SectionType.THICK),
            make_feature(0.01, SectionType.THIN),
        ]
        assert compute_metrics(features).thickness_ratio == pytest.approx(0.4 / 0.05)

    def test_ratio_averages_populated_light_partitions(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(0.3, SectionType.THICK),
            make_feature(0.1, SectionType.THIN),
            make_feature(-0.5, SectionType.ANGULAR),
        ]
        # (0.1 + 0.5) / 2 partitions = 0.3
        assert compute_metrics(features).thickness_ratio == pytest.approx(1.0)

    def test_ratio_with_single_light_partition(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(0.3, SectionType.THICK),
            make_feature(0.2, SectionType.THIN),
        ]
        assert compute_metrics(features).thickness_ratio == pytest.approx(1.5)

    def test_ratio_without_thick_features(self, make_feature: MakeFeature) -> None:
        features = [make_feature(0.2, SectionType.THIN)]
        assert compute_metrics(features).thickness_ratio == 0.0

    def test_custom_noise_floor(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(0.2, SectionType.THICK),
            make_feature(0.06, SectionType.THIN),
        ]
        assert compute_metrics(features, noise_floor=0.1).thickness_ratio == pytest.approx(2.0)

    def test_angular_statistics(self, make_feature: MakeFeature) -> None:
        features = [
            make_feature(-0.68, SectionType.ANGULAR),
            make_feature(0.2, SectionType.ANGULAR),
            make_feature(0.9, SectionType.THIN),
        ]
        metrics = compute_metrics(features)
        assert metrics.max_angular_dev == pytest.approx(0.68)
        assert metrics.angular_mean_abs_dev == pytest.approx(0.44)

    def test_no_angular_features(self, make_feature: MakeFeature) -> None:
        metrics = compute_metrics([make_feature(0.9, SectionType.THIN)])
        assert metrics.max_angular_dev == 0.0
        assert metrics.angular_mean_abs_dev == 0.0


class TestScenarioMetrics:
    """Metrics on the canonical scenario reports."""

    def test_good(self, good_report: str) -> None:
        metrics = compute_metrics(parse_report(good_report).features)
        assert metrics.oot_count == 0
        assert metrics.std_dev < 0.04
        assert abs(metrics.mean_deviation) < 0.05

    def test_offset(self, offset_report: str) -> None:
        metrics = compute_metrics(parse_report(offset_report).features)
        assert metrics.directionality == pytest.approx(1.0)
        assert metrics.oot_count == 4
        assert metrics.thickness_ratio == pytest.approx(0.120 / 0.115)

    def test_shrinkage(self, shrinkage_report: str) -> None:
        metrics = compute_metrics(parse_report(shrinkage_report).features)
        assert metrics.thickness_ratio == pytest.approx(0.44225 / 0.05)
        assert metrics.thick_mean_dev == pytest.approx(-0.44225)

    def test_gas(self, gas_report: str) -> None:
        metrics = compute_metrics(parse_report(gas_report).features)
        assert metrics.std_dev > 0.15
        assert metrics.directionality == pytest.approx(0.6)

    def test_coldshut(self, coldshut_report: str) -> None:
        metrics = compute_metrics(parse_report(coldshut_report).features)
        assert metrics.max_angular_dev == pytest.approx(0.68)
        assert metrics.thickness_ratio < 1.2
        assert metrics.oot_count == 0
        assert metrics.angular_mean_abs_dev == pytest.approx(0.655)
