"""Unit tests for the HTML ReportGenerator."""

from __future__ import annotations

from pathlib import Path

import pytest

from cmm_triage.core.exceptions import ReportRenderError
from cmm_triage.pipeline import DeductionPipeline
from cmm_triage.reporting import ReportGenerator


@pytest.fixture
def generator() -> ReportGenerator:
    """A ReportGenerator using the bundled template."""
    return ReportGenerator()


class TestReportData:
    """Aggregate statistics across analysed parts."""

    def test_empty_report(self, generator: ReportGenerator) -> None:
        assert generator.data.total_parts == 0
        assert generator.data.yield_rate == 0.0

    def test_yield(
        self,
        generator: ReportGenerator,
        pipeline: DeductionPipeline,
        good_report: str,
        gas_report: str,
    ) -> None:
        generator.add_outcome(pipeline.analyze(good_report))
        generator.add_outcome(pipeline.analyze(gas_report))
        assert generator.data.total_parts == 2
        assert generator.data.good_parts == 1
        assert generator.data.defective_parts == 1
        assert generator.data.yield_rate == pytest.approx(50.0)

    def test_oot_features_counted(
        self, generator: ReportGenerator, pipeline: DeductionPipeline, offset_report: str
    ) -> None:
        generator.add_outcome(pipeline.analyze(offset_report))
        assert generator.data.parts[0]["oot_features"] == 4


class TestRender:
    """Tests for HTML rendering."""

    def test_contains_verdict(
        self, generator: ReportGenerator, pipeline: DeductionPipeline, coldshut_report: str
    ) -> None:
        generator.set_title("Line 4 Inspection")
        generator.set_environment({"shift": "night"})
        generator.add_outcome(pipeline.analyze(coldshut_report))
        html = generator.render()
        assert "Line 4 Inspection" in html
        assert "A3188-337-00: Cold_Shut" in html
        assert "severity-Moderate" in html
        assert "ANGLE6_YZ" in html
        assert "night" in html

    def test_oot_rows_highlighted(
        self, generator: ReportGenerator, pipeline: DeductionPipeline, offset_report: str
    ) -> None:
        generator.add_outcome(pipeline.analyze(offset_report))
        assert generator.render().count('class="oot"') == 4

    def test_empty_report_message(
        self, generator: ReportGenerator, pipeline: DeductionPipeline
    ) -> None:
        generator.add_outcome(pipeline.analyze(""))
        assert "No measurement rows were found" in generator.render()

    def test_generate_writes_file(
        self,
        generator: ReportGenerator,
        pipeline: DeductionPipeline,
        good_report: str,
        tmp_path: Path,
    ) -> None:
        generator.add_outcome(pipeline.analyze(good_report))
        output = generator.generate(tmp_path / "out" / "report.html")
        assert output.exists()
        assert "<html" in output.read_text(encoding="utf-8")

    def test_missing_template(self, tmp_path: Path) -> None:
        generator = ReportGenerator(template_dir=tmp_path)
        with pytest.raises(ReportRenderError, match="report_template.html") as exc_info:
            generator.render()
        assert exc_info.value.source == "report_template.html"
        assert str(exc_info.value).startswith("[report_template.html] Failed to render template")
