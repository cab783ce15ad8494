"""HTML inspection report generation using Jinja2 templates.

Collects deduction outcomes for one or more parts and renders them into
a single HTML report: the verdict, severity, reasoning, the engineered
metrics, and the parsed feature table with out-of-tolerance rows
highlighted.

Usage::

    gen = ReportGenerator()
    gen.add_outcome(pipeline.analyze(report_text))
    gen.generate("output/inspection.html")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, TemplateError

from ..core.exceptions import ReportRenderError

if TYPE_CHECKING:
    from ..pipeline import DeductionOutcome

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "report_template.html"


@dataclass
class ReportData:
    """Aggregated data model passed to the Jinja2 template.

    Attributes:
        title: Report title.
        timestamp: ISO-8601 generation timestamp.
        environment: Free-form metadata (line, shift, CMM program).
        parts: One rendered entry per analysed part.

    """

    title: str = "CMM Defect Deduction Report"
    timestamp: str = field(
        default_factory=lambda: datetime.now(UTC).isoformat()
    )
    environment: dict[str, str] = field(default_factory=dict)
    parts: list[dict[str, Any]] = field(default_factory=list)

    @property
    def total_parts(self) -> int:
        """Total number of analysed parts."""
        return len(self.parts)

    @property
    def good_parts(self) -> int:
        """Number of parts classified as good."""
        return sum(1 for p in self.parts if p["result"]["label"] == "Good")

    @property
    def defective_parts(self) -> int:
        """Number of parts classified with any defect."""
        return self.total_parts - self.good_parts

    @property
    def yield_rate(self) -> float:
        """Good-part rate as a percentage."""
        if self.total_parts == 0:
            return 0.0
        return (self.good_parts / self.total_parts) * 100


class ReportGenerator:
    """Generate HTML inspection reports from Jinja2 templates.

    Args:
        template_dir: Directory containing Jinja2 templates.
        template_name: Name of the main report template.

    """

    def __init__(
        self,
        template_dir: Path = TEMPLATE_DIR,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> None:
        """Initialize the report generator with template settings."""
        self._template_dir = template_dir
        self._template_name = template_name
        self._data = ReportData()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def data(self) -> ReportData:
        """Return the collected report data."""
        return self._data

    def set_title(self, title: str) -> None:
        """Set the report title."""
        self._data.title = title

    def set_environment(self, env: dict[str, str]) -> None:
        """Set environment metadata (line, shift, CMM program, etc.)."""
        self._data.environment = env

    def add_outcome(self, outcome: DeductionOutcome) -> None:
        """Add one part's deduction outcome."""
        self._data.parts.append({
            "part_id": outcome.part_id,
            "result": outcome.result.to_dict(),
            "metrics": outcome.metrics.to_dict(),
            "features": [f.to_dict() for f in outcome.features],
            "oot_features": sum(1 for f in outcome.features if f.out_of_tolerance),
        })

    def generate(self, output_path: str | Path) -> Path:
        """Render the HTML report and write to disk.

        Args:
            output_path: Destination file path.

        Returns:
            Path to the generated report file.

        Raises:
            ReportRenderError: If the template cannot be rendered.

        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)

        html = self.render()
        output.write_text(html, encoding="utf-8")
        self._logger.info("Report generated: %s", output)
        return output

    def render(self) -> str:
        """Render the Jinja2 template with report data.

        Raises:
            ReportRenderError: If the template is missing or invalid.

        """
        env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            autoescape=True,
        )
        try:
            template = env.get_template(self._template_name)
            return template.render(
                data=self._data,
                title=self._data.title,
                timestamp=self._data.timestamp,
                environment=self._data.environment,
                parts=self._data.parts,
                total_parts=self._data.total_parts,
                good_parts=self._data.good_parts,
                defective_parts=self._data.defective_parts,
                yield_rate=self._data.yield_rate,
            )
        except TemplateError as exc:
            raise ReportRenderError(
                "Failed to render template",
                source=self._template_name,
                details={"template_dir": str(self._template_dir), "error": str(exc)},
            ) from exc
