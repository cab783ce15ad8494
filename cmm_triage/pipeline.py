"""End-to-end deduction pipeline: text → features → metrics → verdict.

Each stage is a pure function of its input, so a pipeline instance can be
shared and the same report text always yields an identical outcome.

Usage::

    pipeline = DeductionPipeline()
    outcome = pipeline.analyze(report_text)
    print(outcome.result.label, outcome.metrics.std_dev)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .analysis.metrics import compute_metrics
from .analysis.thresholds import DEFAULT_THRESHOLDS, DeductionThresholds
from .core.exceptions import ReportInputError
from .core.models import EngineeredMetrics, FeatureMeasurement
from .core.parser import ReportParser
from .triage.defect_report import ClassificationResult
from .triage.inference import InferenceEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionOutcome:
    """Everything produced by one analysis run.

    Attributes:
        features: Parsed measurements in report order.
        metrics: Engineered metrics derived from ``features``.
        result: The classification verdict.

    """

    features: tuple[FeatureMeasurement, ...]
    metrics: EngineeredMetrics
    result: ClassificationResult

    @property
    def part_id(self) -> str:
        """Part number of the analysed report."""
        return self.result.part_id


class DeductionPipeline:
    """Run the parser, metrics engine, and inference engine in order.

    Args:
        thresholds: Calibration table shared by the metrics and inference
            stages.

    """

    def __init__(self, thresholds: DeductionThresholds = DEFAULT_THRESHOLDS) -> None:
        """Initialize the pipeline stages."""
        self._thresholds = thresholds
        self._parser = ReportParser()
        self._engine = InferenceEngine(thresholds)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def thresholds(self) -> DeductionThresholds:
        """Return the calibration table in use."""
        return self._thresholds

    def analyze(self, text: str) -> DeductionOutcome:
        """Deduce the defect profile of a single report.

        Args:
            text: Raw CMM report text.

        Returns:
            A ``DeductionOutcome``; never raises for malformed content.

        """
        parsed = self._parser.parse(text)
        metrics = compute_metrics(parsed.features, noise_floor=self._thresholds.noise_floor)
        result = self._engine.classify(parsed.part_id, metrics)

        self._logger.info(
            "Deduction for %s: %s (%.0f%%, %s)",
            result.part_id,
            result.label.value,
            result.confidence,
            result.severity.value,
        )
        return DeductionOutcome(features=parsed.features, metrics=metrics, result=result)

    def analyze_file(self, path: str | Path) -> DeductionOutcome:
        """Read a report from disk and analyze it.

        Args:
            path: UTF-8 text file containing the report.

        Raises:
            ReportInputError: If the file cannot be read or decoded.

        """
        report_path = Path(path)
        try:
            text = report_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ReportInputError("Report file not found", source=str(report_path)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReportInputError(
                "Cannot read report file",
                source=str(report_path),
                details={"error": str(exc)},
            ) from exc

        self._logger.info("Loaded report %s (%d bytes)", report_path, len(text))
        return self.analyze(text)


def analyze_report(
    text: str,
    thresholds: DeductionThresholds = DEFAULT_THRESHOLDS,
) -> DeductionOutcome:
    """Analyze ``text`` with a one-off ``DeductionPipeline``."""
    return DeductionPipeline(thresholds).analyze(text)
