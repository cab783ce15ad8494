"""Command-line entry point for deducing defects from CMM reports.

Usage::

    cmm-triage report.txt
    cmm-triage --scenario gas --format json
    cat report.txt | cmm-triage - --thresholds thresholds.yml --html out.html
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .analysis.thresholds import DEFAULT_THRESHOLDS, DeductionThresholds
from .core.exceptions import CmmTriageError
from .pipeline import DeductionOutcome, DeductionPipeline
from .reporting import ReportGenerator
from .scenarios import SCENARIOS

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmm-triage",
        description="Deduce the probable die-casting defect from a CMM inspection report",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("report", nargs="?", help="Report text file, or '-' for stdin")
    source.add_argument("--scenario", choices=sorted(SCENARIOS), help="Analyze a built-in scenario")
    parser.add_argument("--thresholds", help="YAML file with threshold overrides")
    parser.add_argument(
        "--format",
        choices=("text", "json", "markdown"),
        default="text",
        help="Output format for the verdict",
    )
    parser.add_argument("--html", help="Also write an HTML inspection report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_outcome(outcome: DeductionOutcome, fmt: str) -> str:
    """Render an outcome in the requested output format."""
    result = outcome.result
    if fmt == "json":
        return json.dumps(
            {"result": result.to_dict(), "metrics": outcome.metrics.to_dict()},
            indent=2,
        )
    if fmt == "markdown":
        return result.to_markdown()

    lines = [
        f"Part:       {result.part_id}",
        f"Label:      {result.label.value}",
        f"Confidence: {result.confidence:.0f}%",
        f"Severity:   {result.severity.value}",
        f"Features:   {len(outcome.features)} ({outcome.metrics.oot_count} out of tolerance)",
        "",
        f"Root cause: {result.root_cause}",
        f"Action:     {result.recommended_action}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s: %(message)s",
    )

    try:
        thresholds = (
            DeductionThresholds.from_yaml(args.thresholds)
            if args.thresholds
            else DEFAULT_THRESHOLDS
        )
        pipeline = DeductionPipeline(thresholds)

        if args.scenario:
            outcome = pipeline.analyze(SCENARIOS[args.scenario])
        elif args.report == "-":
            outcome = pipeline.analyze(sys.stdin.read())
        else:
            outcome = pipeline.analyze_file(args.report)

        print(format_outcome(outcome, args.format))

        if args.html:
            generator = ReportGenerator()
            generator.add_outcome(outcome)
            generator.generate(args.html)
    except CmmTriageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    return EXIT_OK
