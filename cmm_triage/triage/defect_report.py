"""Classification result data model and serialization.

Defines the ``ClassificationResult`` produced by the inference engine.
Supports JSON and Markdown export for integration with quality tickets
and non-conformance reports.

Usage::

    result = ClassificationResult(
        part_id="A3188-337-00",
        label=DefectLabel.GAS_POROSITY,
        confidence=98,
        severity=DefectSeverity.CRITICAL,
        root_cause="High dimensional scatter ...",
        recommended_action="Inspect and clean vacuum vents ...",
    )
    print(result.to_markdown())
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

from ..core.models import DefectLabel, DefectSeverity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Verdict for a single inspected part.

    Attributes:
        part_id: Part number the report was taken from.
        label: Winning defect hypothesis.
        confidence: Winning score clamped to the confidence bounds.
        severity: Severity rating, independent of the label.
        root_cause: Templated root-cause explanation.
        recommended_action: Templated remediation.

    """

    part_id: str
    label: DefectLabel
    confidence: float
    severity: DefectSeverity
    root_cause: str
    recommended_action: str

    @property
    def is_good(self) -> bool:
        """Return ``True`` if the part was classified as good."""
        return self.label == DefectLabel.GOOD

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for template rendering."""
        data = asdict(self)
        data["label"] = self.label.value
        data["severity"] = self.severity.value
        return data

    def to_json(self) -> str:
        """Serialize the result to a JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, data: str) -> ClassificationResult:
        """Deserialize a result from a JSON string."""
        payload: dict[str, Any] = json.loads(data)
        payload["label"] = DefectLabel(payload["label"])
        payload["severity"] = DefectSeverity(payload["severity"])
        return cls(**payload)

    def to_markdown(self) -> str:
        """Render the result as a Markdown document.

        Returns:
            Formatted Markdown string suitable for a quality ticket.

        """
        return f"""# {self.part_id}: {self.label.value.replace("_", " ")}

**Label:** {self.label.value}
**Confidence:** {self.confidence:.0f}%
**Severity:** {self.severity.value.upper()}

## Root Cause

{self.root_cause}

## Recommended Action

{self.recommended_action}
"""
