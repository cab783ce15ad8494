"""Fixed-template root-cause and remediation text for each defect label.

Templates are ``str.format`` patterns filled from the engineered metrics;
``directionality_pct`` is the directionality expressed as a percentage.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.models import DefectLabel, EngineeredMetrics


@dataclass(frozen=True)
class Reasoning:
    """Human-readable explanation attached to a classification."""

    root_cause: str
    recommended_action: str


REASONING_TEMPLATES: dict[DefectLabel, Reasoning] = {
    DefectLabel.FEATURE_OFFSET: Reasoning(
        root_cause=(
            "Detected uniform translation signature (Ratio: {thickness_ratio:.2f}). "
            "High unidirectional bias ({directionality_pct:.0f}%) across all sections "
            "with OOT failures suggests a global datum shift."
        ),
        recommended_action=(
            "Re-zero CMM and inspect locator pin alignment. "
            "Verify fixture clamping consistency."
        ),
    ),
    DefectLabel.SHRINKAGE_POROSITY: Reasoning(
        root_cause=(
            "Observed high sectional thickness ratio ({thickness_ratio:.2f}). "
            "Heavy sections exhibit significant contraction ({thick_mean_dev:.3f}mm) "
            "while thin sections remain relatively stable. Thermal contraction confirmed."
        ),
        recommended_action=(
            "Increase Phase 3 intensification pressure. "
            "Audit cooling line efficiency in heavy die sections."
        ),
    ),
    DefectLabel.GAS_POROSITY: Reasoning(
        root_cause=(
            "High dimensional scatter (StdDev: {std_dev:.3f}mm) with low directional "
            "bias. Geometric turbulence detected, indicative of internal gas entrapment."
        ),
        recommended_action=(
            "Inspect and clean vacuum vents. "
            "Optimize shot velocity to minimize air entrapment."
        ),
    ),
    DefectLabel.COLD_SHUT: Reasoning(
        root_cause=(
            "Significant deviations detected in angular or structural features "
            "(Max Angular Dev: {max_angular_dev:.3f}) while heavy sections remain "
            "accurate. Characteristic of stream fusion failure at joining fronts."
        ),
        recommended_action=(
            "Increase die and furnace temperatures. "
            "Inspect flow fronts for premature solidification."
        ),
    ),
    DefectLabel.GOOD: Reasoning(
        root_cause="Dimensions are nominal-centric with negligible scatter. Zero OOT flags.",
        recommended_action="Maintain standard process parameters.",
    ),
}

FALLBACK_REASONING = Reasoning(
    root_cause="Morphological signature does not match standard defect vectors.",
    recommended_action="Manual review and full 3D scan required.",
)


def generate_reasoning(label: DefectLabel, metrics: EngineeredMetrics) -> Reasoning:
    """Render the explanation for ``label`` using the relevant metric values.

    Args:
        label: Winning hypothesis.
        metrics: Metrics the hypothesis was scored against.

    Returns:
        A ``Reasoning`` pair; ``Other_Defect`` and unrecognised labels get
        the generic fallback.

    """
    template = REASONING_TEMPLATES.get(label, FALLBACK_REASONING)
    values = metrics.to_dict()
    values["directionality_pct"] = metrics.directionality * 100
    return Reasoning(
        root_cause=template.root_cause.format(**values),
        recommended_action=template.recommended_action.format(**values),
    )
