"""CMM Defect Triage.

Deduces the probable manufacturing-defect class of a die-cast part from a
Coordinate Measuring Machine inspection report using hand-derived
morphological thresholds over aggregate deviation statistics.
"""

from .pipeline import DeductionOutcome, DeductionPipeline, analyze_report

__version__ = "1.0.0"

__all__ = ["DeductionOutcome", "DeductionPipeline", "analyze_report"]
