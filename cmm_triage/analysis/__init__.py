"""Deviation statistics and the calibration table behind the deduction rules."""

from .metrics import compute_metrics
from .thresholds import DEFAULT_THRESHOLDS, DeductionThresholds

__all__ = ["DEFAULT_THRESHOLDS", "DeductionThresholds", "compute_metrics"]
