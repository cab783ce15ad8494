"""Rule-based defect triage and structured classification results.

Scores defect hypotheses against engineered metrics, picks the most
probable one, and attaches templated root-cause and remediation text.
"""

from .defect_report import ClassificationResult
from .inference import SCORING_RULES, InferenceEngine, ScoringRule
from .reasoning import Reasoning, generate_reasoning

__all__ = [
    "SCORING_RULES",
    "ClassificationResult",
    "InferenceEngine",
    "Reasoning",
    "ScoringRule",
    "generate_reasoning",
]
