"""Type and priority classification."""

from .priority import PriorityClassifier, PriorityResult, classify, explain
from .types import DEFAULT_TYPE, classify_type

__all__ = [
    "DEFAULT_TYPE",
    "PriorityClassifier",
    "PriorityResult",
    "classify",
    "classify_type",
    "explain",
]
