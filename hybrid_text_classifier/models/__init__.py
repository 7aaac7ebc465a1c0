"""
Data models for the hybrid text classifier.
"""

from .data_models import (
    TrainingExample,
    ClassificationResult,
    ClassificationErrorResult,
    BatchItemResult,
    BatchSummary,
    BatchResult,
    HybridSettings
)

__all__ = [
    "TrainingExample",
    "ClassificationResult",
    "ClassificationErrorResult",
    "BatchItemResult",
    "BatchSummary",
    "BatchResult",
    "HybridSettings"
]
