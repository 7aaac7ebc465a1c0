"""
Core interfaces for the hybrid text classifier services.
"""

from abc import ABC, abstractmethod
from typing import Sequence
from ..models import ClassificationResult


class RemoteClassifierInterface(ABC):
    """Interface for a hosted model that picks one category for a text."""

    @abstractmethod
    def classify(self, text: str, categories: Sequence[str]) -> ClassificationResult:
        """
        Ask the remote model for the best category of a text.

        Args:
            text: Input text to classify
            categories: Ordered candidate category labels

        Returns:
            ClassificationResult with category, confidence and reasoning

        Raises:
            RemoteClassifierError: If the model is unavailable or its answer is unusable
        """
        pass
