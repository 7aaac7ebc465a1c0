"""
Core data models for the hybrid text classifier.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


# Method tags carried by ClassificationResult.method
METHOD_LLM = "LLM"
METHOD_TFIDF = "TF-IDF"
METHOD_RULE_BASED = "Enhanced Rule-Based"
METHOD_HYBRID_AGREEMENT = "Hybrid (Agreement)"
METHOD_LLM_HIGH_CONFIDENCE = "LLM (High Confidence)"
METHOD_HYBRID_WEIGHTED = "Hybrid (Weighted)"
METHOD_LLM_ONLY = "LLM Only"


@dataclass
class TrainingExample:
    """A labeled example used by the TF-IDF similarity matcher."""
    text: str
    category: str

    def __post_init__(self):
        """Validate training example after initialization."""
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("Training text cannot be empty")
        if not isinstance(self.category, str) or not self.category.strip():
            raise ValueError("Training category cannot be empty")
        self.category = self.category.strip()

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "category": self.category}


@dataclass
class ClassificationResult:
    """Represents a classification produced by one method or by the fusion of several."""
    category: str
    confidence: float
    method: str
    reasoning: Optional[str] = None
    details: Optional[Dict[str, 'ClassificationResult']] = None

    def __post_init__(self):
        """Validate classification result after initialization."""
        if not isinstance(self.category, str) or not self.category:
            raise ValueError("Category cannot be empty")
        if isinstance(self.confidence, bool) or not isinstance(self.confidence, (int, float)):
            raise ValueError("Confidence must be a number between 0.0 and 1.0")
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError("Confidence must be a number between 0.0 and 1.0")
        self.confidence = float(self.confidence)

    @property
    def is_error(self) -> bool:
        return False

    def with_method(self, method: str, details: Optional[Dict[str, 'ClassificationResult']] = None) -> 'ClassificationResult':
        """Return a copy of this result carrying a different method tag and details."""
        return ClassificationResult(
            category=self.category,
            confidence=self.confidence,
            method=method,
            reasoning=self.reasoning,
            details=details,
        )

    def get_confidence_level(self) -> str:
        """
        Get a human-readable confidence level description.

        Returns:
            Confidence level as string (High, Medium, Low, Very Low)
        """
        if self.confidence >= 0.8:
            return "High"
        elif self.confidence >= 0.6:
            return "Medium"
        elif self.confidence >= 0.4:
            return "Low"
        else:
            return "Very Low"

    def format_result(self) -> str:
        """
        Format the classification result as a human-readable string.

        Returns:
            Formatted result string
        """
        lines = []
        lines.append("Classification Result")
        lines.append("=" * 50)
        lines.append(f"Category: {self.category}")
        lines.append(f"Confidence: {self.confidence:.1%} ({self.get_confidence_level()})")
        lines.append(f"Method: {self.method}")

        if self.reasoning:
            lines.append(f"Reasoning: {self.reasoning}")

        if self.details:
            lines.append("\nContributing results:")
            for name, sub_result in self.details.items():
                lines.append(f"   {name}: {sub_result.category} ({sub_result.confidence:.1%}, {sub_result.method})")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the classification result to a dictionary.

        Returns:
            Dictionary representation of the result, nested details included
        """
        result_dict: Dict[str, Any] = {
            "category": self.category,
            "confidence": self.confidence,
            "method": self.method,
        }
        if self.reasoning is not None:
            result_dict["reasoning"] = self.reasoning
        if self.details is not None:
            result_dict["details"] = {
                name: sub_result.to_dict() for name, sub_result in self.details.items()
            }
        return result_dict


@dataclass
class ClassificationErrorResult:
    """Terminal result returned when classification fails outside the normal fallbacks."""
    message: str

    @property
    def is_error(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"error": True, "message": self.message}


@dataclass
class BatchItemResult:
    """Result for one text of a batch run."""
    text: str
    result: ClassificationResult
    fallback: bool = False

    @property
    def confidence(self) -> float:
        return self.result.confidence

    def to_dict(self) -> Dict[str, Any]:
        item = {"text": self.text}
        item.update(self.result.to_dict())
        if self.fallback:
            item["fallback"] = True
        return item


@dataclass
class BatchSummary:
    """Aggregate statistics for a batch run."""
    total: int
    avg_confidence: float

    @property
    def formatted_avg_confidence(self) -> str:
        """Average confidence rounded to two decimals for display."""
        return f"{self.avg_confidence:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "avgConfidence": self.formatted_avg_confidence}


@dataclass
class BatchResult:
    """Per-item results and summary of a batch run."""
    results: List[BatchItemResult] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=lambda: BatchSummary(total=0, avg_confidence=0.0))

    @property
    def is_error(self) -> bool:
        return False

    @property
    def fallback_count(self) -> int:
        return sum(1 for item in self.results if item.fallback)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "batch": True,
            "results": [item.to_dict() for item in self.results],
            "summary": self.summary.to_dict(),
        }


@dataclass
class HybridSettings:
    """Settings for the hybrid decision policy."""
    use_hybrid: bool = True
    confidence_threshold: float = 0.7

    def __post_init__(self):
        """Validate hybrid settings after initialization."""
        if not isinstance(self.use_hybrid, bool):
            raise ValueError("use_hybrid must be a boolean")
        if isinstance(self.confidence_threshold, bool) or not isinstance(self.confidence_threshold, (int, float)):
            raise ValueError("Confidence threshold must be a number between 0.0 and 1.0")
        if not (0.0 <= self.confidence_threshold <= 1.0):
            raise ValueError("Confidence threshold must be a number between 0.0 and 1.0")

    @classmethod
    def from_config(cls) -> 'HybridSettings':
        """Create settings from the library configuration."""
        from ..config import config
        return cls(
            use_hybrid=config.fusion.use_hybrid,
            confidence_threshold=config.fusion.confidence_threshold,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "use_hybrid": self.use_hybrid,
            "confidence_threshold": self.confidence_threshold,
        }
