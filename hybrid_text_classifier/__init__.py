"""
Hybrid text classifier combining a hosted LLM, a TF-IDF matcher and lexical rules.
"""

from .models import (
    TrainingExample,
    ClassificationResult,
    ClassificationErrorResult,
    BatchItemResult,
    BatchSummary,
    BatchResult,
    HybridSettings
)
from .categories import parse_categories
from .vectorizer import tokenize, vectorize
from .similarity_search import SimilarityMatcher, classify_traditional, cosine_similarity
from .rule_classifier import RuleBasedClassifier, classify_rule_based
from .training_set import TrainingSet
from .llm_classifier import LLMClassifier
from .fusion import HybridClassifier, fuse_results
from .batch_runner import classify_batch, split_batch_text
from .export import save_results, results_to_json
from .exceptions import (
    ClassifierError,
    InvalidInputError,
    ConfigurationError,
    ProcessingError,
    RemoteClassifierError,
    TrainingSetError
)

__version__ = "0.1.0"
__all__ = [
    "TrainingExample",
    "ClassificationResult",
    "ClassificationErrorResult",
    "BatchItemResult",
    "BatchSummary",
    "BatchResult",
    "HybridSettings",
    "parse_categories",
    "tokenize",
    "vectorize",
    "SimilarityMatcher",
    "classify_traditional",
    "cosine_similarity",
    "RuleBasedClassifier",
    "classify_rule_based",
    "TrainingSet",
    "LLMClassifier",
    "HybridClassifier",
    "fuse_results",
    "classify_batch",
    "split_batch_text",
    "save_results",
    "results_to_json",
    "ClassifierError",
    "InvalidInputError",
    "ConfigurationError",
    "ProcessingError",
    "RemoteClassifierError",
    "TrainingSetError"
]
