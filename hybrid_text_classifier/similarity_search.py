"""
Similarity search functionality for the traditional (TF-IDF) classifier.

This module provides cosine similarity over sparse term vectors and the
nearest-example lookup against a user-supplied training set.
"""

import logging
import numpy as np
from typing import Iterable, List, Optional, Tuple
from .vectorizer import TermVector, vectorize
from .models.data_models import TrainingExample, ClassificationResult, METHOD_TFIDF


logger = logging.getLogger(__name__)


def cosine_similarity(vec1: TermVector, vec2: TermVector) -> float:
    """
    Cosine similarity between two term vectors.

    The dot product runs over the union of both vectors' terms. If either
    vector has a zero norm the similarity is 0.

    Args:
        vec1: First term vector
        vec2: Second term vector

    Returns:
        Similarity in [0, 1] (weights are non-negative)
    """
    vocabulary = list(dict.fromkeys([*vec1.keys(), *vec2.keys()]))
    if not vocabulary:
        return 0.0

    a = np.array([vec1.get(term, 0.0) for term in vocabulary], dtype=float)
    b = np.array([vec2.get(term, 0.0) for term in vocabulary], dtype=float)

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = float(np.dot(a, b) / (norm_a * norm_b))
    # Clamp to [0, 1] to handle floating point precision issues
    return min(max(similarity, 0.0), 1.0)


class SimilarityMatcher:
    """
    Nearest-example matcher over a training set.

    The training set is read at every call, so examples added or removed by
    the owner between calls are always taken into account.
    """

    def __init__(self, training_set: Iterable[TrainingExample]):
        self.training_set = training_set

    def _examples(self) -> List[TrainingExample]:
        return list(self.training_set)

    def rank(self, text: str) -> List[Tuple[TrainingExample, float]]:
        """
        Score every training example against the input text.

        The corpus is the training texts followed by the input, vectorized in
        one pass so document frequencies reflect the whole set.

        Returns:
            (example, similarity) pairs in training-set order
        """
        examples = self._examples()
        if not examples:
            return []

        corpus = [example.text for example in examples] + [text]
        tfidf_vectors = vectorize(corpus)
        input_vector = tfidf_vectors[-1]

        return [
            (example, cosine_similarity(tfidf_vectors[idx], input_vector))
            for idx, example in enumerate(examples)
        ]

    def classify(self, text: str) -> Optional[ClassificationResult]:
        """
        Classify text with the label of its most similar training example.

        Returns:
            ClassificationResult tagged "TF-IDF", or None when the training set is empty
        """
        ranked = self.rank(text)
        if not ranked:
            return None

        best_index = 0
        best_score = -1.0
        for idx, (_, score) in enumerate(ranked):
            # Strictly greater: ties keep the first-seen example
            if score > best_score:
                best_score = score
                best_index = idx

        best_example = ranked[best_index][0]
        logger.debug(
            f"TF-IDF best match: example #{best_index} ('{best_example.category}') "
            f"with similarity {best_score:.4f}"
        )

        return ClassificationResult(
            category=best_example.category,
            confidence=best_score,
            method=METHOD_TFIDF,
            reasoning=f"Closest training example #{best_index} (cosine similarity: {best_score:.4f})"
        )


def classify_traditional(text: str, training_set: Iterable[TrainingExample]) -> Optional[ClassificationResult]:
    """Classify text against a training set; None signals the method is unavailable."""
    return SimilarityMatcher(training_set).classify(text)
