"""
Hybrid classification: fuses the LLM, TF-IDF and rule-based classifiers.

This module provides the ordered decision table that reconciles the remote
model with the similarity matcher, and the HybridClassifier that runs the
whole pipeline with graceful fallback when the remote model is unavailable.
"""

import logging
from typing import Iterable, Optional, Sequence, Union
from .categories import parse_categories
from .rule_classifier import RuleBasedClassifier
from .similarity_search import classify_traditional
from .services.interfaces import RemoteClassifierInterface
from .models.data_models import (
    TrainingExample,
    ClassificationResult,
    ClassificationErrorResult,
    BatchResult,
    HybridSettings,
    METHOD_HYBRID_AGREEMENT,
    METHOD_LLM_HIGH_CONFIDENCE,
    METHOD_HYBRID_WEIGHTED,
    METHOD_LLM_ONLY
)
from .exceptions import ClassifierError, InvalidInputError, ProcessingError, RemoteClassifierError


logger = logging.getLogger(__name__)


def fuse_results(
    llm_result: Optional[ClassificationResult],
    traditional_result: Optional[ClassificationResult],
    settings: HybridSettings,
    rule_result: Optional[ClassificationResult] = None
) -> ClassificationResult:
    """
    Merge the available results into one final classification.

    The rules are evaluated in order, first match wins:

    1. No LLM result: the rule-based result, unchanged.
    2. Hybrid with a traditional result:
       a. same category, LLM confidence above the threshold and TF-IDF
          confidence above the agreement minimum: "Hybrid (Agreement)" with the
          average confidence;
       b. LLM confidence above the threshold: "LLM (High Confidence)";
       c. otherwise "Hybrid (Weighted)": the category with the higher
          confidence (ties go to TF-IDF) and the max confidence.
    3. Otherwise: "LLM Only".

    Args:
        llm_result: Result of the remote classifier, None if it failed
        traditional_result: Result of the similarity matcher, None if unavailable
        settings: Hybrid switch and confidence threshold
        rule_result: Rule-based fallback, required when llm_result is None

    Returns:
        Final ClassificationResult

    Raises:
        ProcessingError: If neither an LLM nor a rule-based result is given
    """
    from .config import config

    if llm_result is None:
        if rule_result is None:
            raise ProcessingError("A rule-based result is required when the LLM result is missing")
        return rule_result

    threshold = settings.confidence_threshold

    if traditional_result is not None and settings.use_hybrid:
        details = {"llm": llm_result, "traditional": traditional_result}

        if (llm_result.category == traditional_result.category
                and llm_result.confidence > threshold
                and traditional_result.confidence > config.fusion.traditional_agreement_min):
            return ClassificationResult(
                category=llm_result.category,
                confidence=(llm_result.confidence + traditional_result.confidence) / 2,
                method=METHOD_HYBRID_AGREEMENT,
                reasoning=llm_result.reasoning,
                details=details
            )

        if llm_result.confidence > threshold:
            return llm_result.with_method(METHOD_LLM_HIGH_CONFIDENCE, details)

        if llm_result.confidence > traditional_result.confidence:
            category = llm_result.category
        else:
            category = traditional_result.category
        return ClassificationResult(
            category=category,
            confidence=max(llm_result.confidence, traditional_result.confidence),
            method=METHOD_HYBRID_WEIGHTED,
            reasoning=llm_result.reasoning,
            details=details
        )

    return llm_result.with_method(METHOD_LLM_ONLY, {"llm": llm_result})


class HybridClassifier:
    """
    Hybrid text classifier combining a hosted LLM, a TF-IDF matcher and lexical rules.

    The classifier keeps no state between calls: the training set is owned by
    the caller and read on every classification.
    """

    def __init__(
        self,
        remote_classifier: Optional[RemoteClassifierInterface] = None,
        training_set: Optional[Iterable[TrainingExample]] = None,
        settings: Optional[HybridSettings] = None,
        rule_classifier: Optional[RuleBasedClassifier] = None
    ):
        """
        Initialize the hybrid classifier.

        Args:
            remote_classifier: Remote LLM classifier; None means it is always unavailable
            training_set: Labeled examples for the TF-IDF matcher (may be empty)
            settings: Hybrid switch and confidence threshold (defaults to config values)
            rule_classifier: Rule-based fallback (defaults to a RuleBasedClassifier)
        """
        self.remote_classifier = remote_classifier
        self.training_set = training_set if training_set is not None else []
        self.settings = settings or HybridSettings.from_config()
        self.rule_classifier = rule_classifier or RuleBasedClassifier()

    def _classify_remote(self, text: str, category_list: Sequence[str]) -> Optional[ClassificationResult]:
        if self.remote_classifier is None:
            logger.info("No remote classifier configured, using rule-based fallback")
            return None
        try:
            return self.remote_classifier.classify(text, category_list)
        except RemoteClassifierError as e:
            logger.warning(f"LLM classification failed, using fallback methods: {e}")
            return None

    def classify(self, text: str, categories: Optional[Union[str, Sequence[str]]] = None) -> ClassificationResult:
        """
        Classify a single text.

        Args:
            text: Input text to classify
            categories: Comma-separated string or list of labels (defaults to config value)

        Returns:
            Final ClassificationResult

        Raises:
            InvalidInputError: If the text is blank or the categories are malformed
        """
        from .config import config

        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Input text cannot be empty")

        category_list = parse_categories(
            categories if categories is not None else config.fusion.default_categories
        )

        rule_result = None
        llm_result = self._classify_remote(text, category_list)
        if llm_result is None:
            rule_result = self.rule_classifier.classify(text, category_list)

        traditional_result = None
        if self.settings.use_hybrid and len(self.training_set) > 0:
            traditional_result = classify_traditional(text, self.training_set)

        result = fuse_results(llm_result, traditional_result, self.settings, rule_result)
        logger.info(f"Classified text as '{result.category}' ({result.confidence:.2f}) via {result.method}")
        return result

    def classify_safe(
        self,
        text: str,
        categories: Optional[Union[str, Sequence[str]]] = None
    ) -> Union[ClassificationResult, ClassificationErrorResult]:
        """Classify a text, turning any escaping error into a terminal error result."""
        try:
            return self.classify(text, categories)
        except (ClassifierError, ValueError) as e:
            logger.error(f"Classification failed: {e}")
            return ClassificationErrorResult(message=str(e))

    def classify_batch(
        self,
        texts: Sequence[str],
        categories: Optional[Union[str, Sequence[str]]] = None,
        max_workers: Optional[int] = None
    ) -> BatchResult:
        """Classify many texts with the remote-or-rule path, see batch_runner.classify_batch."""
        from .config import config
        from .batch_runner import classify_batch

        return classify_batch(
            texts,
            categories if categories is not None else config.fusion.default_categories,
            remote_classifier=self.remote_classifier,
            rule_classifier=self.rule_classifier,
            max_workers=max_workers
        )
