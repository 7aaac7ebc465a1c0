"""
Tests for the hybrid decision policy and HybridClassifier.
"""

import pytest
from unittest.mock import Mock, patch
from hybrid_text_classifier.fusion import HybridClassifier, fuse_results
from hybrid_text_classifier.services.interfaces import RemoteClassifierInterface
from hybrid_text_classifier.training_set import TrainingSet
from hybrid_text_classifier.models.data_models import (
    ClassificationResult,
    ClassificationErrorResult,
    HybridSettings
)
from hybrid_text_classifier.exceptions import (
    InvalidInputError,
    ProcessingError,
    RemoteClassifierError
)


def llm(category, confidence, reasoning="model reasoning"):
    return ClassificationResult(category=category, confidence=confidence, method="LLM", reasoning=reasoning)


def tfidf(category, confidence):
    return ClassificationResult(category=category, confidence=confidence, method="TF-IDF")


class TestFuseResults:
    """Test cases for the ordered fusion table."""

    def setup_method(self):
        """Set up test fixtures."""
        self.settings = HybridSettings(use_hybrid=True, confidence_threshold=0.7)

    def test_agreement(self):
        result = fuse_results(llm("positive", 0.9), tfidf("positive", 0.6), self.settings)

        assert result.method == "Hybrid (Agreement)"
        assert result.category == "positive"
        assert result.confidence == pytest.approx(0.75)
        assert result.reasoning == "model reasoning"
        assert set(result.details.keys()) == {"llm", "traditional"}

    def test_high_confidence_without_agreement(self):
        result = fuse_results(llm("positive", 0.95), tfidf("negative", 0.4), self.settings)

        assert result.method == "LLM (High Confidence)"
        assert result.category == "positive"
        assert result.confidence == 0.95
        assert result.details["traditional"].category == "negative"

    def test_same_category_but_weak_traditional_is_high_confidence(self):
        result = fuse_results(llm("positive", 0.9), tfidf("positive", 0.5), self.settings)

        assert result.method == "LLM (High Confidence)"
        assert result.confidence == 0.9

    def test_weighted_fallback(self):
        result = fuse_results(llm("positive", 0.5), tfidf("negative", 0.8), self.settings)

        assert result.method == "Hybrid (Weighted)"
        assert result.category == "negative"
        assert result.confidence == 0.8
        assert result.reasoning == "model reasoning"

    def test_weighted_fallback_prefers_confident_llm(self):
        result = fuse_results(llm("positive", 0.6), tfidf("negative", 0.3), self.settings)

        assert result.method == "Hybrid (Weighted)"
        assert result.category == "positive"
        assert result.confidence == 0.6

    def test_confidence_equal_to_threshold_falls_through(self):
        result = fuse_results(llm("positive", 0.7), tfidf("negative", 0.7), self.settings)

        assert result.method == "Hybrid (Weighted)"
        assert result.category == "negative"
        assert result.confidence == 0.7

    def test_llm_only_without_traditional(self):
        result = fuse_results(llm("neutral", 0.4), None, self.settings)

        assert result.method == "LLM Only"
        assert result.category == "neutral"
        assert list(result.details.keys()) == ["llm"]

    def test_llm_only_when_hybrid_disabled(self):
        settings = HybridSettings(use_hybrid=False, confidence_threshold=0.7)

        result = fuse_results(llm("positive", 0.9), tfidf("positive", 0.9), settings)

        assert result.method == "LLM Only"

    def test_rule_result_when_llm_missing(self):
        rule = ClassificationResult(category="neutral", confidence=0.5, method="Enhanced Rule-Based")

        result = fuse_results(None, tfidf("positive", 0.9), self.settings, rule_result=rule)

        assert result is rule

    def test_missing_llm_and_rule_results(self):
        with pytest.raises(ProcessingError):
            fuse_results(None, None, self.settings)


class TestHybridClassifier:
    """Test cases for HybridClassifier."""

    def setup_method(self):
        """Set up test fixtures."""
        self.remote = Mock(spec=RemoteClassifierInterface)
        self.training_set = TrainingSet()
        self.training_set.add("I love this movie, it was great", "positive")
        self.training_set.add("I hate this movie, it was awful", "negative")
        self.settings = HybridSettings(use_hybrid=True, confidence_threshold=0.7)

    def test_remote_failure_falls_back_to_rules(self):
        self.remote.classify.side_effect = RemoteClassifierError("503")
        classifier = HybridClassifier(self.remote, self.training_set, self.settings)

        result = classifier.classify("This is excellent", "positive, negative, neutral")

        assert result.method == "Enhanced Rule-Based"
        assert result.category == "positive"
        assert result.details is None

    def test_no_remote_configured(self):
        classifier = HybridClassifier(training_set=self.training_set, settings=self.settings)

        result = classifier.classify("not good", "positive, negative, neutral")

        assert result.method == "Enhanced Rule-Based"
        assert result.category == "negative"

    def test_remote_receives_parsed_categories(self):
        self.remote.classify.return_value = llm("positive", 0.9)
        classifier = HybridClassifier(self.remote, settings=self.settings)

        classifier.classify("Great day", " positive ,negative,, neutral ")

        self.remote.classify.assert_called_once_with("Great day", ["positive", "negative", "neutral"])

    def test_agreement_with_training_set(self):
        self.remote.classify.return_value = llm("positive", 0.9)
        classifier = HybridClassifier(self.remote, self.training_set, self.settings)

        with patch('hybrid_text_classifier.fusion.classify_traditional',
                   return_value=tfidf("positive", 0.6)) as mock_traditional:
            result = classifier.classify("I love it", "positive, negative")

        mock_traditional.assert_called_once_with("I love it", self.training_set)
        assert result.method == "Hybrid (Agreement)"
        assert result.confidence == pytest.approx(0.75)

    def test_real_similarity_matcher_feeds_fusion(self):
        self.remote.classify.return_value = llm("positive", 0.95)
        classifier = HybridClassifier(self.remote, self.training_set, self.settings)

        result = classifier.classify("awful movie, I hate it", "positive, negative")

        assert result.method == "LLM (High Confidence)"
        assert result.details["traditional"].category == "negative"
        assert result.details["traditional"].method == "TF-IDF"

    def test_empty_training_set_gives_llm_only(self):
        self.remote.classify.return_value = llm("neutral", 0.3)
        classifier = HybridClassifier(self.remote, TrainingSet(), self.settings)

        result = classifier.classify("The meeting is at noon", "positive, negative, neutral")

        assert result.method == "LLM Only"
        assert result.confidence == 0.3

    def test_hybrid_disabled_skips_similarity_matcher(self):
        self.remote.classify.return_value = llm("positive", 0.4)
        settings = HybridSettings(use_hybrid=False, confidence_threshold=0.7)
        classifier = HybridClassifier(self.remote, self.training_set, settings)

        with patch('hybrid_text_classifier.fusion.classify_traditional') as mock_traditional:
            result = classifier.classify("text", "positive, negative")

        mock_traditional.assert_not_called()
        assert result.method == "LLM Only"

    def test_training_set_changes_between_calls(self):
        self.remote.classify.return_value = llm("positive", 0.9)
        training_set = TrainingSet()
        classifier = HybridClassifier(self.remote, training_set, self.settings)

        first = classifier.classify("I love it", "positive, negative")
        training_set.add("I love it", "positive")
        second = classifier.classify("I love it", "positive, negative")

        assert first.method == "LLM Only"
        assert second.method in ("Hybrid (Agreement)", "LLM (High Confidence)")

    def test_blank_text_rejected(self):
        classifier = HybridClassifier(self.remote, settings=self.settings)

        with pytest.raises(InvalidInputError):
            classifier.classify("   ", "positive")
        self.remote.classify.assert_not_called()

    def test_classify_safe_returns_error_result(self):
        classifier = HybridClassifier(self.remote, settings=self.settings)

        result = classifier.classify_safe("Some text", " , ")

        assert isinstance(result, ClassificationErrorResult)
        assert result.is_error
        assert result.to_dict() == {"error": True, "message": "At least one category is required"}

    def test_classify_safe_returns_normal_result(self):
        self.remote.classify.return_value = llm("positive", 0.9)
        classifier = HybridClassifier(self.remote, settings=self.settings)

        result = classifier.classify_safe("Some text", "positive, negative")

        assert isinstance(result, ClassificationResult)
        assert not result.is_error
