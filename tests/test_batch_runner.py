"""
Tests for batch classification.
"""

import pytest
from unittest.mock import Mock
from hybrid_text_classifier.batch_runner import classify_batch, split_batch_text, summarize
from hybrid_text_classifier.fusion import HybridClassifier
from hybrid_text_classifier.rule_classifier import RuleBasedClassifier
from hybrid_text_classifier.llm_classifier import parse_classification_response
from hybrid_text_classifier.services.interfaces import RemoteClassifierInterface
from hybrid_text_classifier.models.data_models import BatchItemResult, ClassificationResult
from hybrid_text_classifier.exceptions import InvalidInputError, RemoteClassifierError

CATEGORIES = "positive, negative, neutral"


def llm(category, confidence):
    return ClassificationResult(category=category, confidence=confidence, method="LLM", reasoning="")


class TestClassifyBatch:
    """Test cases for classify_batch."""

    def setup_method(self):
        """Set up test fixtures."""
        self.remote = Mock(spec=RemoteClassifierInterface)

    def test_summary_average(self):
        self.remote.classify.side_effect = [
            llm("positive", 0.5),
            llm("negative", 0.7),
            llm("neutral", 0.9),
        ]

        batch = classify_batch(["one", "two", "three"], CATEGORIES, remote_classifier=self.remote)

        assert batch.summary.total == 3
        assert batch.summary.avg_confidence == pytest.approx(0.7)
        assert batch.summary.to_dict() == {"total": 3, "avgConfidence": "0.70"}
        assert [item.fallback for item in batch.results] == [False, False, False]

    def test_failed_item_falls_back_without_aborting(self):
        self.remote.classify.side_effect = [
            llm("positive", 0.9),
            RemoteClassifierError("timeout"),
            llm("negative", 0.8),
        ]

        batch = classify_batch(
            ["great", "This is excellent", "bad"], CATEGORIES, remote_classifier=self.remote
        )

        assert [item.fallback for item in batch.results] == [False, True, False]
        assert batch.results[1].result.method == "Enhanced Rule-Based"
        assert batch.results[1].result.category == "positive"
        assert batch.results[2].result.category == "negative"
        assert batch.fallback_count == 1

    def test_non_finite_llm_confidence_falls_back_for_that_item_only(self):
        replies = {
            "excellent": '{"category": "negative", "confidence": NaN, "reasoning": ""}',
            "so so": '{"category": "neutral", "confidence": 0.6, "reasoning": ""}',
        }
        self.remote.classify.side_effect = lambda text, categories: parse_classification_response(
            replies[text], categories
        )

        batch = classify_batch(["excellent", "so so"], CATEGORIES, remote_classifier=self.remote)

        assert [item.fallback for item in batch.results] == [True, False]
        assert batch.results[0].result.category == "positive"
        assert batch.results[1].result.method == "LLM"

    def test_no_remote_uses_rules_for_every_item(self):
        batch = classify_batch(["not good", "excellent"], CATEGORIES)

        assert all(item.fallback for item in batch.results)
        assert [item.result.category for item in batch.results] == ["negative", "positive"]

    def test_blank_texts_are_skipped(self):
        self.remote.classify.return_value = llm("neutral", 0.6)

        batch = classify_batch(["first", "   ", "", "second"], CATEGORIES, remote_classifier=self.remote)

        assert [item.text for item in batch.results] == ["first", "second"]
        assert self.remote.classify.call_count == 2

    def test_rule_classifier_not_used_when_remote_succeeds(self):
        self.remote.classify.return_value = llm("neutral", 0.6)
        rule_classifier = Mock(spec=RuleBasedClassifier)

        classify_batch(["a", "b"], CATEGORIES, remote_classifier=self.remote, rule_classifier=rule_classifier)

        rule_classifier.classify.assert_not_called()

    def test_parallel_run_keeps_input_order(self):
        self.remote.classify.side_effect = lambda text, categories: llm(
            "positive" if "good" in text else "negative", 0.8
        )
        texts = [f"text {i} {'good' if i % 2 else 'poor'}" for i in range(10)]

        batch = classify_batch(texts, CATEGORIES, remote_classifier=self.remote, max_workers=4)

        assert [item.text for item in batch.results] == texts
        assert [item.result.category for item in batch.results] == [
            "positive" if i % 2 else "negative" for i in range(10)
        ]

    def test_empty_batch(self):
        batch = classify_batch([], CATEGORIES, remote_classifier=self.remote)

        assert batch.summary.total == 0
        assert batch.summary.avg_confidence == 0.0

    def test_malformed_categories(self):
        with pytest.raises(InvalidInputError):
            classify_batch(["text"], "", remote_classifier=self.remote)

    def test_to_dict_flags_fallback_items(self):
        self.remote.classify.side_effect = [llm("positive", 0.9), RemoteClassifierError("down")]

        data = classify_batch(["good", "fine"], CATEGORIES, remote_classifier=self.remote).to_dict()

        assert data["batch"] is True
        assert "fallback" not in data["results"][0]
        assert data["results"][1]["fallback"] is True
        assert data["results"][1]["text"] == "fine"

    def test_hybrid_classifier_delegates(self):
        self.remote.classify.return_value = llm("positive", 0.9)
        classifier = HybridClassifier(self.remote)

        batch = classifier.classify_batch(["one", "two"], CATEGORIES)

        assert batch.summary.total == 2
        assert all(item.result.method == "LLM" for item in batch.results)


class TestBatchHelpers:
    """Test cases for batch helper functions."""

    def test_split_batch_text(self):
        assert split_batch_text("first line\n\n  \nsecond line\n") == ["first line", "second line"]

    def test_summarize(self):
        results = [
            BatchItemResult(text="a", result=llm("positive", 0.2)),
            BatchItemResult(text="b", result=llm("positive", 0.4)),
        ]

        summary = summarize(results)

        assert summary.total == 2
        assert summary.formatted_avg_confidence == "0.30"
