"""
Batch classification with per-item fallback.

Every text goes through the remote classifier; when that fails the item falls
back to the rule-based classifier and is flagged. The similarity matcher is
not used in batch mode.
"""

import concurrent.futures
import logging
from typing import List, Optional, Sequence, Union
from .categories import parse_categories
from .rule_classifier import RuleBasedClassifier
from .services.interfaces import RemoteClassifierInterface
from .models.data_models import BatchItemResult, BatchResult, BatchSummary
from .exceptions import RemoteClassifierError


logger = logging.getLogger(__name__)


def split_batch_text(raw: str) -> List[str]:
    """Split a newline-separated block into its non-blank lines."""
    return [line for line in raw.split('\n') if line.strip()]


def summarize(results: Sequence[BatchItemResult]) -> BatchSummary:
    """Count the items and average their confidences (0.0 for an empty batch)."""
    total = len(results)
    avg_confidence = sum(item.confidence for item in results) / total if total else 0.0
    return BatchSummary(total=total, avg_confidence=avg_confidence)


def _classify_item(
    text: str,
    category_list: List[str],
    remote_classifier: Optional[RemoteClassifierInterface],
    rule_classifier: RuleBasedClassifier
) -> BatchItemResult:
    if remote_classifier is not None:
        try:
            return BatchItemResult(text=text, result=remote_classifier.classify(text, category_list))
        except RemoteClassifierError as e:
            logger.warning(f"LLM classification failed for batch item, using rule-based fallback: {e}")

    return BatchItemResult(
        text=text,
        result=rule_classifier.classify(text, category_list),
        fallback=True
    )


def classify_batch(
    texts: Sequence[str],
    categories: Union[str, Sequence[str]],
    remote_classifier: Optional[RemoteClassifierInterface] = None,
    rule_classifier: Optional[RuleBasedClassifier] = None,
    max_workers: Optional[int] = None
) -> BatchResult:
    """
    Classify each text independently and summarize the run.

    Args:
        texts: Texts to classify; blank entries are skipped
        categories: Comma-separated string or list of labels
        remote_classifier: Remote LLM classifier; None sends every item to the fallback
        rule_classifier: Rule-based fallback (defaults to a RuleBasedClassifier)
        max_workers: Thread count for independent items (defaults to config value)

    Returns:
        BatchResult with per-item results in input order and a summary

    Raises:
        InvalidInputError: If the categories are malformed
    """
    from .config import config

    category_list = parse_categories(categories)
    rule_classifier = rule_classifier or RuleBasedClassifier()
    workers = max_workers if max_workers is not None else config.batch.max_workers
    items = [text for text in texts if isinstance(text, str) and text.strip()]

    if workers > 1 and len(items) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(
                lambda text: _classify_item(text, category_list, remote_classifier, rule_classifier),
                items
            ))
    else:
        results = [
            _classify_item(text, category_list, remote_classifier, rule_classifier)
            for text in items
        ]

    batch_result = BatchResult(results=results, summary=summarize(results))
    logger.info(
        f"Batch finished: {batch_result.summary.total} items, {batch_result.fallback_count} fallbacks, "
        f"average confidence {batch_result.summary.formatted_avg_confidence}"
    )
    return batch_result
