"""
Lexical rule-based classification with negation handling.

This is the classifier of last resort: it never fails and always returns a
result, including for empty or keyword-free input.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union
from .categories import parse_categories
from .models.data_models import ClassificationResult, METHOD_RULE_BASED


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeywordTiers:
    """Weighted keyword tiers for one recognized category."""
    strong: Tuple[str, ...]
    medium: Tuple[str, ...]
    weak: Tuple[str, ...]


# (positive weight, weight when negated) per tier
TIER_WEIGHTS: Dict[str, Tuple[float, float]] = {
    "strong": (3.0, -2.0),
    "medium": (2.0, -1.5),
    "weak": (1.0, -0.5),
}

CROSS_POLARITY_BONUS = 1.5

LEXICON: Dict[str, KeywordTiers] = {
    "positive": KeywordTiers(
        strong=("excellent", "outstanding", "superb", "brilliant", "perfect", "exceptional",
                "phenomenal", "magnificent", "marvelous", "spectacular"),
        medium=("good", "great", "nice", "wonderful", "amazing", "fantastic", "awesome",
                "beautiful", "lovely", "delightful", "pleased", "happy", "enjoy", "love",
                "best", "better"),
        weak=("okay", "fine", "decent", "acceptable", "satisfactory", "like", "well"),
    ),
    "negative": KeywordTiers(
        strong=("terrible", "horrible", "awful", "disgusting", "atrocious", "abysmal",
                "dreadful", "pathetic", "appalling", "horrendous"),
        medium=("bad", "poor", "disappointing", "worst", "hate", "dislike", "unfortunate",
                "sad", "unhappy", "upset", "angry", "fail", "failed", "problem", "issue"),
        # Multi-word entries never match a single whitespace token
        weak=("not great", "not good", "could be better", "mediocre", "lacking", "subpar"),
    ),
    "neutral": KeywordTiers(
        strong=("neutral", "objective", "unbiased", "impartial", "factual"),
        medium=("average", "normal", "standard", "typical", "ordinary", "moderate", "medium"),
        weak=("okay", "fine", "alright"),
    ),
}

# The cross-polarity rule for a category scans the strong and medium keywords of its opposite
OPPOSITE_POLARITY: Dict[str, str] = {
    "positive": "negative",
    "negative": "positive",
}

NEGATIONS: Tuple[str, ...] = (
    "not", "no", "never", "neither", "nobody", "nothing", "nowhere",
    "hardly", "barely", "scarcely", "n't", "dont",
)


class RuleBasedClassifier:
    """
    Scores categories with a fixed tiered lexicon, a negation window and
    punctuation heuristics.

    Categories whose lowercased name is not a lexicon key start at 0 and only
    win through the default-assignment rule or punctuation nudges.
    """

    def __init__(self, negation_window: Optional[int] = None, max_confidence: Optional[float] = None,
                 default_confidence: Optional[float] = None, exclamation_weight: Optional[float] = None,
                 question_weight: Optional[float] = None):
        from .config import config

        self.negation_window = negation_window if negation_window is not None else config.rules.negation_window
        self.max_confidence = max_confidence if max_confidence is not None else config.rules.max_confidence
        self.default_confidence = (
            default_confidence if default_confidence is not None else config.rules.default_confidence
        )
        self.exclamation_weight = (
            exclamation_weight if exclamation_weight is not None else config.rules.exclamation_weight
        )
        self.question_weight = question_weight if question_weight is not None else config.rules.question_weight

    @staticmethod
    def find_negations(tokens: Sequence[str]) -> List[int]:
        """Indices of tokens containing any negation marker."""
        return [
            idx for idx, token in enumerate(tokens)
            if any(negation in token for negation in NEGATIONS)
        ]

    @staticmethod
    def find_keyword(tokens: Sequence[str], keyword: str) -> int:
        """Index of the first token containing the keyword, or -1."""
        for idx, token in enumerate(tokens):
            if keyword in token:
                return idx
        return -1

    def is_negated(self, keyword_idx: int, negation_indices: Sequence[int]) -> bool:
        return any(
            neg_idx < keyword_idx <= neg_idx + self.negation_window
            for neg_idx in negation_indices
        )

    def _lexicon_score(self, tiers: KeywordTiers, tokens: Sequence[str], negation_indices: Sequence[int]) -> float:
        score = 0.0
        for tier_name in ("strong", "medium", "weak"):
            weight, negated_weight = TIER_WEIGHTS[tier_name]
            for keyword in getattr(tiers, tier_name):
                keyword_idx = self.find_keyword(tokens, keyword)
                if keyword_idx == -1:
                    continue
                score += negated_weight if self.is_negated(keyword_idx, negation_indices) else weight
        return score

    def _cross_polarity_score(self, opposite: KeywordTiers, tokens: Sequence[str],
                              negation_indices: Sequence[int]) -> float:
        # "not bad" reads as mildly positive, "not good" as mildly negative
        score = 0.0
        for keyword in opposite.strong + opposite.medium:
            keyword_idx = self.find_keyword(tokens, keyword)
            if keyword_idx != -1 and self.is_negated(keyword_idx, negation_indices):
                score += CROSS_POLARITY_BONUS
        return score

    def _score(self, text: str, category_list: List[str]) -> Tuple[Dict[str, float], int]:
        lower_text = text.lower()
        tokens = lower_text.split()
        negation_indices = self.find_negations(tokens)

        scores: Dict[str, float] = {}
        for category in category_list:
            scores[category] = 0.0
            category_key = category.lower()

            tiers = LEXICON.get(category_key)
            if tiers is not None:
                scores[category] += self._lexicon_score(tiers, tokens, negation_indices)

            opposite_key = OPPOSITE_POLARITY.get(category_key)
            if opposite_key is not None and negation_indices:
                scores[category] += self._cross_polarity_score(LEXICON[opposite_key], tokens, negation_indices)

        exclamations = lower_text.count("!")
        questions = lower_text.count("?")
        for category in category_list:
            category_key = category.lower()
            if category_key == "positive":
                scores[category] += exclamations * self.exclamation_weight
            elif category_key == "neutral":
                scores[category] += questions * self.question_weight

        # Shift so the minimum becomes 0, keeping relative order
        min_score = min(scores.values())
        if min_score < 0:
            scores = {category: score - min_score for category, score in scores.items()}

        return scores, len(negation_indices)

    def score(self, text: str, categories: Union[str, Sequence[str]]) -> Dict[str, float]:
        """
        Compute the normalized score of each category.

        Returns:
            Non-negative scores keyed by category, in category-list order
        """
        scores, _ = self._score(text, parse_categories(categories))
        return scores

    def classify(self, text: str, categories: Union[str, Sequence[str]]) -> ClassificationResult:
        """
        Classify text with the lexical rules.

        Args:
            text: Input text (may be empty)
            categories: Comma-separated string or list of category labels

        Returns:
            ClassificationResult tagged "Enhanced Rule-Based"
        """
        category_list = parse_categories(categories)
        scores, negation_count = self._score(text, category_list)

        max_score = max(max(scores.values()), 0.0)
        total_score = sum(scores.values())

        if max_score == 0 or total_score == 0:
            # No signal: the exact label "neutral" if configured, else the first category
            best_category = "neutral" if "neutral" in category_list else category_list[0]
        else:
            best_category = next(category for category, score in scores.items() if score == max_score)

        if max_score > 0:
            confidence = min((max_score / total_score) * self.max_confidence, self.max_confidence)
        else:
            confidence = self.default_confidence

        logger.debug(f"Rule-based scores: {scores} -> '{best_category}' ({confidence:.3f})")

        return ClassificationResult(
            category=best_category,
            confidence=confidence,
            method=METHOD_RULE_BASED,
            reasoning=(
                f"Advanced rule-based classification "
                f"(score: {max_score:.1f}, negations: {negation_count})"
            )
        )


_default_classifier: Optional[RuleBasedClassifier] = None


def classify_rule_based(text: str, categories: Union[str, Sequence[str]]) -> ClassificationResult:
    """Classify text with a shared default RuleBasedClassifier."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = RuleBasedClassifier()
    return _default_classifier.classify(text, categories)
