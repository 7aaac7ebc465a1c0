"""
Basic hybrid classification example using a sentiment training set.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from hybrid_text_classifier import HybridClassifier, LLMClassifier, TrainingSet, ConfigurationError

# Load the labeled examples used by the TF-IDF matcher
training_set = TrainingSet.load("datasets/sentiment_training_set.json")

# Without AWS access the classifier still answers with the rule-based fallback
try:
    remote_classifier = LLMClassifier()
except ConfigurationError as e:
    print(f"LLM unavailable, using rule-based fallback: {e}")
    remote_classifier = None

classifier = HybridClassifier(remote_classifier=remote_classifier, training_set=training_set)

test_texts = [
    "Absolutely excellent, the best purchase I made this year!",
    "It was not good at all, the screen stopped working.",
    "The order number is printed on the receipt."
]

print("Sentiment Classification Results:")
print("=" * 50)

for i, text in enumerate(test_texts, 1):
    result = classifier.classify(text, "positive, negative, neutral")
    print(f"\n{i}. Text: {text[:60]}...")
    print(f"   Category: {result.category}")
    print(f"   Confidence: {result.confidence:.4f} ({result.get_confidence_level()})")
    print(f"   Method: {result.method}")

    # Show what each method contributed
    if result.details:
        for name, sub_result in result.details.items():
            print(f"     - {name}: {sub_result.category} ({sub_result.confidence:.4f})")
