"""
Batch classification example with per-item rule-based fallback and JSON export.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from hybrid_text_classifier import HybridClassifier, LLMClassifier, ConfigurationError, split_batch_text, save_results

batch_text = """Fantastic support, my issue was solved in minutes
I hate waiting on hold for an hour

The store opens at nine
Is the warranty included?"""

try:
    remote_classifier = LLMClassifier()
except ConfigurationError as e:
    print(f"LLM unavailable, using rule-based fallback: {e}")
    remote_classifier = None

classifier = HybridClassifier(remote_classifier=remote_classifier)
batch = classifier.classify_batch(split_batch_text(batch_text), "positive, negative, neutral", max_workers=4)

print("Batch Classification Results:")
print("=" * 50)

for item in batch.results:
    marker = " (fallback)" if item.fallback else ""
    print(f"{item.result.category:>10} {item.confidence:.2f}{marker}  {item.text}")

print(f"\nTotal: {batch.summary.total}, average confidence: {batch.summary.formatted_avg_confidence}")

output_path = save_results(batch, "batch_results.json")
print(f"Results saved to {output_path}")
