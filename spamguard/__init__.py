"""
spamguard — Offline heuristic SMS spam scorer.

    from spamguard import classify, spam_category
    result = classify("Bedava bonus!", sender="4545", keywords=["iddaa"])
"""

__version__ = "1.0.0"

from spamguard.detectors.spam_classifier import SpamClassifier, classify, spam_category
from spamguard.models.record import ClassificationInput, ClassificationResult, ContextMetrics

__all__ = [
    "ClassificationInput",
    "ClassificationResult",
    "ContextMetrics",
    "SpamClassifier",
    "__version__",
    "classify",
    "spam_category",
]
