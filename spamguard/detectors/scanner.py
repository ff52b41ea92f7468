"""
spamguard/detectors/scanner.py
Batch pipeline: runs the classifier over parsed messages.
Message bodies are never logged.
"""

import logging
from typing import Callable, Iterable, List, Optional

from spamguard.detectors.patterns import is_known_spam_number
from spamguard.detectors.spam_classifier import SpamClassifier, spam_category
from spamguard.models.record import MessageRecord, ScanResult

logger = logging.getLogger(__name__)


def scan_messages(
    messages:    List[MessageRecord],
    keywords:    Optional[Iterable[str]] = None,
    classifier:  Optional[SpamClassifier] = None,
    progress_cb: Optional[Callable]       = None,
) -> List[ScanResult]:
    """
    Classify every message. keywords is snapshotted once for the whole batch.
    Returns one result per message; build reports from this full list.

    progress_cb: optional callable(current, total, label) for CLI progress bar.
    """
    classifier = classifier or SpamClassifier()
    snapshot   = list(keywords or [])
    total      = len(messages)
    results: List[ScanResult] = []

    logger.info(f"Scanning {total} messages with {len(snapshot)} custom keyword(s)...")

    for i, msg in enumerate(messages):
        if progress_cb:
            progress_cb(i + 1, total, msg.contact_name or msg.phone_number)

        result = classifier.classify(msg.body, msg.phone_number, snapshot)
        results.append(ScanResult(
            record            = msg,
            result            = result,
            category          = spam_category(result),
            known_spam_number = is_known_spam_number(msg.phone_number),
        ))

    spam_count = sum(1 for r in results if r.result.is_spam)
    logger.info(f"Scan complete: {spam_count} spam / {total} messages")
    return results


def spam_results(results: List[ScanResult]) -> List[ScanResult]:
    """Subset with is_spam == True, for --spam-only listings and exports."""
    return [r for r in results if r.result.is_spam]
