"""
spamguard/report.py
Scan summary report. Counts, category distribution and top reasons.
No message bodies in report output.
"""

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from spamguard.models.record import ScanResult

CATEGORIES = ('High Risk Spam', 'Likely Spam', 'Possible Spam', 'Not Spam')


@dataclass
class SummaryStats:
    total_messages:     int   = 0
    spam_count:         int   = 0
    spam_rate:          float = 0.0
    average_score:      float = 0.0
    known_spam_numbers: int   = 0


@dataclass
class SenderSummary:
    sender:        str
    spam_count:    int
    max_score:     float


@dataclass
class Report:
    generated_at:          str
    summary:               SummaryStats
    category_distribution: Dict[str, int]       = field(default_factory=dict)
    length_distribution:   Dict[str, int]       = field(default_factory=dict)
    top_reasons:           List[Dict[str, Any]] = field(default_factory=list)
    top_spam_senders:      List[SenderSummary]  = field(default_factory=list)


def build_report(scan_results: List[ScanResult], top: int = 10) -> Report:
    total = len(scan_results)
    spam  = [r for r in scan_results if r.result.is_spam]

    summary = SummaryStats(
        total_messages     = total,
        spam_count         = len(spam),
        spam_rate          = round(len(spam) / total, 4) if total else 0.0,
        average_score      = round(sum(r.result.score for r in scan_results) / total, 4) if total else 0.0,
        known_spam_numbers = len({r.record.phone_number for r in scan_results if r.known_spam_number}),
    )

    categories = {c: 0 for c in CATEGORIES}
    for r in scan_results:
        categories[r.category] = categories.get(r.category, 0) + 1

    lengths = Counter(r.result.context.length_category for r in scan_results)

    reasons = Counter()
    for r in scan_results:
        reasons.update(r.result.detection_reasons)

    senders: Dict[str, SenderSummary] = {}
    for r in spam:
        key = r.record.phone_number or r.record.contact_name or 'unknown'
        entry = senders.get(key)
        if entry is None:
            senders[key] = SenderSummary(sender=key, spam_count=1, max_score=r.result.score)
        else:
            entry.spam_count += 1
            entry.max_score = max(entry.max_score, r.result.score)

    top_senders = sorted(senders.values(), key=lambda s: (-s.spam_count, -s.max_score, s.sender))

    return Report(
        generated_at          = datetime.now(timezone.utc).isoformat(),
        summary               = summary,
        category_distribution = categories,
        length_distribution   = dict(lengths),
        top_reasons           = [{"reason": k, "count": v} for k, v in reasons.most_common(top)],
        top_spam_senders      = top_senders[:top],
    )


def report_to_dict(report: Report) -> Dict[str, Any]:
    return asdict(report)
