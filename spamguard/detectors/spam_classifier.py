"""
spamguard/detectors/spam_classifier.py
Heuristic spam scorer — pure Python, zero I/O, fully offline.

Four signal groups add to a running raw score:
  1. Keywords, scaled by a message-length multiplier (dominant signal)
  2. Suspicious regex patterns on the raw body
  3. Sender heuristics
  4. Message characteristics (urgency, punctuation, capitals)

score = min(raw, 1.0); is_spam = score >= 0.5.
Never raises: degenerate input yields the fixed "Empty message" result.
"""

from typing import Iterable, List, Optional, Tuple

from spamguard.detectors.normalize import (
    CaseFolder,
    coerce_keywords,
    coerce_text,
    turkish_lower,
)
from spamguard.detectors.patterns import (
    HIGH_RISK_SENDER_PATTERNS,
    SHORT_NUMERIC_SENDER,
    SUSPICIOUS_PATTERNS,
    URGENCY_WORDS,
)
from spamguard.keywords.builtin import builtin_keywords
from spamguard.models.record import ClassificationInput, ClassificationResult, ContextMetrics

# ── WEIGHTS ──────────────────────────────────────────────────
EXACT_MATCH_WEIGHT      = 0.8
SUBSTRING_MATCH_WEIGHT  = 0.35
MULTI_KEYWORD_BONUS     = 0.2
MULTI_KEYWORD_THRESHOLD = 3
MAX_KEYWORD_REASONS     = 3
PATTERN_WEIGHT          = 0.15
SENDER_PATTERN_WEIGHT   = 0.2
NUMERIC_SENDER_WEIGHT   = 0.15
CHARACTERISTIC_WEIGHT   = 0.1

SPAM_THRESHOLD   = 0.5
MAX_SCORE        = 1.0
MAX_REASON_PARTS = 3

# ── LENGTH CONTEXT ───────────────────────────────────────────
SHORT_MESSAGE  = 50
MEDIUM_MESSAGE = 150

# (category, multiplier, description, reason when a keyword matched)
_SHORT  = ('Short',  1.5, 'short message — amplified spam score',  'keyword in short message — high risk')
_MEDIUM = ('Medium', 1.0, 'medium message — normal spam score',    None)
_LONG   = ('Long',   0.6, 'long message — reduced spam score',     'single keyword in long message — low risk')

EMPTY_REASON = 'Empty message'
NO_SPAM_REASON = 'No spam indicators'


def length_context(message_length: int) -> Tuple[str, float, str, Optional[str]]:
    """Length category row for a trimmed message length."""
    if message_length <= SHORT_MESSAGE:
        return _SHORT
    if message_length <= MEDIUM_MESSAGE:
        return _MEDIUM
    return _LONG


class SpamClassifier:
    """
    Stateless heuristic classifier.

    The built-in keyword tuple and case folder are fixed at construction;
    custom keywords arrive per call. Instances can be shared across threads.

    Usage:
        >>> clf = SpamClassifier()
        >>> result = clf.classify("Bedava bonus için hemen tıkla!", sender="4545")
        >>> result.is_spam
        True
    """

    def __init__(
        self,
        case_folder: CaseFolder              = turkish_lower,
        builtins:    Optional[Iterable[str]] = None,
    ) -> None:
        self.case_folder = case_folder
        self.builtin_keywords: Tuple[str, ...] = tuple(
            builtin_keywords() if builtins is None else builtins
        )

    # ── PUBLIC ───────────────────────────────────────────────

    def classify(
        self,
        message_body,
        sender=None,
        keywords: Optional[Iterable[str]] = None,
    ) -> ClassificationResult:
        body = coerce_text(message_body)
        if body is None or not body.strip():
            return empty_result()

        sender_text = coerce_text(sender)
        custom      = coerce_keywords(keywords)
        reasons: List[str] = []

        keyword_score, context = self._keyword_signal(body, custom, reasons)
        raw_score  = keyword_score
        raw_score += self._pattern_signal(body, reasons)
        raw_score += self._sender_signal(sender_text, reasons)
        raw_score += self._characteristics_signal(body, reasons)

        score = min(raw_score, MAX_SCORE)
        return ClassificationResult(
            is_spam           = score >= SPAM_THRESHOLD,
            score             = score,
            reason            = summarize_reasons(reasons),
            detection_reasons = tuple(reasons),
            context           = context,
        )

    def classify_input(self, request: ClassificationInput) -> ClassificationResult:
        return self.classify(request.message_body, request.sender, request.keywords)

    def candidate_keywords(self, custom: Iterable[str]) -> List[str]:
        """Built-ins first, then custom in given order; duplicates collapse on folded form."""
        seen: set = set()
        ordered: List[str] = []
        for kw in (*self.builtin_keywords, *custom):
            folded = self.case_folder(kw.strip())
            if not folded or folded in seen:
                continue
            seen.add(folded)
            ordered.append(folded)
        return ordered

    # ── SIGNALS ──────────────────────────────────────────────

    def _keyword_signal(
        self,
        body:    str,
        custom:  List[str],
        reasons: List[str],
    ) -> Tuple[float, ContextMetrics]:
        trimmed = body.strip()
        folded  = self.case_folder(trimmed)

        base_score      = 0.0
        keyword_count   = 0
        keyword_reasons = 0

        for kw in self.candidate_keywords(custom):
            if folded == kw:
                base_score += EXACT_MATCH_WEIGHT
                label = f"Exact match: {kw}"
            elif kw in folded:
                base_score += SUBSTRING_MATCH_WEIGHT
                label = f"Spam keyword: {kw}"
            else:
                continue
            keyword_count += 1
            if keyword_reasons < MAX_KEYWORD_REASONS:
                reasons.append(label)
                keyword_reasons += 1

        if keyword_count >= MULTI_KEYWORD_THRESHOLD:
            base_score += MULTI_KEYWORD_BONUS
            reasons.append("Multiple spam keywords")

        message_length = len(trimmed)
        category, multiplier, description, matched_reason = length_context(message_length)
        if keyword_count > 0 and matched_reason:
            reasons.append(matched_reason)

        density = (keyword_count * 100.0) / message_length if message_length else 0.0

        context = ContextMetrics(
            message_length      = message_length,
            keyword_count       = keyword_count,
            keyword_density     = density,
            length_category     = category,
            context_multiplier  = multiplier,
            context_description = description,
        )
        return base_score * multiplier, context

    @staticmethod
    def _pattern_signal(body: str, reasons: List[str]) -> float:
        score = 0.0
        for pattern in SUSPICIOUS_PATTERNS.values():
            if pattern.search(body):
                score += PATTERN_WEIGHT
                reasons.append("Suspicious pattern detected")
        return score

    def _sender_signal(self, sender: Optional[str], reasons: List[str]) -> float:
        if not sender:
            return 0.0

        score  = 0.0
        folded = self.case_folder(sender)

        for pattern in HIGH_RISK_SENDER_PATTERNS:
            if pattern.fullmatch(folded):
                score += SENDER_PATTERN_WEIGHT
                reasons.append(f"Suspicious sender: {sender}")
                break

        # Bulk SMS gateways
        if SHORT_NUMERIC_SENDER.fullmatch(sender):
            score += NUMERIC_SENDER_WEIGHT
            reasons.append("Short numeric sender")

        return score

    def _characteristics_signal(self, body: str, reasons: List[str]) -> float:
        score  = 0.0
        length = len(body)
        folded = self.case_folder(body)

        if length < SHORT_MESSAGE and any(w in folded for w in URGENCY_WORDS):
            score += CHARACTERISTIC_WEIGHT
            reasons.append("Short urgent message")

        if body.count('!') >= 3:
            score += CHARACTERISTIC_WEIGHT
            reasons.append("Excessive punctuation")

        upper = sum(1 for c in body if c.isupper())
        if length > 10 and upper / length > 0.5:
            score += CHARACTERISTIC_WEIGHT
            reasons.append("Excessive capital letters")

        return score


# ── MODULE-LEVEL HELPERS ─────────────────────────────────────

_DEFAULT = SpamClassifier()


def classify(message_body, sender=None, keywords: Optional[Iterable[str]] = None) -> ClassificationResult:
    """Classify with the default (Turkish-folding, built-in keyword) classifier."""
    return _DEFAULT.classify(message_body, sender, keywords)


def empty_result() -> ClassificationResult:
    return ClassificationResult(
        is_spam           = False,
        score             = 0.0,
        reason            = EMPTY_REASON,
        detection_reasons = (),
        context           = ContextMetrics(),
    )


def summarize_reasons(reasons: List[str]) -> str:
    if not reasons:
        return NO_SPAM_REASON
    return ', '.join(reasons[:MAX_REASON_PARTS])


def spam_category(result: ClassificationResult) -> str:
    if not result.is_spam:
        return 'Not Spam'
    if result.score >= 0.8:
        return 'High Risk Spam'
    if result.score >= 0.6:
        return 'Likely Spam'
    return 'Possible Spam'
