"""
spamguard/detectors/patterns.py
Canonical suspicious-pattern and sender-pattern lists.
Bump PATTERN_SET_VERSION whenever a pattern is added, removed or edited.
"""

import re
from typing import Dict, Pattern, Tuple

PATTERN_SET_VERSION = '1'

# Tested against the raw body, case-insensitive. Keys name the signal.
SUSPICIOUS_PATTERNS: Dict[str, Pattern[str]] = {
    'currency_amount': re.compile(r'\b\d{2,}\s*(TL|₺|lira)', re.IGNORECASE),
    'url':             re.compile(r'\b(www\.|http|https)', re.IGNORECASE),
    'percentage':      re.compile(r'\b\d{2,}\s*%', re.IGNORECASE),
    'action_word':     re.compile(r'\b(tikla|tıkla|kayit|kayıt|bonus|hemen|acele)', re.IGNORECASE),
    'promo_code':      re.compile(r'\b\d{4}\s*kod', re.IGNORECASE),
    'intl_number':     re.compile(r'\+\d{1,3}\s*\d{3,}', re.IGNORECASE),
}

# Matched against the whole folded sender; first hit wins.
HIGH_RISK_SENDER_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r'\d{4,5}'),
    re.compile(r'.*bonus.*', re.IGNORECASE | re.DOTALL),
    re.compile(r'.*bet.*', re.IGNORECASE | re.DOTALL),
    re.compile(r'.*casino.*', re.IGNORECASE | re.DOTALL),
)

SHORT_NUMERIC_SENDER = re.compile(r'[0-9]{4,6}')

URGENCY_WORDS: Tuple[str, ...] = ('hemen', 'acele', 'son')

# Informational only — not part of the score.
KNOWN_SPAM_NUMBER_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r'0850.*'),      # marketing numbers
    re.compile(r'444.*'),       # 444 short codes
    re.compile(r'[0-9]{4}'),    # 4-digit short codes
)


def is_known_spam_number(phone_number) -> bool:
    """True if the number looks like a Turkish marketing/short-code line."""
    if not isinstance(phone_number, str) or not phone_number:
        return False
    return any(p.fullmatch(phone_number) for p in KNOWN_SPAM_NUMBER_PATTERNS)
