"""
spamguard/keywords/builtin.py
Built-in keyword list. Ships with the classifier; read-only.
Turkish gambling and marketing vocabulary, already in folded form.
"""

from typing import Optional, Tuple

from spamguard.detectors.normalize import CaseFolder, turkish_lower

BUILTIN_KEYWORDS: Tuple[str, ...] = (
    'bahis', 'kumar', 'bet', 'casino', 'bonus', 'freespin',
    'çevrim', 'yatır', 'kazanç', 'slot', 'rulet', 'poker',
    'jackpot', 'bedava', 'para kazan', 'deneme bonusu',
    'çevrimsiz', 'hoşgeldin', 'promosyon', 'oyna', 'kazan',
)


def builtin_keywords() -> Tuple[str, ...]:
    """Canonical accessor for the built-in list, in match order."""
    return BUILTIN_KEYWORDS


def is_builtin_keyword(keyword: Optional[str], case_folder: CaseFolder = turkish_lower) -> bool:
    if not keyword:
        return False
    folded = case_folder(keyword.strip())
    return any(case_folder(kw) == folded for kw in BUILTIN_KEYWORDS)
