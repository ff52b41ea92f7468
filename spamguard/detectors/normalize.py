"""
spamguard/detectors/normalize.py
Locale-fixed case folding and input coercion for the classifier.

str.lower() maps 'I' to 'i' and 'İ' to 'i' + U+0307, which breaks matching
for Turkish text. turkish_lower() applies the tr-TR rules explicitly so
results never depend on the process locale.
"""

from typing import Callable, Iterable, List, Optional

CaseFolder = Callable[[str], str]

_TURKISH_UPPER_MAP = str.maketrans({'I': 'ı', 'İ': 'i'})


def turkish_lower(text: str) -> str:
    """Lowercase using Turkish rules: I → ı, İ → i, everything else as str.lower()."""
    return text.translate(_TURKISH_UPPER_MAP).lower()


def coerce_text(value) -> Optional[str]:
    """
    Best-effort conversion of caller input to str.
    bytes are decoded as UTF-8 with replacement; lone surrogates in str
    become '?' so results always encode. Anything else non-str is absent.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value.encode('utf-8', errors='replace').decode('utf-8')
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8', errors='replace')
    return None


def coerce_keywords(keywords: Optional[Iterable]) -> List[str]:
    """Snapshot a keyword iterable into a list of str, skipping unusable entries."""
    if keywords is None or isinstance(keywords, (str, bytes, bytearray)):
        return []
    try:
        items = list(keywords)
    except TypeError:
        return []
    out: List[str] = []
    for kw in items:
        text = coerce_text(kw)
        if text is not None and text.strip():
            out.append(text.strip())
    return out
