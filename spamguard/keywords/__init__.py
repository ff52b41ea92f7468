"""
spamguard/keywords — built-in keyword list and user keyword stores.
"""

from spamguard.keywords.builtin import (
    BUILTIN_KEYWORDS,
    builtin_keywords,
    is_builtin_keyword,
)
from spamguard.keywords.store import (
    InMemoryKeywordStore,
    JsonKeywordStore,
    KeywordStore,
    normalize_keyword,
)

__all__ = [
    "BUILTIN_KEYWORDS",
    "InMemoryKeywordStore",
    "JsonKeywordStore",
    "KeywordStore",
    "builtin_keywords",
    "is_builtin_keyword",
    "normalize_keyword",
]
