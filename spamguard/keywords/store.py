"""
spamguard/keywords/store.py
User keyword storage. The classifier never reads a store directly;
callers snapshot all_keywords() / custom_keywords() and pass the list in.

Invariants:
  - custom keywords are trimmed, Turkish-lowercased, at least 2 characters
  - a custom keyword never duplicates a built-in or another custom keyword
  - custom keywords keep insertion order
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from spamguard.detectors.normalize import CaseFolder, turkish_lower
from spamguard.keywords.builtin import builtin_keywords, is_builtin_keyword

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 2


def normalize_keyword(keyword: Optional[str], case_folder: CaseFolder = turkish_lower) -> Optional[str]:
    """Folded form of a user keyword, or None if it is empty or too short."""
    if not isinstance(keyword, str):
        return None
    normalized = case_folder(keyword.strip())
    if len(normalized) < MIN_KEYWORD_LENGTH:
        return None
    return normalized


class KeywordStore(ABC):
    """
    Base keyword store. Subclasses implement _load() and _save();
    validation, ordering and locking live here.
    """

    def __init__(self, case_folder: CaseFolder = turkish_lower) -> None:
        self.case_folder = case_folder
        self._lock = threading.Lock()
        self._custom: List[str] = []
        for kw in self._load():
            normalized = normalize_keyword(kw, case_folder)
            if normalized and normalized not in self._custom and not self.is_builtin(normalized):
                self._custom.append(normalized)

    # ── PERSISTENCE HOOKS ────────────────────────────────────

    @abstractmethod
    def _load(self) -> Iterable[str]:
        """Return previously persisted custom keywords."""

    @abstractmethod
    def _save(self, keywords: List[str]) -> None:
        """Persist the full custom keyword list."""

    # ── QUERIES ──────────────────────────────────────────────

    @staticmethod
    def builtin_keywords() -> Tuple[str, ...]:
        return builtin_keywords()

    def is_builtin(self, keyword: str) -> bool:
        return is_builtin_keyword(keyword, self.case_folder)

    def custom_keywords(self) -> List[str]:
        with self._lock:
            return list(self._custom)

    def all_keywords(self) -> List[str]:
        return [*self.builtin_keywords(), *self.custom_keywords()]

    def custom_keyword_count(self) -> int:
        with self._lock:
            return len(self._custom)

    def contains(self, keyword: str) -> bool:
        normalized = normalize_keyword(keyword, self.case_folder)
        if normalized is None:
            return False
        with self._lock:
            return normalized in self._custom or self.is_builtin(normalized)

    # ── MUTATIONS ────────────────────────────────────────────

    def add_keyword(self, keyword: Optional[str]) -> bool:
        """Add a custom keyword. Returns False if invalid or a duplicate."""
        normalized = normalize_keyword(keyword, self.case_folder)
        if normalized is None:
            return False
        with self._lock:
            if normalized in self._custom or self.is_builtin(normalized):
                return False
            self._custom.append(normalized)
            self._save(list(self._custom))
        logger.info(f"Custom keyword added ({len(self._custom)} total)")
        return True

    def remove_keyword(self, keyword: Optional[str]) -> bool:
        """Remove a custom keyword. Built-ins cannot be removed."""
        if not isinstance(keyword, str):
            return False
        normalized = self.case_folder(keyword.strip())
        with self._lock:
            if normalized not in self._custom:
                return False
            self._custom.remove(normalized)
            self._save(list(self._custom))
        logger.info(f"Custom keyword removed ({len(self._custom)} remaining)")
        return True

    def clear_custom_keywords(self) -> None:
        with self._lock:
            self._custom.clear()
            self._save([])
        logger.info("Custom keywords cleared")


class InMemoryKeywordStore(KeywordStore):
    """Non-persistent store — tests and one-shot CLI runs."""

    def __init__(self, keywords: Optional[Iterable[str]] = None, case_folder: CaseFolder = turkish_lower) -> None:
        self._initial = list(keywords or [])
        super().__init__(case_folder)

    def _load(self) -> Iterable[str]:
        return self._initial

    def _save(self, keywords: List[str]) -> None:
        pass


class JsonKeywordStore(KeywordStore):
    """
    Persists custom keywords to a JSON file:
        {"custom_keywords": ["kw1", "kw2"]}
    A missing or unreadable file is treated as an empty list.
    """

    def __init__(self, path: Path, case_folder: CaseFolder = turkish_lower) -> None:
        self.path = Path(path)
        super().__init__(case_folder)

    def _load(self) -> Iterable[str]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Keyword file load failed: {e}")
            return []
        items = data.get("custom_keywords", []) if isinstance(data, dict) else []
        return [kw for kw in items if isinstance(kw, str)]

    def _save(self, keywords: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"custom_keywords": keywords}, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
