"""
tests/conftest.py
Shared fixtures. Synthetic data only.
"""

import pytest

from spamguard.detectors.spam_classifier import SpamClassifier
from spamguard.keywords.store import InMemoryKeywordStore, JsonKeywordStore


@pytest.fixture
def classifier():
    return SpamClassifier()


@pytest.fixture
def memory_store():
    return InMemoryKeywordStore()


@pytest.fixture
def json_store(tmp_path):
    return JsonKeywordStore(tmp_path / "keywords.json")
