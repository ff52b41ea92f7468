"""spamguard/models — dataclass schema shared across the package."""

from spamguard.models.record import (
    ClassificationInput,
    ClassificationResult,
    ContextMetrics,
    MessageRecord,
    ScanResult,
)

__all__ = [
    "ClassificationInput",
    "ClassificationResult",
    "ContextMetrics",
    "MessageRecord",
    "ScanResult",
]
