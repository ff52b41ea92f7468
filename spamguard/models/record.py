"""
spamguard/models/record.py
Shared dataclass schema. Classifier, scanner, parsers, report and API
all use these types. Do not add scoring logic here — data only.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass
class MessageRecord:
    """Normalized SMS or MMS record."""
    timestamp_ms:  int
    date_str:      str
    direction:     str          # Received / Sent / Draft / Outbox
    contact_name:  str
    phone_number:  str
    msg_type:      str          # SMS / MMS
    body:          str
    read:          bool
    source_file:   str


@dataclass(frozen=True)
class ClassificationInput:
    """One classification call: body, optional sender, keyword snapshot."""
    message_body:  Optional[str]
    sender:        Optional[str]      = None
    keywords:      Tuple[str, ...]    = ()


@dataclass(frozen=True)
class ContextMetrics:
    """How message length shaped the keyword signal."""
    message_length:      int   = 0
    keyword_count:       int   = 0
    keyword_density:     float = 0.0    # matches per 100 characters
    length_category:     str   = 'Unknown'
    context_multiplier:  float = 1.0
    context_description: str   = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ClassificationResult:
    """Output of one classify() call."""
    is_spam:           bool
    score:             float
    reason:            str
    detection_reasons: Tuple[str, ...] = ()
    context:           ContextMetrics  = field(default_factory=ContextMetrics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_spam':           self.is_spam,
            'score':             self.score,
            'reason':            self.reason,
            'detection_reasons': list(self.detection_reasons),
            'context':           self.context.to_dict(),
        }


@dataclass
class ScanResult:
    """A parsed message paired with its classification."""
    record:            MessageRecord
    result:            ClassificationResult
    category:          str  = 'Not Spam'
    known_spam_number: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp_ms':      self.record.timestamp_ms,
            'date_str':          self.record.date_str,
            'direction':         self.record.direction,
            'contact_name':      self.record.contact_name,
            'phone_number':      self.record.phone_number,
            'msg_type':          self.record.msg_type,
            'source_file':       self.record.source_file,
            'category':          self.category,
            'known_spam_number': self.known_spam_number,
            **self.result.to_dict(),
        }
