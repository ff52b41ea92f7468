"""
spamguard/parsers/sms_parser.py
Message source: reads SMS Backup & Restore XML exports (sms-*.xml)
and yields MessageRecord values for the classifier.

Streams with ET.iterparse so large exports do not load into RAM.
Schema: https://synctech.com.au/sms-backup-restore/fields-in-xml-backup-files/
"""

import codecs
import io
import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from spamguard.models.record import MessageRecord

logger = logging.getLogger(__name__)

MAX_BODY_LEN  = 50000
MAX_FIELD_LEN = 500
MAX_PHONE_LEN = 30

# tag -> (attribute holding the box, box code -> direction)
DIRECTIONS = {
    'sms': ('type', {'1': 'Received', '2': 'Sent', '3': 'Draft',
                     '4': 'Outbox', '5': 'Failed', '6': 'Queued'}),
    'mms': ('msg_box', {'1': 'Received', '2': 'Sent'}),
}


def parse_sms_file(path: Path) -> List[MessageRecord]:
    """
    Parse one export file. Returns the records read so far on XML errors
    and an empty list when the file cannot be read.
    """
    path = Path(path)
    records: List[MessageRecord] = []

    try:
        stream = io.BytesIO(_as_utf8(path.read_bytes()))
        for _event, el in ET.iterparse(stream, events=('end',)):
            tag = el.tag.lower()
            if tag not in DIRECTIONS:
                continue
            rec = _to_record(el, tag, path.name)
            if rec:
                records.append(rec)
            el.clear()

    except ET.ParseError as e:
        logger.error(f"XML parse error in {path.name}: {e}")
        return records
    except OSError as e:
        logger.error(f"File read error {path.name}: {e}")
        return []

    logger.info(f"Parsed {len(records)} SMS/MMS from {path.name}")
    return records


def parse_sms_directory(directory: Path) -> List[MessageRecord]:
    """
    Parse every sms-*.xml in a directory.
    Deduplicates on (timestamp_ms, phone_number, msg_type), sorted by time.
    """
    directory = Path(directory)
    xml_files = sorted(directory.glob('sms-*.xml'))
    if not xml_files:
        logger.warning(f"No sms-*.xml files found in {directory}")
        return []

    unique = {}
    for path in xml_files:
        for rec in parse_sms_file(path):
            unique.setdefault((rec.timestamp_ms, rec.phone_number, rec.msg_type), rec)

    records = sorted(unique.values(), key=lambda r: r.timestamp_ms)
    logger.info(f"Total SMS/MMS after dedup: {len(records)}")
    return records


def _to_record(el: ET.Element, tag: str, source_file: str) -> Optional[MessageRecord]:
    try:
        ts = int(el.get('date') or 0)
    except ValueError:
        logger.debug(f"Skipped {tag} element with bad date in {source_file}")
        return None

    box_attr, boxes = DIRECTIONS[tag]
    body = _clean(el.get('body'), MAX_BODY_LEN) if tag == 'sms' else _mms_text(el)
    return MessageRecord(
        timestamp_ms = ts,
        date_str     = _format_ts(ts),
        direction    = boxes.get(el.get(box_attr), 'Unknown'),
        contact_name = _clean(el.get('contact_name'), MAX_FIELD_LEN),
        phone_number = _clean_sender(el.get('address')),
        msg_type     = tag.upper(),
        body         = body,
        read         = el.get('read') == '1',
        source_file  = source_file,
    )


def _mms_text(el: ET.Element) -> str:
    """text/plain parts joined by a space; media-only MMS have no body."""
    texts = (_clean(p.get('text'), MAX_BODY_LEN)
             for p in el.iterfind('parts/part') if p.get('ct') == 'text/plain')
    return ' '.join(t for t in texts if t)


def _as_utf8(raw: bytes) -> bytes:
    """Re-encode as clean UTF-8; undecodable bytes become U+FFFD."""
    if raw[:2] not in (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE):
        return raw.decode('utf-8-sig', errors='replace').encode('utf-8')
    # UTF-16 exports: drop the declaration so expat does not re-decode.
    text = raw.decode('utf-16', errors='replace')
    if text.startswith('<?xml'):
        text = text[text.find('?>') + 2:]
    return text.encode('utf-8')


def _format_ts(epoch_ms: int) -> str:
    try:
        return datetime.fromtimestamp(epoch_ms / 1000).strftime('%Y-%m-%d %H:%M:%S')
    except (OSError, OverflowError, ValueError):
        return 'INVALID_DATE'


def _clean(text: Optional[str], max_len: int) -> str:
    if not text or text.lower() == 'null':
        return ''
    return ''.join(c for c in text if c.isprintable() or c in '\n\r\t')[:max_len]


def _clean_sender(sender: Optional[str]) -> str:
    # Sender IDs such as BETBONUS keep their letters for the sender signal.
    if not sender or sender.lower() == 'null':
        return ''
    return ''.join(c for c in sender if c.isalnum() or c in '+-() ')[:MAX_PHONE_LEN]
