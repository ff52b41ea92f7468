"""
spamguard/report_export.py
JSON export of a scan report.

Every export carries the format version, scan parameters, the pattern set
version and a SHA-256 hash of the canonical payload (computed before the
hash field is added).
"""

import hashlib
import json
from typing import Any, Dict, List, Optional

from spamguard.detectors.patterns import PATTERN_SET_VERSION
from spamguard.models.record import ScanResult
from spamguard.report import Report, report_to_dict

EXPORT_FORMAT_VERSION = "1.0"


def _build_export_payload(
    report:          Report,
    scan_parameters: Optional[Dict[str, Any]] = None,
    scan_results:    Optional[List[ScanResult]] = None,
) -> Dict[str, Any]:
    payload = {
        "export_format_version": EXPORT_FORMAT_VERSION,
        "report_metadata": {
            "generated_at":        report.generated_at,
            "pattern_set_version": PATTERN_SET_VERSION,
            "scan_parameters":     dict(scan_parameters) if scan_parameters else {},
        },
        "report": report_to_dict(report),
    }
    if scan_results is not None:
        payload["results"] = [r.to_dict() for r in scan_results]
    return payload


def _content_hash(payload: Dict[str, Any]) -> str:
    """SHA-256 of canonical JSON serialization of payload (no hash field)."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def export_to_dict(
    report:          Report,
    scan_parameters: Optional[Dict[str, Any]] = None,
    scan_results:    Optional[List[ScanResult]] = None,
) -> Dict[str, Any]:
    """
    Structured export. scan_results adds per-message verdicts
    (scores and reasons only, no bodies).
    """
    payload = _build_export_payload(report, scan_parameters, scan_results)
    return {**payload, "content_hash_sha256": _content_hash(payload)}


def export_to_json(
    report:          Report,
    scan_parameters: Optional[Dict[str, Any]] = None,
    scan_results:    Optional[List[ScanResult]] = None,
    indent:          Optional[int] = 2,
) -> str:
    return json.dumps(
        export_to_dict(report, scan_parameters, scan_results),
        indent=indent,
        ensure_ascii=False,
    )
