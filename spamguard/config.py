"""
spamguard/config.py
JSON config with auto-detection. Persists to spamguard_config.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "spamguard_config.json"

DEFAULT_CONFIG = {
    "keywords_path": "spamguard_keywords.json",
    "xml_dir": None,
    "api_host": "127.0.0.1",
    "api_port": 8765,
}

# Common backup locations to auto-detect
AUTO_DETECT_PATHS = [
    Path.home() / "SMSBackup",
    Path.home() / "Documents" / "SMSBackup",
    Path("/sdcard/SMSBackup"),
    Path("/sdcard/Download/SMSBackup"),
]


def _config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / CONFIG_FILENAME


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load config from spamguard_config.json. Returns defaults if missing."""
    path = _config_path(project_root)
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return {**DEFAULT_CONFIG, **data}
            logger.warning("Config load failed: top-level value is not an object")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Config load failed: {e}")
    return dict(DEFAULT_CONFIG)


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Persist config to spamguard_config.json."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path


def auto_detect_xml_dir(candidates: Optional[list] = None) -> Optional[Path]:
    """Scan common paths for sms-*.xml files. Returns first match or None."""
    for d in candidates if candidates is not None else AUTO_DETECT_PATHS:
        try:
            if d.is_dir() and any(d.glob("sms-*.xml")):
                return d
        except OSError:
            continue
    return None


def ensure_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load config and fill xml_dir from auto-detection when unset."""
    config = load_config(project_root)
    if not config.get("xml_dir"):
        detected = auto_detect_xml_dir()
        if detected:
            config["xml_dir"] = str(detected)
            logger.info(f"Auto-detected XML dir: {detected}")
    return config


def keywords_path(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Resolve keywords_path relative to the project root."""
    path = Path(config.get("keywords_path") or DEFAULT_CONFIG["keywords_path"])
    if path.is_absolute():
        return path
    return (project_root or Path.cwd()) / path
