"""
spamguard/api.py
─────────────────────────────────────────────────────────────────────────────
SpamGuard — Dual-mode API layer

TWO USAGE MODES:
  1. Importable module:
         from spamguard.api import SpamGuardAPI
         api = SpamGuardAPI(keywords_path=Path("spamguard_keywords.json"))
         result = api.classify("Bedava bonus!", sender="4545")

  2. FastAPI HTTP server:
         python -m spamguard.api                  # default: port 8765
         python -m spamguard.api --port 9000
         uvicorn spamguard.api:app --port 8765

ENDPOINTS:
  POST   /classify           — score one message
  POST   /classify/batch     — score many messages with one keyword snapshot
  GET    /keywords           — built-in and custom keywords
  POST   /keywords           — add a custom keyword
  DELETE /keywords/{keyword} — remove a custom keyword
  POST   /scan               — parse sms-*.xml in a directory and score it
  GET    /health             — status

CORS: localhost-only. The server binds to 127.0.0.1 by default.
PRIVACY: message bodies are scored in-process and never logged.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from spamguard import __version__
from spamguard.config import keywords_path, load_config
from spamguard.detectors.scanner import scan_messages, spam_results
from spamguard.detectors.spam_classifier import SpamClassifier, spam_category
from spamguard.keywords.store import JsonKeywordStore, KeywordStore, normalize_keyword
from spamguard.report import build_report, report_to_dict

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# IMPORTABLE CLASS
# ═══════════════════════════════════════════════════════════════════════════

class SpamGuardAPI:
    """
    Pure-Python facade over the classifier and a keyword store.
    No HTTP layer required — import and call directly.
    """

    def __init__(
        self,
        keywords_path: Optional[Path]           = None,
        store:         Optional[KeywordStore]   = None,
        classifier:    Optional[SpamClassifier] = None,
    ):
        if store is None:
            store = JsonKeywordStore(keywords_path or Path("spamguard_keywords.json"))
        self.store      = store
        self.classifier = classifier or SpamClassifier()

    # ── CLASSIFY ──────────────────────────────────────────────────────────

    def classify(self, body: Optional[str], sender: Optional[str] = None) -> Dict[str, Any]:
        result = self.classifier.classify(body, sender, self.store.custom_keywords())
        return {**result.to_dict(), "category": spam_category(result)}

    def classify_batch(self, items: List[Dict[str, Optional[str]]]) -> List[Dict[str, Any]]:
        snapshot = self.store.custom_keywords()
        out = []
        for item in items:
            result = self.classifier.classify(item.get("body"), item.get("sender"), snapshot)
            out.append({**result.to_dict(), "category": spam_category(result)})
        return out

    # ── KEYWORDS ──────────────────────────────────────────────────────────

    def list_keywords(self) -> Dict[str, List[str]]:
        return {
            "builtin": list(self.store.builtin_keywords()),
            "custom":  self.store.custom_keywords(),
        }

    def add_keyword(self, keyword: str) -> str:
        """
        Add a custom keyword and return its normalized form.
        Raises ValueError if invalid; KeyError if it already exists.
        """
        normalized = normalize_keyword(keyword, self.store.case_folder)
        if normalized is None:
            raise ValueError("Keyword must be at least 2 characters")
        if self.store.contains(keyword):
            raise KeyError(normalized)
        self.store.add_keyword(keyword)
        return normalized

    def remove_keyword(self, keyword: str) -> bool:
        return self.store.remove_keyword(keyword)

    # ── SCAN ──────────────────────────────────────────────────────────────

    def run_scan(self, xml_dir: Path, spam_only: bool = False) -> Dict[str, Any]:
        """
        Parse sms-*.xml in xml_dir and score every message.
        Raises ValueError if xml_dir is missing or not a directory.
        """
        xml_dir = Path(xml_dir).resolve()
        if not xml_dir.exists():
            raise ValueError(f"xml_dir does not exist: {xml_dir}")
        if not xml_dir.is_dir():
            raise ValueError(f"xml_dir is not a directory: {xml_dir}")

        from spamguard.parsers.sms_parser import parse_sms_directory

        logger.info(f"Scan started | xml_dir={xml_dir}")
        messages = parse_sms_directory(xml_dir)
        results = scan_messages(
            messages,
            keywords   = self.store.custom_keywords(),
            classifier = self.classifier,
        )
        report = build_report(results)
        if spam_only:
            results = spam_results(results)
        return {
            "status":          "ok",
            "messages_parsed": len(messages),
            "report":          report_to_dict(report),
            "results":         [r.to_dict() for r in results],
        }


# ═══════════════════════════════════════════════════════════════════════════
# FASTAPI HTTP APP
# ═══════════════════════════════════════════════════════════════════════════

class ClassifyRequest(BaseModel):
    body:   Optional[str] = None
    sender: Optional[str] = None


class BatchRequest(BaseModel):
    messages: List[ClassifyRequest] = Field(default_factory=list, max_length=1000)


class KeywordRequest(BaseModel):
    keyword: str


class ScanRequest(BaseModel):
    xml_dir:   Optional[str] = None     # uses config if empty
    spam_only: bool          = False


def _build_app(api: Optional[SpamGuardAPI] = None) -> FastAPI:
    """
    Build the FastAPI application. Without an explicit api, the keyword
    file comes from spamguard_config.json in the working directory.
    """
    if api is None:
        api = SpamGuardAPI(keywords_path=keywords_path(load_config()))

    _app = FastAPI(
        title       = "SpamGuard API",
        description = "Offline heuristic SMS spam scorer — local API",
        version     = __version__,
        docs_url    = "/docs",
        redoc_url   = None,
    )

    _app.add_middleware(
        CORSMiddleware,
        allow_origins     = [
            "http://localhost",
            "http://localhost:8765",
            "http://127.0.0.1",
            "http://127.0.0.1:8765",
            "null",   # file:// origin
        ],
        allow_methods     = ["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers     = ["Content-Type"],
        allow_credentials = False,
    )

    @_app.post("/classify", summary="Score one message")
    def classify(req: ClassifyRequest):
        return api.classify(req.body, req.sender)

    @_app.post("/classify/batch", summary="Score several messages")
    def classify_batch(req: BatchRequest):
        results = api.classify_batch([m.model_dump() for m in req.messages])
        return {"count": len(results), "results": results}

    @_app.get("/keywords", summary="List keywords")
    def list_keywords():
        return api.list_keywords()

    @_app.post("/keywords", status_code=201, summary="Add a custom keyword")
    def add_keyword(req: KeywordRequest):
        try:
            normalized = api.add_keyword(req.keyword)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except KeyError:
            raise HTTPException(status_code=409, detail=f"Keyword already exists: {req.keyword}")
        return {"status": "ok", "keyword": normalized}

    @_app.delete("/keywords/{keyword}", summary="Remove a custom keyword")
    def remove_keyword(keyword: str):
        if not api.remove_keyword(keyword):
            raise HTTPException(status_code=404, detail=f"Custom keyword not found: {keyword}")
        return {"status": "ok"}

    @_app.post("/scan", summary="Scan an SMS backup directory")
    def scan(req: ScanRequest):
        xml_dir = req.xml_dir
        if not xml_dir:
            from spamguard.config import ensure_config
            xml_dir = ensure_config().get("xml_dir")
            if not xml_dir:
                raise HTTPException(status_code=400, detail="xml_dir required. Set it in config or the request.")
        try:
            return api.run_scan(Path(xml_dir), spam_only=req.spam_only)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except Exception as exc:
            logger.error(f"Scan endpoint error: {exc}", exc_info=True)
            raise HTTPException(status_code=500, detail=f"Scan failed: {exc}")

    @_app.get("/health", summary="Health check")
    def health():
        return {
            "status":          "ok",
            "version":         __version__,
            "custom_keywords": api.store.custom_keyword_count(),
        }

    return _app


# Module-level app instance — used by uvicorn spamguard.api:app
app = _build_app()


# ═══════════════════════════════════════════════════════════════════════════
# CLI ENTRYPOINT — python -m spamguard.api
# ═══════════════════════════════════════════════════════════════════════════

def main(argv=None) -> None:
    config = load_config()
    parser = argparse.ArgumentParser(
        prog        = "spamguard-api",
        description = "SpamGuard API Server — localhost scoring service",
    )
    parser.add_argument("--port", type=int, default=config["api_port"],
                        help="Port to bind (default: 8765)")
    parser.add_argument("--host", type=str, default=config["api_host"],
                        help="Host to bind — DO NOT change to 0.0.0.0 on shared networks")
    parser.add_argument("--keywords-file", type=Path, default=None,
                        help="Custom keyword JSON file (default: from config)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level  = logging.INFO,
        format = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    server_app = _build_app(SpamGuardAPI(keywords_path=args.keywords_file or keywords_path(config)))
    uvicorn.run(server_app, host=args.host, port=args.port, log_level="info")


if __name__ == "__main__":
    main()
