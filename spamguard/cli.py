"""
spamguard/cli.py
Command-line interface for SpamGuard.

USAGE:
  python -m spamguard.cli --text "Bedava bonus için hemen tıkla!" --sender 4545
  python -m spamguard.cli --xml-dir ./backups --spam-only --output report.json
  python -m spamguard.cli --add-keyword "iddaa"
  python -m spamguard.cli --list-keywords

EXAMPLES:
  # Single message, machine-readable
  python -m spamguard.cli -t "SON FIRSAT!!! 100 TL bonus" -s BETBONUS --json

  # Scan a backup folder with a specific keyword file
  python -m spamguard.cli -d /sdcard/SMSBackup --keywords-file ./my_keywords.json
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from spamguard.config import keywords_path, load_config
from spamguard.detectors.scanner import scan_messages, spam_results
from spamguard.detectors.spam_classifier import SpamClassifier, spam_category
from spamguard.keywords.store import JsonKeywordStore, normalize_keyword
from spamguard.parsers.sms_parser import parse_sms_directory
from spamguard.report import build_report
from spamguard.report_export import export_to_json

logger = logging.getLogger(__name__)

GREEN  = '\033[92m'
YELLOW = '\033[93m'
RED    = '\033[91m'
CYAN   = '\033[96m'
RESET  = '\033[0m'
BOLD   = '\033[1m'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog        = 'spamguard',
        description = 'SpamGuard — Offline heuristic SMS spam scorer',
        formatter_class = argparse.RawDescriptionHelpFormatter,
        epilog = """
NOTE:
  Scores are heuristic. Misclassification is expected for some messages.
  All processing is local — no data leaves your device.
        """
    )

    parser.add_argument('--text', '-t', help='Message body to classify')
    parser.add_argument('--sender', '-s', default=None, help='Sender of --text (number or sender ID)')
    parser.add_argument(
        '--xml-dir', '-d',
        type = Path,
        help = 'Directory containing sms-*.xml backups to scan',
    )
    parser.add_argument(
        '--spam-only',
        action = 'store_true',
        help   = 'With --xml-dir: list and export spam results only',
    )
    parser.add_argument(
        '--output', '-o',
        type = Path,
        help = 'With --xml-dir: write JSON report to this path',
    )
    parser.add_argument(
        '--keywords-file',
        type = Path,
        help = 'Custom keyword JSON file (default: keywords_path from spamguard_config.json)',
    )
    parser.add_argument('--list-keywords', action='store_true', help='Print built-in and custom keywords')
    parser.add_argument('--add-keyword', metavar='KEYWORD', help='Add a custom keyword')
    parser.add_argument('--remove-keyword', metavar='KEYWORD', help='Remove a custom keyword')
    parser.add_argument('--clear-keywords', action='store_true', help='Remove all custom keywords')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # ── LOGGING SETUP ────────────────────────────────────────
    logging.basicConfig(
        level   = logging.DEBUG if args.verbose else logging.INFO,
        format  = '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt = '%H:%M:%S',
    )

    store = JsonKeywordStore(args.keywords_file or keywords_path(load_config()))

    # ── KEYWORD MANAGEMENT ───────────────────────────────────
    if args.add_keyword is not None:
        if normalize_keyword(args.add_keyword) is None:
            _print(f"{RED}Error: keyword must be at least 2 characters{RESET}")
            return 1
        if store.contains(args.add_keyword):
            _print(f"{YELLOW}Keyword already exists: {args.add_keyword}{RESET}")
            return 1
        store.add_keyword(args.add_keyword)
        _ok(f"Added keyword: {normalize_keyword(args.add_keyword)}")
        return 0

    if args.remove_keyword is not None:
        if not store.remove_keyword(args.remove_keyword):
            _print(f"{YELLOW}Not a custom keyword: {args.remove_keyword}{RESET}")
            return 1
        _ok(f"Removed keyword: {args.remove_keyword}")
        return 0

    if args.clear_keywords:
        count = store.custom_keyword_count()
        store.clear_custom_keywords()
        _ok(f"Cleared {count} custom keyword(s)")
        return 0

    if args.list_keywords:
        if args.json:
            _print(json.dumps({
                "builtin": list(store.builtin_keywords()),
                "custom":  store.custom_keywords(),
            }, indent=2, ensure_ascii=False))
            return 0
        _print(f"\n{BOLD}Built-in keywords:{RESET}")
        for kw in store.builtin_keywords():
            _print(f"  • {kw}")
        _print(f"\n{BOLD}Custom keywords ({store.custom_keyword_count()}):{RESET}")
        for kw in store.custom_keywords():
            _print(f"  • {kw}")
        return 0

    classifier = SpamClassifier()

    # ── SINGLE MESSAGE ───────────────────────────────────────
    if args.text is not None:
        result = classifier.classify(args.text, args.sender, store.custom_keywords())
        if args.json:
            _print(json.dumps(
                {**result.to_dict(), "category": spam_category(result)},
                indent=2, ensure_ascii=False,
            ))
        else:
            _print_result(result)
        return 0

    # ── BACKUP SCAN ──────────────────────────────────────────
    if args.xml_dir is not None:
        return _run_scan(args, classifier, store)

    parser.print_usage()
    _print(f"{YELLOW}Nothing to do: pass --text, --xml-dir or a keyword option.{RESET}")
    return 1


def _run_scan(args, classifier: SpamClassifier, store: JsonKeywordStore) -> int:
    xml_dir = args.xml_dir
    if not xml_dir.exists():
        _print(f"{RED}Error: Directory not found: {xml_dir}{RESET}")
        return 1

    _step("Parsing SMS/MMS files...")
    t0 = time.time()
    messages = parse_sms_directory(xml_dir)
    _ok(f"{len(messages)} messages parsed in {_elapsed(t0)}")

    if not messages:
        _print(f"\n{YELLOW}No messages found in {xml_dir}{RESET}")
        _print("Check that files are named sms-*.xml")
        return 1

    _step("Scoring messages...")
    t0 = time.time()
    results = scan_messages(
        messages,
        keywords   = store.custom_keywords(),
        classifier = classifier,
    )
    report = build_report(results)
    if args.spam_only:
        results = spam_results(results)
    _ok(f"{report.summary.spam_count} spam of {len(messages)} in {_elapsed(t0)}")

    if args.output:
        args.output.write_text(
            export_to_json(
                report,
                scan_parameters = {
                    "xml_dir":         str(xml_dir),
                    "spam_only":       args.spam_only,
                    "custom_keywords": store.custom_keyword_count(),
                },
                scan_results = results,
            ),
            encoding='utf-8',
        )
        _ok(f"Report written to {args.output.resolve()}")

    if args.json:
        _print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        return 0

    _print(f"\n{BOLD}{GREEN}✓ Complete{RESET}")
    for label, count in report.category_distribution.items():
        _print(f"    {label:<15}: {count}")
    return 0


# ── PRINT HELPERS ────────────────────────────────────────────

def _print_result(result):
    colour = RED if result.is_spam else GREEN
    _print(f"\n{BOLD}{colour}{spam_category(result)}{RESET}  score={result.score:.2f}")
    _print(f"  Reason   : {result.reason}")
    ctx = result.context
    _print(f"  Length   : {ctx.message_length} ({ctx.length_category}, x{ctx.context_multiplier})")
    _print(f"  Keywords : {ctx.keyword_count} ({ctx.keyword_density:.2f} per 100 chars)")
    for reason in result.detection_reasons:
        _print(f"    • {reason}")

def _step(msg):  _print(f"  {CYAN}→{RESET} {msg}")
def _ok(msg):    _print(f"  {GREEN}✓{RESET} {msg}")
def _print(msg): print(msg)

def _elapsed(t0: float) -> str:
    s = time.time() - t0
    return f"{s:.1f}s" if s < 60 else f"{int(s//60)}m {int(s%60)}s"


if __name__ == '__main__':
    sys.exit(main())
