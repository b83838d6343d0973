import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Settings (.env) and logging
from subtracker.config.logging_setup import configure_logging
from subtracker.config.paths import LOGS_DIR, get_registry

# Input loading and the parser itself
from subtracker.app.mock import sample_emails
from subtracker.app.run import load_emails_file, scan_emails
from subtracker.pipeline.orchestrator import SubscriptionEmailParser
from subtracker.rules.registry import RegistryError


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Detect subscriptions and trials in exported emails.")
    ap.add_argument("file", nargs="?", type=Path, help="JSON list of emails or Gmail message resources")
    ap.add_argument("--mock", action="store_true", help="Scan the built-in sample inbox")
    ap.add_argument("--explain", action="store_true", help="Print per-email scoring diagnostics")
    ap.add_argument("--out", type=Path, help=f"Write results JSON here (relative to {LOGS_DIR})")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    if not args.mock and not args.file:
        print("[ERROR] Pass an emails file or --mock", file=sys.stderr)
        return 1

    try:
        parser = SubscriptionEmailParser(get_registry())
        emails = sample_emails() if args.mock else load_emails_file(args.file)
    except (RegistryError, OSError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    if args.explain:
        output = [parser.explain_email(email).to_dict() for email in emails]
    else:
        output = scan_emails(emails, parser=parser, verbose=args.verbose)

    text = json.dumps(output, indent=2, ensure_ascii=False)
    print(text)

    if args.out:
        out_path = args.out if args.out.is_absolute() else LOGS_DIR / args.out
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"[OK] Wrote {out_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
