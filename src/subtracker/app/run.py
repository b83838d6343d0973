# src/subtracker/app/run.py
from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from subtracker.models import EmailMessage
from subtracker.parsing.parser import email_from_gmail_message, unique_by_id
from subtracker.pipeline.dedupe import dedupe_by_service
from subtracker.pipeline.orchestrator import SubscriptionEmailParser
from subtracker.rules.candidate import is_candidate


@dataclass
class ScanSummary:
    received: int
    unique_messages: int
    candidates: int
    parsed: int
    subscriptions: int
    results: List[Dict[str, Any]] = field(default_factory=list)


def load_emails_file(path: Path) -> List[EmailMessage]:
    """
    Read a JSON list of emails.
    Items with a "payload" key are raw Gmail API message resources,
    everything else is taken as a plain EmailMessage dict.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of emails in {path}")

    emails: List[EmailMessage] = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError(f"Email entries must be objects, got {type(item).__name__}")
        if "payload" in item:
            email = email_from_gmail_message(item)
            if email:
                emails.append(email)
        else:
            emails.append(EmailMessage.from_dict(item))
    return emails


def scan_emails(
    emails: List[EmailMessage],
    *,
    parser: Optional[SubscriptionEmailParser] = None,
    verbose: bool = False,
    progress_cb: Optional[Callable[[str, Dict[str, Any]], None]] = None,
) -> Dict[str, Any]:
    """
    Parse a batch of already-fetched emails and return a JSON-serializable summary.

    Args:
        emails: Plain-text emails (transport decoding already done).
        parser: Parser to use; defaults to one over the built-in registry.
        verbose: If True, print progress for CLI usage.
        progress_cb: Optional (step, payload) callback for UI progress.
    """
    def log(msg: str) -> None:
        if verbose:
            print(msg)

    def report(step: str, *, detail: str | None = None, **extra: Any) -> None:
        if not progress_cb:
            return
        payload: Dict[str, Any] = {"detail": detail}
        payload.update(extra)
        progress_cb(step, payload)

    parser = parser or SubscriptionEmailParser()

    report("dedupe_messages", detail=f"Received {len(emails)} messages")
    unique = unique_by_id(emails)
    log(f"[scan] {len(unique)} unique messages ({len(emails)} received)")

    candidates = [email for email in unique if is_candidate(email)]
    log(f"[scan] {len(candidates)} subscription/trial candidates")

    parsed = []
    for index, email in enumerate(candidates, start=1):
        result = parser.parse_email(email)
        if result is not None:
            parsed.append(result)
            log(f"[match] {email.id}: {result.service_name} (confidence {result.confidence:.2f})")
        report("parsing", detail=f"Parsing {index}/{len(candidates)}")

    subscriptions = dedupe_by_service(parsed)

    summary = ScanSummary(
        received=len(emails),
        unique_messages=len(unique),
        candidates=len(candidates),
        parsed=len(parsed),
        subscriptions=len(subscriptions),
        results=[s.to_dict() for s in subscriptions],
    )
    report(
        "done",
        detail="Scan completed",
        metrics={
            "received": summary.received,
            "candidates": summary.candidates,
            "parsed": summary.parsed,
            "subscriptions": summary.subscriptions,
        },
    )
    return asdict(summary)
