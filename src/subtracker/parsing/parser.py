from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from subtracker.extractors.dates import parse_date
from subtracker.models import EmailMessage

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def strip_html(html: str) -> str:
    """HTML to plain text: scripts and styles dropped, entities decoded, whitespace collapsed."""
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "head"]):
        element.decompose()

    text = soup.get_text(separator=" ")
    return _WS_RE.sub(" ", text).strip()


def decode_body_data(data: str) -> str:
    # Gmail strips the base64 padding.
    padded = data + "=" * (-len(data) % 4)
    try:
        return base64.urlsafe_b64decode(padded).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as exc:
        logger.debug("Could not decode message body: %s", exc)
        return ""


def extract_body_from_payload(payload: dict) -> str:
    """
    Extract plain text body from Gmail message payload.
    Falls back to (stripped) HTML if plain text is unavailable.
    """
    def find_part(part: dict, mime_type: str) -> Optional[str]:
        # Depth-first search through multipart payloads.
        if part.get("mimeType") == mime_type and part.get("body", {}).get("data"):
            return decode_body_data(part["body"]["data"])
        for child in part.get("parts", []) or []:
            found = find_part(child, mime_type)
            if found:
                return found
        return None

    if payload.get("body", {}).get("data"):
        body = decode_body_data(payload["body"]["data"])
        if payload.get("mimeType") == "text/html":
            body = strip_html(body)
        return body.strip()

    text = find_part(payload, "text/plain")
    if text:
        return text.strip()

    html = find_part(payload, "text/html")
    if html:
        return strip_html(html)

    return ""


def email_from_gmail_message(message: Dict[str, Any]) -> Optional[EmailMessage]:
    """Map an already-fetched Gmail API message resource onto an EmailMessage."""
    payload = message.get("payload", {}) or {}
    headers = {h["name"]: h["value"] for h in payload.get("headers", []) if "name" in h}

    subject = headers.get("Subject", "")
    from_email = headers.get("From", "")
    raw_date = headers.get("Date", "")
    body = extract_body_from_payload(payload)

    if not subject and not body:
        return None

    return EmailMessage(
        id=str(message.get("id") or ""),
        subject=subject,
        body=body,
        from_email=from_email,
        date=(parse_date(raw_date) if raw_date else None) or raw_date,
    )


def unique_by_id(emails: Iterable[EmailMessage]) -> List[EmailMessage]:
    """Drop repeated message ids, keeping the first occurrence."""
    seen = set()
    unique: List[EmailMessage] = []
    for email in emails:
        if email.id and email.id in seen:
            continue
        seen.add(email.id)
        unique.append(email)
    return unique
