from __future__ import annotations

import re
from typing import Pattern, Sequence

from subtracker.models import EmailMessage


def norm(s: str | None) -> str:
    """Normalize text for matching (None-safe, lowercased)."""
    return (s or "").lower()


def email_text(email: EmailMessage) -> str:
    """Subject and body joined the way every matcher sees them (case preserved)."""
    return f"{email.subject} {email.body}"


def contains_any(text: str | None, needles: Sequence[str]) -> bool:
    """True if any needle is a substring of text (case-insensitive)."""
    t = norm(text)
    return any(n.lower() in t for n in needles)


def regex_any(text: str | None, patterns: Sequence[Pattern[str]]) -> bool:
    """True if any compiled pattern matches somewhere in text."""
    t = norm(text)
    return any(p.search(t) for p in patterns)


def compile_ci(pattern: str) -> Pattern[str]:
    return re.compile(pattern, flags=re.IGNORECASE)
