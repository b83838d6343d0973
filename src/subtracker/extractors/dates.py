from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_MONTH_DAY = rf"{_MONTH}\s+\d{{1,2}}"
_MONTH_DAY_YEAR = rf"{_MONTH_DAY},?\s+\d{{4}}"

# Tried in order; the first one that yields a real calendar date wins.
DATE_PATTERNS: Tuple[re.Pattern[str], ...] = (
    # "Your trial ends on January 15, 2025" / "trial of Notion Pro expires on August 5, 2025"
    re.compile(
        r"trial\s+(?:of\s+[a-z0-9 +&'-]{1,40}?\s+)?(?:ends?|ending|expires?)\s+(?:on\s+)?"
        rf"({_MONTH_DAY_YEAR})",
        re.IGNORECASE,
    ),
    # "Your trial will end January 15" (no year)
    re.compile(rf"trial\s+(?:will\s+)?end\s+({_MONTH_DAY})", re.IGNORECASE),
    # "Free trial until 2025-01-15"
    re.compile(r"trial\s+until\s+(\d{4}-\d{2}-\d{2})", re.IGNORECASE),
    # "Trial expires: Jan 15, 2025"
    re.compile(rf"trial\s+expires?:?\s+({_MONTH_DAY_YEAR})", re.IGNORECASE),
    # ISO 8601 datetime anywhere in the text
    re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})", re.IGNORECASE),
)


def parse_date(value: str) -> Optional[str]:
    """Parse a free-form date and return YYYY-MM-DD, or None if it is not a real date."""
    try:
        # Missing parts (e.g. the year in "January 15") come from today's date.
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    return parsed.date().isoformat()


def extract_trial_end_date(text: str) -> Optional[str]:
    """
    First date pattern match that parses wins.
    Matching is case-insensitive and the raw matched substring is what gets parsed.
    """
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        parsed = parse_date(match.group(1))
        if parsed:
            return parsed
        logger.debug("Unparseable trial end date %r (pattern %s)", match.group(1), pattern.pattern)
    return None
