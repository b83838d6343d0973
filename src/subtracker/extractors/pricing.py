from __future__ import annotations

import re
from typing import Optional, Tuple

# (currency code, pattern); the order decides which currency wins.
CURRENCY_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    ("USD", re.compile(r"\$(\d+(?:\.\d{2})?)")),
    ("EUR", re.compile(r"€(\d+(?:\.\d{2})?)")),
    ("GBP", re.compile(r"£(\d+(?:\.\d{2})?)")),
    ("INR", re.compile(r"₹(\d+(?:,\d{3})*(?:\.\d{2})?)")),
)


def _to_amount(raw: str) -> float:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return 0.0


def extract_pricing(text: str) -> Tuple[Optional[float], Optional[str]]:
    """
    Return (amount, currency) for the first currency whose first amount is positive,
    or (None, None). Only the first occurrence of each currency is considered.
    """
    for currency, pattern in CURRENCY_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = _to_amount(match.group(1))
        if amount > 0:
            return amount, currency
    return None, None
