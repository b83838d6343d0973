from __future__ import annotations

from subtracker.models import Frequency, Status
from subtracker.rules.keywords import YEARLY_KEYWORDS
from subtracker.rules.matching import contains_any, norm


def detect_frequency(text: str) -> Frequency:
    if contains_any(text, YEARLY_KEYWORDS):
        return "yearly"
    return "monthly"


def detect_status(text: str, has_trial_keywords: bool) -> Status:
    if has_trial_keywords or "trial" in norm(text):
        return "trial"
    return "active"
