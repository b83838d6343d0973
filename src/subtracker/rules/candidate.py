from __future__ import annotations

from dataclasses import dataclass

from subtracker.models import EmailMessage
from subtracker.rules.keywords import BILLING_KEYWORDS, TRIAL_KEYWORDS
from subtracker.rules.matching import contains_any, email_text


@dataclass(frozen=True)
class CandidateMatch:
    has_trial_keywords: bool
    has_billing_keywords: bool

    @property
    def is_candidate(self) -> bool:
        return self.has_trial_keywords or self.has_billing_keywords


def match_candidate(email: EmailMessage) -> CandidateMatch:
    """
    Keyword gate for subscription/trial emails.
    Plain substring containment, so "invoiced" still counts as "invoice".
    """
    text = email_text(email)
    return CandidateMatch(
        has_trial_keywords=contains_any(text, TRIAL_KEYWORDS),
        has_billing_keywords=contains_any(text, BILLING_KEYWORDS),
    )


def is_candidate(email: EmailMessage) -> bool:
    return match_candidate(email).is_candidate
