from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from subtracker.extractors.cadence import detect_frequency, detect_status
from subtracker.extractors.dates import extract_trial_end_date
from subtracker.extractors.pricing import extract_pricing
from subtracker.extractors.service import detect_service_name
from subtracker.models import (
    ConfidenceFactors,
    EmailDiagnostics,
    EmailMessage,
    ParsedTrialEmail,
)
from subtracker.pipeline.dedupe import dedupe_by_service
from subtracker.pipeline.scoring import score_breakdown
from subtracker.rules.candidate import match_candidate
from subtracker.rules.matching import email_text
from subtracker.rules.registry import DEFAULT_REGISTRY, Registry, service_category

logger = logging.getLogger(__name__)


class SubscriptionEmailParser:
    """
    Turns plain-text emails into trial/subscription records.

    Holds nothing but the (immutable) service registry, so one instance can be
    shared freely between threads and calls.
    """

    def __init__(self, registry: Registry = DEFAULT_REGISTRY) -> None:
        self._registry = tuple(registry)

    @property
    def registry(self) -> Registry:
        return self._registry

    def explain_email(self, email: EmailMessage) -> EmailDiagnostics:
        """Run the full pipeline on one email and keep every intermediate signal."""
        text = email_text(email)
        candidate = match_candidate(email)

        if not candidate.is_candidate:
            logger.debug("Email %s has no trial/billing keywords", email.id)
            return EmailDiagnostics(
                email_id=email.id,
                has_trial_keywords=False,
                has_billing_keywords=False,
                service_name=None,
                trial_end_date=None,
                amount=None,
                currency=None,
                score=None,
                result=None,
                rejected_reason="not_candidate",
            )

        service_name = detect_service_name(email.from_email, text, self._registry)
        if not service_name:
            logger.debug("Email %s does not match any known service", email.id)
            return EmailDiagnostics(
                email_id=email.id,
                has_trial_keywords=candidate.has_trial_keywords,
                has_billing_keywords=candidate.has_billing_keywords,
                service_name=None,
                trial_end_date=None,
                amount=None,
                currency=None,
                score=None,
                result=None,
                rejected_reason="unknown_service",
            )

        trial_end_date = extract_trial_end_date(text)
        amount, currency = extract_pricing(text)

        score = score_breakdown(
            ConfidenceFactors(
                has_trial_keywords=candidate.has_trial_keywords,
                has_billing_keywords=candidate.has_billing_keywords,
                has_service_name=True,
                has_trial_end_date=trial_end_date is not None,
                has_pricing=amount is not None,
            )
        )

        result: Optional[ParsedTrialEmail] = None
        rejected_reason: Optional[str] = None
        if score.accepted:
            result = ParsedTrialEmail(
                service_name=service_name,
                amount=amount,
                currency=currency,
                trial_end_date=trial_end_date,
                # For trials the first charge lands when the trial ends.
                next_charge_date=trial_end_date,
                frequency=detect_frequency(text),
                category=service_category(self._registry, service_name),
                status=detect_status(text, candidate.has_trial_keywords),
                confidence=score.confidence,
            )
        else:
            rejected_reason = "low_confidence"
            logger.debug(
                "Dropping %s candidate from email %s (confidence %.2f)",
                service_name,
                email.id,
                score.confidence,
            )

        return EmailDiagnostics(
            email_id=email.id,
            has_trial_keywords=candidate.has_trial_keywords,
            has_billing_keywords=candidate.has_billing_keywords,
            service_name=service_name,
            trial_end_date=trial_end_date,
            amount=amount,
            currency=currency,
            score=score,
            result=result,
            rejected_reason=rejected_reason,
        )

    def parse_email(self, email: EmailMessage) -> Optional[ParsedTrialEmail]:
        """Parse one email; None when it is not a confident trial/subscription notice."""
        return self.explain_email(email).result

    def parse_emails(self, emails: Iterable[EmailMessage]) -> List[ParsedTrialEmail]:
        """Parse a batch and keep the most confident record per service."""
        return dedupe_by_service(self.parse_email(email) for email in emails)


_default_parser = SubscriptionEmailParser()


def parse_email(email: EmailMessage) -> Optional[ParsedTrialEmail]:
    return _default_parser.parse_email(email)


def parse_emails(emails: Iterable[EmailMessage]) -> List[ParsedTrialEmail]:
    return _default_parser.parse_emails(emails)


def explain_email(email: EmailMessage) -> EmailDiagnostics:
    return _default_parser.explain_email(email)
