from __future__ import annotations

from typing import List

from subtracker.models import EmailMessage


def sample_emails() -> List[EmailMessage]:
    """Development inbox used by onboarding when no mailbox is connected."""
    return [
        EmailMessage(
            id="email1",
            subject="Your Notion Pro trial expires tomorrow",
            body=(
                "Your free trial of Notion Pro expires on August 5, 2025. "
                "You will be charged £6.50 monthly after the trial ends."
            ),
            from_email="noreply@notion.so",
            date="2025-08-04",
        ),
        EmailMessage(
            id="email2",
            subject="Figma Pro Trial Starting",
            body=(
                "Welcome to Figma Pro! Your 14-day trial starts now and will end on "
                "August 6, 2025. After that, you'll be charged $12.00 monthly."
            ),
            from_email="team@figma.com",
            date="2025-07-23",
        ),
    ]
