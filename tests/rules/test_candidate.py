from __future__ import annotations

from subtracker.models import EmailMessage
from subtracker.rules.candidate import is_candidate, match_candidate


def _email(subject: str, body: str = "") -> EmailMessage:
    return EmailMessage(id="m1", subject=subject, body=body, from_email="someone@example.com")


def test_trial_phrase_marks_candidate() -> None:
    match = match_candidate(_email("Your FREE TRIAL is live"))

    assert match.has_trial_keywords is True
    assert match.has_billing_keywords is False
    assert match.is_candidate is True


def test_billing_word_marks_candidate() -> None:
    match = match_candidate(_email("Hello", "Your renewal is coming up"))

    assert match.has_trial_keywords is False
    assert match.has_billing_keywords is True


def test_substring_containment_not_word_boundary() -> None:
    assert is_candidate(_email("You have been invoiced"))


def test_keywords_split_across_subject_and_body_do_not_count() -> None:
    # Subject and body are joined with a single space.
    assert not is_candidate(_email("free", "lunch on friday?"))


def test_plain_email_is_not_candidate() -> None:
    assert not is_candidate(_email("Lunch on Friday?", "Are you free for lunch this week?"))
