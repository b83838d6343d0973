from __future__ import annotations

from subtracker.models import ParsedTrialEmail
from subtracker.pipeline.dedupe import dedupe_by_service


def _record(service: str, confidence: float, amount: float | None = None) -> ParsedTrialEmail:
    return ParsedTrialEmail(
        service_name=service,
        frequency="monthly",
        category="Entertainment",
        status="active",
        confidence=confidence,
        amount=amount,
    )


def test_keeps_highest_confidence_per_service() -> None:
    results = dedupe_by_service([_record("Netflix", 0.6), _record("Netflix", 0.9)])

    assert len(results) == 1
    assert results[0].confidence == 0.9


def test_first_seen_wins_on_ties() -> None:
    results = dedupe_by_service([_record("Hulu", 0.8, amount=7.99), _record("Hulu", 0.8, amount=17.99)])

    assert len(results) == 1
    assert results[0].amount == 7.99


def test_lower_confidence_later_does_not_replace() -> None:
    results = dedupe_by_service([_record("Hulu", 0.85), _record("Hulu", 0.55)])

    assert results[0].confidence == 0.85


def test_none_entries_are_skipped_and_services_kept_apart() -> None:
    results = dedupe_by_service([None, _record("Netflix", 0.6), None, _record("Hulu", 0.7)])

    assert [r.service_name for r in results] == ["Netflix", "Hulu"]
