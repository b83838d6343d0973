from __future__ import annotations

from subtracker.extractors.service import detect_service_name
from subtracker.rules.registry import build_registry


def test_sender_domain_resolves_service() -> None:
    assert detect_service_name("Netflix <info@mailer.netflix.com>", "your bill") == "Netflix"


def test_domain_match_beats_earlier_content_match() -> None:
    # Body mentions Netflix (first in the registry), sender is Figma.
    assert detect_service_name("team@figma.com", "cheaper than netflix") == "Figma"


def test_content_pattern_used_when_no_domain_matches() -> None:
    assert detect_service_name("billing@payments.example", "your dropbox plan renews") == "Dropbox"


def test_first_content_match_in_registry_order_wins() -> None:
    # "premium" (Spotify) comes before "youtube premium" in the registry.
    assert detect_service_name("no-reply@mailer.example", "youtube premium receipt") == "Spotify"


def test_sender_domain_is_case_insensitive() -> None:
    assert detect_service_name("Billing@Notion.SO", "") == "Notion"


def test_unknown_sender_and_content() -> None:
    assert detect_service_name("billing@acme.example", "your invoice from acme corp") is None


def test_injected_registry_entries_are_used() -> None:
    registry = build_registry([{"name": "Acme", "domains": ["acme.example"], "patterns": []}])

    assert detect_service_name("billing@acme.example", "", registry) == "Acme"
