from __future__ import annotations

import json
from pathlib import Path

import pytest

from subtracker.rules.registry import (
    DEFAULT_REGISTRY,
    RegistryError,
    build_registry,
    load_registry,
    service_category,
)


def test_default_registry_order_and_size() -> None:
    names = [d.name for d in DEFAULT_REGISTRY]

    assert len(names) == 20
    assert len(set(names)) == 20
    assert names[0] == "Netflix"
    assert names[-1] == "Linear"
    assert names.index("Spotify") < names.index("YouTube Premium")


def test_service_category_lookup_falls_back_to_other() -> None:
    assert service_category(DEFAULT_REGISTRY, "Figma") == "Design"
    assert service_category(DEFAULT_REGISTRY, "Unknown Service") == "Other"


def test_build_registry_appends_after_defaults() -> None:
    registry = build_registry(
        [{"name": "Acme Cloud", "domains": ["acme.example"], "patterns": ["acme cloud"]}]
    )

    assert registry[: len(DEFAULT_REGISTRY)] == DEFAULT_REGISTRY
    assert registry[-1].name == "Acme Cloud"
    assert registry[-1].category == "Other"


def test_load_registry_from_file(tmp_path: Path) -> None:
    path = tmp_path / "services.json"
    path.write_text(
        json.dumps([{"name": "Acme", "domains": ["acme.example"], "patterns": [], "category": "Tools"}]),
        encoding="utf-8",
    )

    registry = load_registry(path)

    assert registry[-1].name == "Acme"
    assert registry[-1].category == "Tools"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Not a list"},
        [{"domains": ["x.example"]}],
        [{"name": "Empty", "domains": [], "patterns": []}],
        [{"name": "BadRegex", "patterns": ["(unclosed"]}],
    ],
)
def test_load_registry_rejects_malformed_definitions(tmp_path: Path, payload) -> None:
    path = tmp_path / "services.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(RegistryError):
        load_registry(path)


def test_load_registry_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RegistryError):
        load_registry(tmp_path / "nope.json")


def test_load_registry_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "services.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RegistryError):
        load_registry(path)
