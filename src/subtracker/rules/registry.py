from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Pattern, Sequence, Tuple

from subtracker.rules.matching import compile_ci


class RegistryError(ValueError):
    """Raised when a service registry definition cannot be loaded."""


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    domains: Tuple[str, ...]
    content_patterns: Tuple[Pattern[str], ...]
    category: str = "Other"

    @classmethod
    def create(
        cls,
        name: str,
        domains: Sequence[str],
        patterns: Sequence[str],
        category: str = "Other",
    ) -> "ServiceDescriptor":
        return cls(
            name=name,
            domains=tuple(d.lower() for d in domains),
            content_patterns=tuple(compile_ci(p) for p in patterns),
            category=category,
        )


Registry = Tuple[ServiceDescriptor, ...]


# Order is part of the contract: the first descriptor that matches wins.
_DEFAULT_ENTRIES: Tuple[Tuple[str, Tuple[str, ...], Tuple[str, ...], str], ...] = (
    ("Netflix", ("netflix.com", "netflix.ca"), (r"netflix",), "Entertainment"),
    ("Spotify", ("spotify.com",), (r"spotify", r"premium"), "Music"),
    (
        "Adobe Creative Cloud",
        ("adobe.com",),
        (r"adobe", r"creative cloud", r"photoshop"),
        "Productivity",
    ),
    ("Notion", ("notion.so",), (r"notion",), "Productivity"),
    ("Figma", ("figma.com",), (r"figma",), "Design"),
    ("GitHub", ("github.com",), (r"github", r"copilot"), "Development"),
    ("OpenAI", ("openai.com",), (r"openai", r"chatgpt", r"gpt"), "AI Tools"),
    ("Slack", ("slack.com",), (r"slack", r"workspace"), "Communication"),
    ("Zoom", ("zoom.us",), (r"zoom", r"meeting"), "Communication"),
    ("Dropbox", ("dropbox.com",), (r"dropbox",), "Storage"),
    (
        "Microsoft 365",
        ("microsoft.com", "office.com"),
        (r"office 365", r"microsoft 365"),
        "Productivity",
    ),
    (
        "Disney+",
        ("disneyplus.com", "disney.com"),
        (r"disney", r"disney plus", r"disney\+"),
        "Entertainment",
    ),
    ("Hulu", ("hulu.com",), (r"hulu",), "Entertainment"),
    (
        "Prime Video",
        ("amazon.com", "primevideo.com"),
        (r"prime video", r"amazon prime"),
        "Entertainment",
    ),
    ("Apple Music", ("apple.com",), (r"apple music",), "Music"),
    (
        "YouTube Premium",
        ("youtube.com", "google.com"),
        (r"youtube premium", r"youtube music"),
        "Entertainment",
    ),
    ("Canva", ("canva.com",), (r"canva",), "Design"),
    ("Grammarly", ("grammarly.com",), (r"grammarly",), "Productivity"),
    ("Trello", ("trello.com", "atlassian.com"), (r"trello",), "Productivity"),
    ("Linear", ("linear.app",), (r"linear",), "Productivity"),
)

DEFAULT_REGISTRY: Registry = tuple(
    ServiceDescriptor.create(name, domains, patterns, category)
    for name, domains, patterns, category in _DEFAULT_ENTRIES
)


def build_registry(entries: Iterable[Dict[str, Any]], base: Registry = DEFAULT_REGISTRY) -> Registry:
    """
    Append descriptors defined as plain dicts after `base`.
    Each entry needs "name", "domains" and "patterns"; "category" is optional.
    """
    extra = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RegistryError(f"Service entry #{index} must be an object")
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise RegistryError(f"Service entry #{index} is missing a name")
        domains = entry.get("domains") or []
        patterns = entry.get("patterns") or []
        if not isinstance(domains, list) or not isinstance(patterns, list):
            raise RegistryError(f"Service {name!r}: domains and patterns must be lists")
        if not domains and not patterns:
            raise RegistryError(f"Service {name!r} needs at least one domain or pattern")
        try:
            descriptor = ServiceDescriptor.create(
                name.strip(),
                [str(d) for d in domains],
                [str(p) for p in patterns],
                str(entry.get("category") or "Other"),
            )
        except re.error as exc:
            raise RegistryError(f"Service {name!r}: invalid pattern ({exc})") from exc
        extra.append(descriptor)

    return tuple(base) + tuple(extra)


def load_registry(path: Path, base: Registry = DEFAULT_REGISTRY) -> Registry:
    """Load extra service descriptors from a JSON file (a list of objects)."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RegistryError(f"Service registry file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryError(f"Service registry file is not valid JSON: {path} ({exc})") from exc

    if not isinstance(data, list):
        raise RegistryError(f"Service registry file must contain a JSON list: {path}")
    return build_registry(data, base=base)


def find_descriptor(registry: Registry, service_name: str) -> Optional[ServiceDescriptor]:
    for descriptor in registry:
        if descriptor.name == service_name:
            return descriptor
    return None


def service_category(registry: Registry, service_name: str) -> str:
    descriptor = find_descriptor(registry, service_name)
    return descriptor.category if descriptor else "Other"
