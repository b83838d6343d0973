from __future__ import annotations

from typing import Optional

from subtracker.rules.matching import contains_any, regex_any
from subtracker.rules.registry import DEFAULT_REGISTRY, Registry


def detect_service_name(
    from_email: str, content: str, registry: Registry = DEFAULT_REGISTRY
) -> Optional[str]:
    """
    Resolve the service behind an email.
    A sender-domain hit anywhere in the registry beats every content-pattern hit,
    so the registry is walked twice: domains first, then body patterns.
    """
    for descriptor in registry:
        if contains_any(from_email, descriptor.domains):
            return descriptor.name

    for descriptor in registry:
        if regex_any(content, descriptor.content_patterns):
            return descriptor.name

    return None
