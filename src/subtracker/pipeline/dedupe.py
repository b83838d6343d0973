from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from subtracker.models import ParsedTrialEmail

logger = logging.getLogger(__name__)


def dedupe_by_service(results: Iterable[Optional[ParsedTrialEmail]]) -> List[ParsedTrialEmail]:
    """
    Keep one record per service: the most confident one.
    A later record only replaces the kept one on strictly higher confidence,
    so ties go to the first seen. Output follows first-seen service order.
    """
    unique: Dict[str, ParsedTrialEmail] = {}
    for result in results:
        if result is None:
            continue
        existing = unique.get(result.service_name)
        if existing is None or result.confidence > existing.confidence:
            if existing is not None:
                logger.debug(
                    "Replacing %s record (confidence %.2f -> %.2f)",
                    result.service_name,
                    existing.confidence,
                    result.confidence,
                )
            unique[result.service_name] = result
    return list(unique.values())
