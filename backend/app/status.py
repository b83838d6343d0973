from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from time import time
from typing import Any, Dict, List, Optional

_COUNT_KEYS = ("received", "unique_messages", "candidates", "parsed", "subscriptions")


@dataclass
class ScanStatus:
    state: str = "idle"
    step: str = "idle"
    detail: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    scans_completed: int = 0
    # Services found by the latest completed scan, in result order.
    last_services: List[str] = field(default_factory=list)
    updated_at: float = field(default_factory=time)


class ScanStatusStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._status = ScanStatus()

    def update(self, **fields: Any) -> None:
        # Lock ensures polling sees consistent snapshots across threads.
        with self._lock:
            for key, value in fields.items():
                if hasattr(self._status, key):
                    setattr(self._status, key, value)
            self._status.updated_at = time()

    def record_summary(self, summary: Dict[str, Any]) -> None:
        """Mark a scan as finished and keep its counts and detected services."""
        with self._lock:
            self._status.state = "done"
            self._status.step = "done"
            self._status.detail = "Scan completed"
            self._status.metrics = {key: summary.get(key) for key in _COUNT_KEYS}
            self._status.last_services = [
                r.get("serviceName") for r in summary.get("results") or []
            ]
            self._status.scans_completed += 1
            self._status.updated_at = time()

    def snapshot(self) -> Dict[str, Any]:
        # Return a copy to avoid mutation by callers.
        with self._lock:
            return {
                "state": self._status.state,
                "step": self._status.step,
                "detail": self._status.detail,
                "metrics": dict(self._status.metrics),
                "scans_completed": self._status.scans_completed,
                "last_services": list(self._status.last_services),
                "updated_at": self._status.updated_at,
            }


scan_status_store = ScanStatusStore()
