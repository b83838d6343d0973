from __future__ import annotations

from fastapi import APIRouter, HTTPException

from subtracker.config.paths import get_registry
from subtracker.rules.registry import RegistryError

router = APIRouter()


@router.get("/services")
def list_services() -> dict:
    try:
        registry = get_registry()
    except RegistryError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return {
        "ok": True,
        "services": [
            {
                "name": descriptor.name,
                "domains": list(descriptor.domains),
                "category": descriptor.category,
            }
            for descriptor in registry
        ],
    }
