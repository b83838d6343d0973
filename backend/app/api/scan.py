# backend/app/api/scan.py
from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from subtracker.app.mock import sample_emails
from subtracker.app.run import scan_emails
from subtracker.config.paths import get_registry
from subtracker.models import EmailMessage
from subtracker.pipeline.orchestrator import SubscriptionEmailParser
from subtracker.rules.registry import RegistryError
from backend.app.status import scan_status_store

router = APIRouter()


class EmailIn(BaseModel):
    id: str
    subject: str = ""
    body: str = ""
    from_: str = Field("", alias="from")
    date: str = ""

    def to_email(self) -> EmailMessage:
        return EmailMessage(
            id=self.id,
            subject=self.subject,
            body=self.body,
            from_email=self.from_,
            date=self.date,
        )


class ScanRequest(BaseModel):
    emails: List[EmailIn]


def _parser() -> SubscriptionEmailParser:
    try:
        return SubscriptionEmailParser(get_registry())
    except RegistryError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


async def _run_scan(emails: List[EmailMessage]) -> dict:
    parser = _parser()
    scan_status_store.update(state="running", step="starting", detail="Starting scan", metrics={})

    def progress_cb(step: str, event: dict[str, Any]) -> None:
        status_update: dict[str, Any] = {
            "state": "running",
            "step": step,
            "detail": event.get("detail"),
        }
        if "metrics" in event:
            status_update["metrics"] = event.get("metrics") or {}
        scan_status_store.update(**status_update)

    try:
        summary = await run_in_threadpool(
            scan_emails,
            emails,
            parser=parser,
            verbose=False,
            progress_cb=progress_cb,
        )
    except Exception as exc:
        scan_status_store.update(state="error", step="error", detail=str(exc))
        raise

    scan_status_store.record_summary(summary)
    return {"ok": True, "summary": summary}


@router.post("/scan")
async def scan_endpoint(request: ScanRequest) -> dict:
    return await _run_scan([item.to_email() for item in request.emails])


@router.post("/scan/mock")
async def scan_mock_endpoint() -> dict:
    return await _run_scan(sample_emails())


@router.get("/scan/status")
async def scan_status() -> dict:
    return {"ok": True, "status": scan_status_store.snapshot()}


@router.post("/explain")
def explain_endpoint(email: EmailIn) -> dict:
    diagnostics = _parser().explain_email(email.to_email())
    return {"ok": True, "diagnostics": diagnostics.to_dict()}
