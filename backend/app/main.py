# backend/app/main.py
from fastapi import FastAPI

from subtracker.config.logging_setup import configure_logging
from backend.app.api.scan import router as scan_router
from backend.app.api.services import router as services_router

configure_logging()

app = FastAPI(title="subtracker API")
app.include_router(scan_router, prefix="/api")
app.include_router(services_router, prefix="/api")
