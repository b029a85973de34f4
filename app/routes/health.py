# app/routes/health.py
"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from app.config import settings

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {"status": "ok", "service": "nps-dashboard"}


@router.get("/readyz")
async def readyz():
    """
    Readiness check. Only configuration is inspected; Helena is not called.
    """
    config_issues = []

    if not settings.has_helena_token():
        config_issues.append("HELENA_API_TOKEN not set")

    if not settings.HELENA_API_URL:
        config_issues.append("HELENA_API_URL not set")

    config_ok = not config_issues
    checks = {
        "configuration": {
            "ok": config_ok,
            "issues": config_issues if config_issues else None,
            "environment": settings.environment,
        }
    }

    return {"overall_ok": config_ok, "checks": checks, "timestamp": time.time()}
