"""Health check endpoints.

- /health: liveness, always ok
- /healthz: storage connectivity and generator mode
"""

import json
from typing import Any

from fastapi import APIRouter, Response
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import text

from wanderai.config import Settings, get_settings
from wanderai.db.engine import session_scope

router = APIRouter()


def _ping_db() -> None:
    with session_scope() as session:
        session.execute(text("SELECT 1"))


async def check_db(settings: Settings) -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    if not settings.database_url:
        return (True, "in_memory")

    try:
        await run_in_threadpool(_ping_db)
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


def check_llm(settings: Settings) -> str:
    """Report which itinerary generator is active."""
    api_key = settings.openai_api_key
    if api_key and api_key.get_secret_value():
        return "openai"
    return "mock"


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if storage is reachable
        503 if the database check fails
    """
    settings = get_settings()

    db_ok, db_status = await check_db(settings)

    response_body = {
        "status": "ok" if db_ok else "degraded",
        "components": {
            "db": db_status,
            "llm": check_llm(settings),
        },
    }

    if not db_ok:
        return Response(
            content=json.dumps(response_body),
            status_code=503,
            media_type="application/json",
        )

    return response_body
