"""FastAPI application."""

from fastapi import FastAPI

from wanderai.api.routes.health import router as health_router
from wanderai.api.routes.itineraries import router as itineraries_router
from wanderai.api.routes.metrics import router as metrics_router
from wanderai.api.routes.share import router as share_router
from wanderai.config import get_settings
from wanderai.utils.logging import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="WanderAI Itinerary API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(itineraries_router, tags=["itineraries"])
app.include_router(share_router, tags=["share"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "WanderAI Itinerary API", "version": "0.1.0"}
