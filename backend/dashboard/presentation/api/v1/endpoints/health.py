"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter, Depends

from dashboard.config import get_settings
from dashboard.infrastructure.dependencies import get_change_feed
from dashboard.infrastructure.realtime import InProcessChangeFeed

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(feed: InProcessChangeFeed = Depends(get_change_feed)) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "feed_subscribers": feed.subscriber_count,
    }
