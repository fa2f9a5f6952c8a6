"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from dashboard.presentation.api.v1.endpoints.health import router as health_router
from dashboard.presentation.api.v1.endpoints.clientes import router as clientes_router
from dashboard.presentation.api.v1.endpoints.ejecutivos import router as ejecutivos_router
from dashboard.presentation.api.v1.endpoints.feed import router as feed_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(clientes_router)
router.include_router(ejecutivos_router)
router.include_router(feed_router)
