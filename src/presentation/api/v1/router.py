from fastapi import APIRouter

from .credit_sale import credit_sale_router
from .health import health_router
from .revenue import revenue_router
from .settings import settings_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(credit_sale_router, tags=["Credit Sales"])
router.include_router(settings_router, tags=["Settings"])
router.include_router(revenue_router, tags=["Revenue"])
