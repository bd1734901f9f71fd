from fastapi import APIRouter

from .health import health_router
from .quote import quote_router
from .settlement import settlement_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(quote_router, tags=["Quotes"])
router.include_router(settlement_router, tags=["Settlements"])
