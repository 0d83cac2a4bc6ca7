"""API v1 router aggregator.

All v1 endpoint routers are included here.
"""

from fastapi import APIRouter

from wouaka.api.v1 import ai

router = APIRouter()

router.include_router(ai.router, prefix="/ai", tags=["ai"])
