"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from pricelens.api.v1.endpoints import indicators

router = APIRouter()

# Include all endpoint routers
router.include_router(indicators.router, prefix="/indicators", tags=["Indicators"])
