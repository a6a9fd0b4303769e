"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from suse.api.v1.endpoints import analysis

router = APIRouter()

# Include all endpoint routers
router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
