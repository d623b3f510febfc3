"""
API v1 routes.
"""

from fastapi import APIRouter

from priority_credit.api.v1 import blocks, registry

router = APIRouter()

router.include_router(blocks.router, prefix="/blocks", tags=["Blocks"])
router.include_router(registry.router, tags=["Registry"])
