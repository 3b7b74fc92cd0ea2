"""API v1 router aggregation."""

from fastapi import APIRouter

from catalog_console.api.v1.endpoints import equipment_links, health, instructions, relationships

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(instructions.router, prefix="/instructions", tags=["instructions"])
api_router.include_router(relationships.router, prefix="/exercises", tags=["relationships"])
api_router.include_router(equipment_links.router, prefix="/exercises", tags=["equipment-links"])
