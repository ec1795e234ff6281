"""Main API router that includes versioned routers."""

from fastapi import APIRouter

from api.v1 import company_settings, dashboard, entities, health, support_messages

# Main API router
api_router = APIRouter()

# Include v1 routers
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(health.router, tags=["health"])
for entity_router in entities.routers:
    v1_router.include_router(entity_router, tags=["entities"])
v1_router.include_router(support_messages.router, tags=["support"])
v1_router.include_router(company_settings.router, tags=["settings"])
v1_router.include_router(dashboard.router, tags=["dashboard"])

api_router.include_router(v1_router)
