"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from data_alchemist.api.health import router as health_router
from data_alchemist.api.validation import router as validation_router
from data_alchemist.api.workspaces import router as workspaces_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Stateless validation + ingestion
api_router.include_router(validation_router, tags=["Validation"])

# Workspace store
api_router.include_router(workspaces_router, tags=["Workspaces"])
