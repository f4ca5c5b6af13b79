from fastapi import APIRouter
from api.endpoints.jobs import router as jobs_router
from api.endpoints.analyses import router as analyses_router
from api.endpoints.dashboard import router as dashboard_router
from api.endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(jobs_router, tags=["jobs"])
api_router.include_router(analyses_router, tags=["analyses"])
api_router.include_router(dashboard_router, tags=["dashboard"])
api_router.include_router(health_router, tags=["health"])
