"""Main API router that includes versioned routers."""

from fastapi import APIRouter

from api.v1 import admin_form_questions, agents, health, panchayaths

# Main API router
api_router = APIRouter()

# Include v1 routers
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(health.router, tags=["health"])
v1_router.include_router(admin_form_questions.router, tags=["admin-form-questions"])
v1_router.include_router(agents.router, tags=["agents"])
v1_router.include_router(panchayaths.router, tags=["panchayaths"])

api_router.include_router(v1_router)
