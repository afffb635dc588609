# braketime/api/v1/router.py
from fastapi import APIRouter
from braketime.api.v1.auth import router as auth_router
from braketime.modules.admin import admin_router
from braketime.modules.manager import manager_router

# Main router of API v1
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(
    admin_router,
    prefix="/admin",
    tags=["Admin"]
)

api_router.include_router(
    manager_router,
    prefix="/manager",
    tags=["Market Manager"]
)
