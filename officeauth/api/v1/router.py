"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from officeauth.api.v1.dependencies.
"""

from fastapi import APIRouter

from officeauth.api.v1.endpoints import auth, branding, health, offices, permissions, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(offices.router, prefix="/offices", tags=["offices"])
api_router.include_router(branding.router, prefix="/branding", tags=["branding"])
