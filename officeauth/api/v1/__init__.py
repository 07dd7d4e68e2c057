"""API v1: HTTP adapter over the authorization and tenant-identity core."""

from officeauth.api.v1.router import api_router

__all__ = ["api_router"]
