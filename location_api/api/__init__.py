"""
API routes package
"""
from fastapi import APIRouter
from location_api.api.routes import locations, admin
from location_api.core.config import settings

api_router = APIRouter()

# Include all route modules
api_router.include_router(locations.router, prefix=settings.API_PREFIX)
api_router.include_router(admin.router, prefix=settings.ADMIN_PREFIX)

# Served by GET / and by the 404 handler
ENDPOINTS = {
    "GET /": "API information",
    "GET /health": "Health check",
    f"POST {settings.API_PREFIX}/location": "Store location data",
    f"GET {settings.API_PREFIX}/locations": "Get all stored locations",
    f"GET {settings.API_PREFIX}/stats": "Get location statistics",
    f"GET {settings.API_PREFIX}/search": "Search locations by latitude, longitude, ipAddress, dateFrom, dateTo",
    f"DELETE {settings.API_PREFIX}/reset": "Delete all stored locations",
    f"GET {settings.ADMIN_PREFIX}/send-location": "Admin endpoint to send location data via query parameters",
}
