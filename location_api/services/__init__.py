"""
Services package
"""
from location_api.services.location_service import location_service, LocationService
from location_api.services.extraction import (
    build_location_draft, request_context, JsonBodySource, QueryFormSource
)

__all__ = [
    "location_service",
    "LocationService",
    "build_location_draft",
    "request_context",
    "JsonBodySource",
    "QueryFormSource",
]
