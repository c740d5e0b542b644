"""
Pydantic schemas package
"""
from location_api.schemas.location import (
    GeolocationInfo, BrowserInfo, NetworkInfo, SystemInfo, RequestInfo,
    LocationPayload, LocationDraft, LocationResponse, LocationListResponse,
    LocationCreatedResponse, AdminLocationCreatedResponse, LocationStats,
    LocationStatsResponse, LocationSearchFilters, LocationSearchResponse,
    ResetResponse
)

__all__ = [
    # Inbound
    "GeolocationInfo", "BrowserInfo", "NetworkInfo", "SystemInfo", "RequestInfo",
    "LocationPayload", "LocationDraft",
    # Responses
    "LocationResponse", "LocationListResponse", "LocationCreatedResponse",
    "AdminLocationCreatedResponse", "LocationStats", "LocationStatsResponse",
    "LocationSearchFilters", "LocationSearchResponse", "ResetResponse",
]
