"""
Location reporting routes
"""
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from location_api.core.system_info import SystemInfoProvider, get_system_info_provider
from location_api.models import get_db
from location_api.schemas import (
    LocationPayload, LocationCreatedResponse, LocationListResponse,
    LocationStatsResponse, LocationSearchFilters, LocationSearchResponse,
    ResetResponse
)
from location_api.services import (
    location_service, build_location_draft, request_context, JsonBodySource
)

router = APIRouter(tags=["Locations"])


@router.post("/location", response_model=LocationCreatedResponse, status_code=status.HTTP_201_CREATED)
async def store_location(
    payload: LocationPayload,
    request: Request,
    db: AsyncSession = Depends(get_db),
    system_info: SystemInfoProvider = Depends(get_system_info_provider)
):
    """
    Store a location report sent as JSON.
    """
    draft = build_location_draft(JsonBodySource(payload=payload), request_context(request), system_info)

    location_id = await location_service.insert(db, draft)
    await db.commit()

    return LocationCreatedResponse(
        message="Location stored successfully",
        id=location_id,
        data=draft
    )


@router.get("/locations", response_model=LocationListResponse)
async def list_locations(db: AsyncSession = Depends(get_db)):
    """
    Get all stored locations, newest first.
    """
    locations = await location_service.list_all(db)
    return LocationListResponse(count=len(locations), locations=locations)


@router.get("/stats", response_model=LocationStatsResponse)
async def get_location_stats(db: AsyncSession = Depends(get_db)):
    """
    Get aggregate counts over stored locations.
    """
    stats = await location_service.stats(db)
    return LocationStatsResponse(stats=stats)


@router.get("/search", response_model=LocationSearchResponse)
async def search_locations(
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    ip_address: Optional[str] = Query(None, alias="ipAddress"),
    date_from: Optional[datetime] = Query(None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(None, alias="dateTo"),
    db: AsyncSession = Depends(get_db)
):
    """
    Search stored locations. All filters are optional and combined with AND.
    """
    filters = LocationSearchFilters(
        latitude=latitude,
        longitude=longitude,
        ip_address=ip_address,
        date_from=date_from,
        date_to=date_to
    )
    locations = await location_service.search(db, filters)

    return LocationSearchResponse(
        count=len(locations),
        filters=filters.model_dump(mode="json", by_alias=True, exclude_none=True),
        locations=locations
    )


@router.delete("/reset", response_model=ResetResponse)
async def reset_locations(db: AsyncSession = Depends(get_db)):
    """
    Delete every stored location. Cannot be undone.
    """
    removed = await location_service.reset_all(db)
    await db.commit()

    return ResetResponse(
        message="All location data has been cleared",
        removed_count=removed
    )
