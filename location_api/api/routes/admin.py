"""
Admin routes for sending reports without a request body
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from location_api.core.system_info import SystemInfoProvider, get_system_info_provider
from location_api.models import get_db
from location_api.schemas import AdminLocationCreatedResponse
from location_api.services import (
    location_service, build_location_draft, request_context, QueryFormSource
)

router = APIRouter(tags=["Admin"])


@router.get("/send-location", response_model=AdminLocationCreatedResponse)
async def send_location(
    request: Request,
    latitude: Optional[str] = None,
    longitude: Optional[str] = None,
    additional_data: Optional[str] = Query(None, alias="additionalData"),
    db: AsyncSession = Depends(get_db),
    system_info: SystemInfoProvider = Depends(get_system_info_provider)
):
    """
    Store a location report passed as query parameters.

    additionalData may be a JSON object or key:value pairs separated by commas.
    """
    source = QueryFormSource(
        latitude=latitude,
        longitude=longitude,
        additional_data=additional_data
    )
    draft = build_location_draft(source, request_context(request), system_info)

    location_id = await location_service.insert(db, draft)
    await db.commit()

    return AdminLocationCreatedResponse(
        message="Location stored successfully via admin endpoint",
        id=location_id,
        data=draft,
        query=dict(request.query_params)
    )
