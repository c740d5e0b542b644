"""
Pydantic schemas for Location API
"""
import json
from datetime import datetime, timezone
from typing import Any, Optional, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Nested metadata sent by browsers
class GeolocationInfo(CamelModel):
    accuracy: Optional[float] = None  # meters
    altitude: Optional[float] = None  # meters
    altitude_accuracy: Optional[float] = None
    heading: Optional[float] = None  # degrees from true north
    speed: Optional[float] = None  # meters per second


class BrowserInfo(CamelModel):
    timezone: Optional[str] = None
    language: Optional[str] = None
    screen_resolution: Optional[str] = None
    device_memory: Optional[float] = None
    hardware_concurrency: Optional[int] = None
    platform: Optional[str] = None
    vendor: Optional[str] = None
    cookie_enabled: Optional[bool] = None
    do_not_track: Optional[str] = None


class NetworkInfo(CamelModel):
    connection_type: Optional[str] = None
    effective_type: Optional[str] = None
    downlink: Optional[float] = None  # Mbps
    rtt: Optional[float] = None  # ms


class SystemInfo(CamelModel):
    """Server context at the time a report is stored"""
    hostname: Optional[str] = None
    platform: Optional[str] = None
    arch: Optional[str] = None
    runtime_version: Optional[str] = None
    uptime: Optional[float] = None  # seconds


class RequestInfo(CamelModel):
    host: Optional[str] = None
    referer: Optional[str] = None
    origin: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    protocol: Optional[str] = None
    headers: Optional[dict[str, Any]] = None


# Inbound JSON body
class LocationPayload(GeolocationInfo, BrowserInfo, NetworkInfo):
    """
    Body of POST /api/location.
    Coordinates stay loosely typed here, the extraction layer validates them.
    Metadata may arrive flat or in the nested objects.
    """
    latitude: Any = None
    longitude: Any = None
    additional_data: Optional[Union[dict[str, Any], str]] = None
    custom_fields: Optional[dict[str, Any]] = None
    geolocation_info: Optional[GeolocationInfo] = None
    browser_info: Optional[BrowserInfo] = None
    network_info: Optional[NetworkInfo] = None
    system_info: Optional[SystemInfo] = None
    request_info: Optional[RequestInfo] = None


# Normalized record ready to be stored
class LocationDraft(CamelModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    # Client information
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    host: Optional[str] = None
    referer: Optional[str] = None
    origin: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    protocol: Optional[str] = None
    headers: Optional[dict[str, Any]] = None

    # Server snapshot
    server_hostname: Optional[str] = None
    server_platform: Optional[str] = None
    server_arch: Optional[str] = None
    server_runtime_version: Optional[str] = None
    server_uptime: Optional[float] = None

    # Geolocation metadata
    accuracy: Optional[float] = None
    altitude: Optional[float] = None
    altitude_accuracy: Optional[float] = None
    heading: Optional[float] = None
    speed: Optional[float] = None

    # Browser / device
    timezone: Optional[str] = None
    language: Optional[str] = None
    screen_resolution: Optional[str] = None
    device_memory: Optional[float] = None
    hardware_concurrency: Optional[int] = None
    platform: Optional[str] = None
    vendor: Optional[str] = None
    cookie_enabled: Optional[bool] = None
    do_not_track: Optional[str] = None

    # Network
    connection_type: Optional[str] = None
    effective_type: Optional[str] = None
    downlink: Optional[float] = None
    rtt: Optional[float] = None

    # Free-form
    additional_data: Optional[dict[str, Any]] = None
    custom_fields: Optional[dict[str, Any]] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        if isinstance(v, dict) and not v:
            return None
        return v


# Responses
class LocationResponse(LocationDraft):
    id: int
    timestamp: datetime

    class Config:
        from_attributes = True

    @field_validator("headers", "additional_data", "custom_fields", mode="before")
    @classmethod
    def decode_json_text(cls, v):
        if isinstance(v, str):
            return json.loads(v)
        return v


class LocationListResponse(BaseModel):
    count: int
    locations: list[LocationResponse]


class LocationCreatedResponse(BaseModel):
    message: str
    id: int
    data: LocationDraft


class AdminLocationCreatedResponse(LocationCreatedResponse):
    query: dict[str, str]


class LocationStats(BaseModel):
    total: int
    today: int
    this_week: int = Field(..., alias="thisWeek")
    unique_ips: int = Field(..., alias="uniqueIPs")
    unique_user_agents: int = Field(..., alias="uniqueUserAgents")

    class Config:
        populate_by_name = True


class LocationStatsResponse(BaseModel):
    stats: LocationStats


class LocationSearchFilters(CamelModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ip_address: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    @field_validator("ip_address", mode="before")
    @classmethod
    def blank_ip_to_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator("date_from", "date_to")
    @classmethod
    def to_naive_utc(cls, v):
        # Timestamps are stored as naive UTC
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class LocationSearchResponse(BaseModel):
    count: int
    filters: dict[str, Any]
    locations: list[LocationResponse]


class ResetResponse(BaseModel):
    message: str
    removed_count: int = Field(..., alias="removedCount")

    class Config:
        populate_by_name = True
