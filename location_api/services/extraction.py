"""
Turns inbound requests into normalized location drafts.

Both request shapes (query string on the admin endpoint, JSON body on the
public endpoint) go through build_location_draft so they share one set of
validation rules. Nothing here touches storage.
"""
import json
import logging
import math
from typing import Any, Literal, Optional, Union
from fastapi import Request
from pydantic import BaseModel

from location_api.core.exceptions import LocationValidationError
from location_api.core.system_info import SystemInfoProvider
from location_api.schemas.location import (
    LocationPayload, LocationDraft, GeolocationInfo, BrowserInfo, NetworkInfo
)

logger = logging.getLogger(__name__)

ADMIN_USAGE = (
    "GET /admin/send-location?latitude=37.7749&longitude=-122.4194"
    "&additionalData=accuracy:10,altitude:100"
)


class QueryFormSource(BaseModel):
    """Admin endpoint: everything arrives as strings"""
    kind: Literal["query"] = "query"
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    additional_data: Optional[str] = None


class JsonBodySource(BaseModel):
    """Public endpoint: parsed JSON body"""
    kind: Literal["json"] = "json"
    payload: LocationPayload


LocationSource = Union[QueryFormSource, JsonBodySource]


class RequestContext(BaseModel):
    """Transport-level facts about the inbound request"""
    user_agent: Optional[str] = None
    client_host: Optional[str] = None
    forwarded_for: Optional[str] = None
    host: Optional[str] = None
    referer: Optional[str] = None
    origin: Optional[str] = None
    method: Optional[str] = None
    url: Optional[str] = None
    protocol: Optional[str] = None
    headers: dict[str, str] = {}


def request_context(request: Request) -> RequestContext:
    """Read the request attributes a report records"""
    headers = request.headers
    http_version = request.scope.get("http_version")
    return RequestContext(
        user_agent=headers.get("user-agent"),
        client_host=request.client.host if request.client else None,
        forwarded_for=headers.get("x-forwarded-for"),
        host=headers.get("host"),
        referer=headers.get("referer"),
        origin=headers.get("origin"),
        method=request.method,
        url=str(request.url),
        protocol=f"{request.url.scheme.upper()}/{http_version}" if http_version else request.url.scheme,
        headers=dict(headers)
    )


def resolve_client_ip(context: RequestContext) -> Optional[str]:
    """Client address from the server first, then the first X-Forwarded-For hop"""
    if context.client_host:
        return context.client_host
    if context.forwarded_for:
        first = context.forwarded_for.split(",")[0].strip()
        if first:
            return first
    return None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_coordinate(value: Any, name: str, low: float, high: float) -> float:
    """
    Convert a latitude/longitude to float and check its range.
    Accepts numbers and numeric strings; booleans, NaN and infinities are rejected.
    """
    invalid = f"Invalid {name}. Must be a number between {low:g} and {high:g}"

    if _is_missing(value):
        raise LocationValidationError(
            "Missing required fields: latitude and longitude are required"
        )
    if isinstance(value, bool):
        raise LocationValidationError(invalid)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise LocationValidationError(invalid)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise LocationValidationError(invalid)
    else:
        raise LocationValidationError(invalid)

    if not math.isfinite(number) or number < low or number > high:
        raise LocationValidationError(invalid)
    return number


def parse_additional_data(raw: Union[str, dict, None]) -> Optional[dict]:
    """
    Parse free-form additional data.

    "{...}" is read as a JSON object; anything else as "key:value,key:value".
    Unparseable JSON degrades to None with a warning, and an empty result is
    always None rather than {}.
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw or None

    text = raw.strip()
    if not text:
        return None

    if text.startswith("{") and text.endswith("}"):
        try:
            parsed = json.loads(text)
        except ValueError:
            logger.warning("Could not parse additionalData: %s", raw)
            return None
        if not isinstance(parsed, dict):
            logger.warning("additionalData is not a JSON object: %s", raw)
            return None
        return parsed or None

    data = {}
    for pair in text.split(","):
        key, sep, value = pair.partition(":")
        key, value = key.strip(), value.strip()
        if sep and key and value:
            data[key] = value
    return data or None


def _merge(nested: Optional[BaseModel], flat: BaseModel, fields) -> dict:
    """Nested object values win over same-named top-level values"""
    merged = {}
    for field in fields:
        value = getattr(nested, field, None) if nested is not None else None
        if value is None:
            value = getattr(flat, field, None)
        merged[field] = value
    return merged


def build_location_draft(
    source: LocationSource,
    context: RequestContext,
    system_info_provider: SystemInfoProvider
) -> LocationDraft:
    """
    Validate and normalize one report.

    Latitude is checked before longitude. Server fields the caller leaves out
    come from a fresh provider snapshot.
    """
    usage = ADMIN_USAGE if source.kind == "query" else None

    if isinstance(source, JsonBodySource):
        latitude_raw = source.payload.latitude
        longitude_raw = source.payload.longitude
    else:
        latitude_raw = source.latitude
        longitude_raw = source.longitude

    try:
        if _is_missing(latitude_raw) or _is_missing(longitude_raw):
            raise LocationValidationError(
                "Missing required fields: latitude and longitude are required"
            )
        latitude = parse_coordinate(latitude_raw, "latitude", -90, 90)
        longitude = parse_coordinate(longitude_raw, "longitude", -180, 180)
    except LocationValidationError as e:
        e.usage = e.usage or usage
        raise

    record = {
        "latitude": latitude,
        "longitude": longitude,
        "user_agent": context.user_agent,
        "ip_address": resolve_client_ip(context),
        "host": context.host,
        "referer": context.referer,
        "origin": context.origin,
        "method": context.method,
        "url": context.url,
        "protocol": context.protocol,
        "headers": context.headers or None,
    }

    caller_system = None
    if isinstance(source, JsonBodySource):
        payload = source.payload
        record.update(_merge(payload.geolocation_info, payload, GeolocationInfo.model_fields))
        record.update(_merge(payload.browser_info, payload, BrowserInfo.model_fields))
        record.update(_merge(payload.network_info, payload, NetworkInfo.model_fields))

        if payload.request_info is not None:
            for field, value in payload.request_info.model_dump().items():
                if value is not None:
                    record[field] = value

        record["additional_data"] = parse_additional_data(payload.additional_data)
        record["custom_fields"] = payload.custom_fields or None
        caller_system = payload.system_info
    else:
        record["additional_data"] = parse_additional_data(source.additional_data)

    live = system_info_provider.snapshot()
    for field in ("hostname", "platform", "arch", "runtime_version", "uptime"):
        value = getattr(caller_system, field, None) if caller_system is not None else None
        record[f"server_{field}"] = value if value is not None else getattr(live, field)

    return LocationDraft(**record)
