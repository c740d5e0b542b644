"""
Persistence gateway for location reports
"""
import json
import logging
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, delete, distinct, and_

from location_api.models import Location
from location_api.schemas.location import LocationDraft, LocationSearchFilters, LocationStats

logger = logging.getLogger(__name__)


class LocationService:
    """The only place that reads or writes the locations table"""

    @staticmethod
    def _to_json_text(value: Optional[dict]) -> Optional[str]:
        """Mappings are kept structured until they reach storage"""
        if value is None:
            return None
        return json.dumps(value)

    @staticmethod
    def _newest_first(query):
        return query.order_by(Location.timestamp.desc(), Location.id.desc())

    async def insert(self, db: AsyncSession, draft: LocationDraft) -> int:
        """Store a validated draft and return its new id"""
        values = draft.model_dump()
        for field in ("headers", "additional_data", "custom_fields"):
            values[field] = self._to_json_text(values[field])

        location = Location(**values)
        db.add(location)
        await db.flush()

        logger.info(f"Stored location {location.id} ({location.latitude}, {location.longitude})")
        return location.id

    async def list_all(self, db: AsyncSession) -> List[Location]:
        """Every stored report, newest first"""
        result = await db.execute(self._newest_first(select(Location)))
        return list(result.scalars().all())

    async def stats(self, db: AsyncSession) -> LocationStats:
        """
        Aggregate counts.
        Each count is its own query, so concurrent inserts can skew them slightly.
        """
        now = datetime.utcnow()
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)

        total = (await db.execute(select(func.count(Location.id)))).scalar()
        today = (await db.execute(
            select(func.count(Location.id)).where(Location.timestamp >= start_of_day)
        )).scalar()
        this_week = (await db.execute(
            select(func.count(Location.id)).where(Location.timestamp >= week_ago)
        )).scalar()
        unique_ips = (await db.execute(
            select(func.count(distinct(Location.ip_address)))
        )).scalar()
        unique_user_agents = (await db.execute(
            select(func.count(distinct(Location.user_agent)))
        )).scalar()

        return LocationStats(
            total=total or 0,
            today=today or 0,
            this_week=this_week or 0,
            unique_ips=unique_ips or 0,
            unique_user_agents=unique_user_agents or 0
        )

    async def search(self, db: AsyncSession, filters: LocationSearchFilters) -> List[Location]:
        """Reports matching every supplied filter, newest first"""
        query = select(Location)

        # Apply filters
        conditions = []
        if filters.latitude is not None:
            conditions.append(Location.latitude == filters.latitude)
        if filters.longitude is not None:
            conditions.append(Location.longitude == filters.longitude)
        if filters.ip_address:
            conditions.append(Location.ip_address.contains(filters.ip_address, autoescape=True))
        if filters.date_from is not None:
            conditions.append(Location.timestamp >= filters.date_from)
        if filters.date_to is not None:
            conditions.append(Location.timestamp <= filters.date_to)

        if conditions:
            query = query.where(and_(*conditions))

        result = await db.execute(self._newest_first(query))
        return list(result.scalars().all())

    async def reset_all(self, db: AsyncSession) -> int:
        """Delete every report. Irreversible."""
        result = await db.execute(delete(Location))
        removed = result.rowcount or 0
        logger.warning(f"Reset removed {removed} location(s)")
        return removed


location_service = LocationService()
