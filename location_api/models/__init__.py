"""
Database models package
"""
from location_api.models.database import Base, get_db, init_db
from location_api.models.location import Location

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "Location",
]
