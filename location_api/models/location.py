"""
Location report model
"""
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, Float, Boolean, Text, Index
from location_api.models.database import Base


class Location(Base):
    __tablename__ = "locations"

    # AUTOINCREMENT keeps ids monotonic on SQLite, even after a reset
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Location data
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Client information
    user_agent = Column(Text, nullable=True)
    ip_address = Column(Text, nullable=True)
    host = Column(Text, nullable=True)
    referer = Column(Text, nullable=True)
    origin = Column(Text, nullable=True)

    # Request information
    method = Column(Text, nullable=True)
    url = Column(Text, nullable=True)
    protocol = Column(Text, nullable=True)
    headers = Column(Text, nullable=True)  # JSON text

    # Server snapshot
    server_hostname = Column(Text, nullable=True)
    server_platform = Column(Text, nullable=True)
    server_arch = Column(Text, nullable=True)
    server_runtime_version = Column(Text, nullable=True)
    server_uptime = Column(Float, nullable=True)  # seconds

    # Location metadata
    accuracy = Column(Float, nullable=True)  # meters
    altitude = Column(Float, nullable=True)  # meters
    altitude_accuracy = Column(Float, nullable=True)
    heading = Column(Float, nullable=True)
    speed = Column(Float, nullable=True)

    # Browser/device information
    timezone = Column(Text, nullable=True)
    language = Column(Text, nullable=True)
    screen_resolution = Column(Text, nullable=True)
    device_memory = Column(Float, nullable=True)
    hardware_concurrency = Column(Integer, nullable=True)
    platform = Column(Text, nullable=True)
    vendor = Column(Text, nullable=True)
    cookie_enabled = Column(Boolean, nullable=True)
    do_not_track = Column(Text, nullable=True)

    # Network information
    connection_type = Column(Text, nullable=True)
    effective_type = Column(Text, nullable=True)
    downlink = Column(Float, nullable=True)  # Mbps
    rtt = Column(Float, nullable=True)  # ms

    # Free-form, JSON text
    additional_data = Column(Text, nullable=True)
    custom_fields = Column(Text, nullable=True)

    __table_args__ = (
        Index('idx_locations_timestamp', 'timestamp'),
        Index('idx_locations_ip_address', 'ip_address'),
        {'sqlite_autoincrement': True},
    )

    def __repr__(self):
        return f"<Location {self.id} ({self.latitude}, {self.longitude}) at {self.timestamp}>"
