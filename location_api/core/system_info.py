"""
Server context snapshot attached to every stored report
"""
import platform
import socket
import sys
import time
from typing import Optional

from location_api.schemas.location import SystemInfo


class SystemInfoProvider:
    """Reads hostname, platform, architecture, runtime and uptime from the running process"""

    def __init__(self, started_at: Optional[float] = None):
        self._started_at = started_at if started_at is not None else time.monotonic()

    def snapshot(self) -> SystemInfo:
        """Live values, taken at call time"""
        return SystemInfo(
            hostname=socket.gethostname(),
            platform=sys.platform,
            arch=platform.machine(),
            runtime_version=f"{platform.python_implementation()} {platform.python_version()}",
            uptime=round(time.monotonic() - self._started_at, 3)
        )


class StaticSystemInfoProvider(SystemInfoProvider):
    """Always returns the same snapshot"""

    def __init__(self, info: SystemInfo):
        super().__init__()
        self._info = info

    def snapshot(self) -> SystemInfo:
        return self._info.model_copy()


# Created at import so uptime approximates process uptime
system_info_provider = SystemInfoProvider()


def get_system_info_provider() -> SystemInfoProvider:
    """Dependency for the process-wide provider"""
    return system_info_provider
