"""
Errors raised while handling location reports
"""
from typing import Optional


class LocationValidationError(Exception):
    """A report was rejected before touching storage"""

    def __init__(self, message: str, usage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.usage = usage

    def to_dict(self) -> dict:
        content = {"error": self.message}
        if self.usage:
            content["usage"] = self.usage
        return content
