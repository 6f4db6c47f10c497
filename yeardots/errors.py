"""Exceptions raised by the year-dots renderer."""

from __future__ import annotations


class YearDotsError(Exception):
    """Base class for every error the renderer raises on purpose."""


class InvalidTimeZone(YearDotsError, ValueError):
    """The requested zone is not a known IANA identifier."""

    def __init__(self, time_zone: str):
        super().__init__(f"Invalid time zone '{time_zone}'")
        self.time_zone = time_zone


class GeometryError(YearDotsError, ValueError):
    """Canvas, text or grid geometry that cannot produce a valid image."""


class EncodingFailure(YearDotsError):
    """The image encoder could not produce output."""
