"""Data models for Plate Share."""
from plate_share.models.well import (
    WellRecord,
    PlateType,
    PlateNotationData,
    NotationStats,
    PLATE_DIMENSIONS,
)
from plate_share.models.short_link import ShortLink, ShortLinkIndex

__all__ = [
    "WellRecord", "PlateType", "PlateNotationData", "NotationStats",
    "PLATE_DIMENSIONS",
    "ShortLink", "ShortLinkIndex",
]
