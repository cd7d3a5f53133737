"""Well and plate data models."""
import re
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Optional, Tuple
from enum import Enum


class PlateType(int, Enum):
    """Plate type enumeration (total well count)."""
    PLATE_6 = 6
    PLATE_12 = 12
    PLATE_24 = 24
    PLATE_48 = 48
    PLATE_96 = 96
    PLATE_384 = 384

    def dimensions(self) -> Tuple[int, int]:
        """Get plate dimensions (rows, cols)."""
        return PLATE_DIMENSIONS[self.value]

    def contains_well(self, well_id: str) -> bool:
        """Check whether a well id like 'C7' lies inside this plate."""
        match = WELL_ID_PATTERN.fullmatch(well_id)
        if not match:
            return False
        rows, cols = self.dimensions()
        row = ord(match.group(1)) - ord("A")
        col = int(match.group(2))
        return 0 <= row < rows and 1 <= col <= cols


# Plate dimensions constant
PLATE_DIMENSIONS = {
    6: (2, 3),
    12: (3, 4),
    24: (4, 6),
    48: (6, 8),
    96: (8, 12),
    384: (16, 24),
}

WELL_ID_PATTERN = re.compile(r"([A-Z])(\d+)")


class WellRecord(BaseModel):
    """Contents of a single well. Every field is optional.

    Accepts both snake_case and the designer's camelCase keys (``cellType``).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cell_type: Optional[str] = None
    compound: Optional[str] = None
    concentration: Optional[str] = None  # kept as typed, e.g. "10" or "0.5"
    concentration_units: Optional[str] = None
    replicate: Optional[int] = Field(default=None, ge=1)

    def is_empty(self) -> bool:
        """A well with no non-blank field is treated as no well at all."""
        text_fields = (
            self.cell_type,
            self.compound,
            self.concentration,
            self.concentration_units,
        )
        return self.replicate is None and not any(
            value and value.strip() for value in text_fields
        )


class PlateNotationData(BaseModel):
    """Decoded plate notation."""
    version: int
    plate_type: PlateType
    wells: Dict[str, WellRecord] = {}


class NotationStats(BaseModel):
    """Size statistics for a notation string."""
    char_count: int
    well_count: int
    estimated_qr_version: int
