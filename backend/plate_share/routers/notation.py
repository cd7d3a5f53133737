"""Plate notation API."""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Dict, Optional

from plate_share.models import NotationStats, PlateNotationData, PlateType, WellRecord
from plate_share.notation import create_share_url, decode, encode, get_notation_stats

router = APIRouter()


class EncodeRequest(BaseModel):
    """Plate to encode."""
    plate_type: PlateType
    wells: Dict[str, WellRecord] = {}
    base_url: Optional[str] = None


class EncodeResponse(BaseModel):
    """Encoded plate."""
    notation: str
    share_url: str
    stats: NotationStats


class DecodeRequest(BaseModel):
    """Notation to decode."""
    notation: str


@router.post("/encode", response_model=EncodeResponse)
async def encode_plate(request: EncodeRequest):
    """
    Encode a plate layout into notation and a share URL.

    Well ids must lie inside the plate.
    """
    outside = [
        well_id for well_id in request.wells
        if not request.plate_type.contains_well(well_id)
    ]
    if outside:
        raise HTTPException(
            status_code=422,
            detail=f"Wells outside a {request.plate_type.value}-well plate: {', '.join(sorted(outside))}"
        )

    notation = encode(request.plate_type, request.wells)
    return EncodeResponse(
        notation=notation,
        share_url=create_share_url(request.plate_type, request.wells, request.base_url),
        stats=get_notation_stats(notation)
    )


@router.post("/decode", response_model=PlateNotationData)
async def decode_plate(request: DecodeRequest):
    """Decode notation back into a plate layout."""
    data = decode(request.notation.strip())
    if data is None:
        raise HTTPException(status_code=422, detail="Invalid plate notation")
    return data


@router.get("/stats", response_model=NotationStats)
async def notation_stats(notation: str):
    """Size statistics for a notation."""
    return get_notation_stats(notation)
