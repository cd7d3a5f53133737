"""Short link API."""
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from typing import Optional

from plate_share.config import settings
from plate_share.notation import notation_share_url
from plate_share.services import (
    ShortLinkStore,
    InvalidNotationError,
    extract_notation_from_share_url,
)

router = APIRouter()
redirect_router = APIRouter()


def get_short_link_store(request: Request) -> ShortLinkStore:
    """The store instance created at application startup."""
    return request.app.state.short_link_store


class ShortenRequest(BaseModel):
    """Request for a short link; either a raw notation or a full share URL."""
    notation: Optional[str] = None
    url: Optional[str] = None


class ShortenResponse(BaseModel):
    """Created short link."""
    id: str
    short_url: str


def _request_origin(request: Request) -> str:
    origin = request.headers.get("origin")
    if origin:
        return origin.rstrip("/")

    proto = request.headers.get("x-forwarded-proto", "https")
    host = request.headers.get("x-forwarded-host") or request.headers.get("host", "")
    return f"{proto}://{host}"


@router.post("", response_model=ShortenResponse)
async def shorten(
    payload: ShortenRequest,
    request: Request,
    store: ShortLinkStore = Depends(get_short_link_store)
):
    """
    Create (or reuse) a short link for a plate notation.

    A non-blank ``notation`` takes precedence over ``url``.
    """
    notation = (payload.notation or "").strip()
    if not notation and payload.url:
        notation = extract_notation_from_share_url(payload.url) or ""

    if not notation:
        raise HTTPException(
            status_code=400,
            detail="Could not find valid plate notation in request."
        )

    try:
        link = await store.create_short_link(notation)
    except InvalidNotationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to create short link.")

    return ShortenResponse(
        id=link.id,
        short_url=f"{_request_origin(request)}/s/{link.id}"
    )


@redirect_router.get("/{short_id}")
async def resolve(
    short_id: str,
    store: ShortLinkStore = Depends(get_short_link_store)
):
    """
    Redirect a short link to the designer with the notation in the fragment.

    Unknown ids go to the blank designer.
    """
    notation = await store.get_notation_by_short_id(short_id)
    if not notation:
        return RedirectResponse(url=settings.public_base_url, status_code=307)

    return RedirectResponse(url=notation_share_url(notation), status_code=307)
