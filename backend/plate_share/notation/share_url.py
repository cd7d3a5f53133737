"""Share URLs and size statistics for Plate Notation."""
from typing import Mapping, Optional, Union
from urllib.parse import quote, unquote

from plate_share.config import settings
from plate_share.models import NotationStats, PlateNotationData, PlateType
from plate_share.notation.codec import WellInput, decode, encode
from plate_share.notation.format import (
    QR_VERSION_BREAKPOINTS,
    QR_VERSION_MAX,
    SEGMENT_SEPARATOR,
    SHARE_URL_KEY,
    URL_SAFE_CHARS,
    WELL_SEPARATOR,
)


def fragment_param(url: str, key: str = SHARE_URL_KEY) -> Optional[str]:
    """
    Get the raw (still percent-encoded) value of a key in a URL fragment.

    The fragment is read as ``key=value&key=value``; the first match wins.
    A string without ``#`` is treated as the fragment itself.
    """
    _, hash_mark, fragment = url.partition("#")
    if not hash_mark:
        fragment = url

    for pair in fragment.split("&"):
        name, equals, value = pair.partition("=")
        if equals and name == key:
            return value
    return None


def notation_share_url(notation: str, base_url: Optional[str] = None) -> str:
    """Put a notation into the ``#pn=`` fragment of the designer URL."""
    base = (base_url or settings.public_base_url).split("#", 1)[0]
    return f"{base}#{SHARE_URL_KEY}={quote(notation, safe=URL_SAFE_CHARS)}"


def create_share_url(
    plate_type: Union[PlateType, int],
    wells: Mapping[str, WellInput],
    base_url: Optional[str] = None
) -> str:
    """
    Create a shareable URL carrying the plate notation in its fragment.

    Args:
        plate_type: Plate well count
        wells: Well id -> well record
        base_url: Page URL to share; defaults to the configured public URL

    Returns:
        ``<base>#pn=<percent-encoded notation>``
    """
    return notation_share_url(encode(plate_type, wells), base_url)


def parse_share_url(url: Optional[str] = None) -> Optional[PlateNotationData]:
    """Decode the plate notation carried by a share URL (or bare fragment)."""
    if not url:
        return None

    value = fragment_param(url)
    if value is None:
        return None

    try:
        notation = unquote(value, errors="strict")
    except UnicodeDecodeError:
        return None
    return decode(notation)


def estimate_qr_version(char_count: int) -> int:
    """Rough QR code version needed to hold ``char_count`` characters."""
    for max_chars, version in QR_VERSION_BREAKPOINTS:
        if char_count <= max_chars:
            return version
    return QR_VERSION_MAX


def get_notation_stats(notation: str) -> NotationStats:
    """
    Get size statistics for a notation.

    well_count counts ``*``-separated segments; entries are not validated.
    """
    parts = notation.split(SEGMENT_SEPARATOR, 2)
    well_data = parts[2] if len(parts) > 2 else ""
    well_count = len(well_data.split(WELL_SEPARATOR)) if well_data else 0
    char_count = len(notation)

    return NotationStats(
        char_count=char_count,
        well_count=well_count,
        estimated_qr_version=estimate_qr_version(char_count),
    )
