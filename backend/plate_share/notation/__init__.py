"""Plate Notation (PN) codec."""
from plate_share.notation.codec import decode, encode
from plate_share.notation.share_url import (
    create_share_url,
    fragment_param,
    notation_share_url,
    get_notation_stats,
    parse_share_url,
)

__all__ = [
    "encode", "decode",
    "create_share_url", "parse_share_url", "fragment_param", "notation_share_url",
    "get_notation_stats",
]
