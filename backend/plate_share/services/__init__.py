"""Business services."""
from plate_share.services.short_link_service import (
    ShortLinkStore,
    InvalidNotationError,
    extract_notation_from_share_url,
)

__all__ = ["ShortLinkStore", "InvalidNotationError", "extract_notation_from_share_url"]
