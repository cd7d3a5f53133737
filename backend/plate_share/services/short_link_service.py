"""Short link persistence service."""
import asyncio
import logging
import os
import secrets
import string
import tempfile
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from plate_share.models import ShortLink, ShortLinkIndex
from plate_share.notation import decode, fragment_param

logger = logging.getLogger(__name__)

SHORT_ID_ALPHABET = string.ascii_letters + string.digits
DEFAULT_SHORT_ID_LENGTH = 8


class InvalidNotationError(ValueError):
    """Raised when asked to store a string that is not valid plate notation."""


def generate_short_id(length: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """Random mixed-case alphanumeric id."""
    return "".join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))


def extract_notation_from_share_url(url: str) -> Optional[str]:
    """
    Pull the plate notation out of a full share URL.

    Returns None for anything unusable: not an absolute URL, no ``pn``
    fragment parameter, or a value that does not decode as notation.
    """
    try:
        parts = urlsplit(url)
    except (TypeError, ValueError, AttributeError):
        return None
    if not parts.scheme or not parts.netloc:
        return None

    value = fragment_param(f"#{parts.fragment}")
    if not value:
        return None

    try:
        notation = unquote(value, errors="strict")
    except UnicodeDecodeError:
        return None
    return notation if decode(notation) else None


class ShortLinkStore:
    """
    Idempotent short id <-> notation store backed by one JSON file.

    The index is loaded on first use and kept in memory afterwards. Creates
    run one at a time, in arrival order, through a single lock; lookups do
    not wait for it.
    """

    def __init__(
        self,
        path: Union[str, Path],
        id_length: int = DEFAULT_SHORT_ID_LENGTH
    ):
        self.path = Path(path)
        self.id_length = id_length
        self._index: Optional[ShortLinkIndex] = None
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    async def create_short_link(self, notation: str) -> ShortLink:
        """
        Store a notation and return its short link.

        The same notation always maps to the same id.

        Raises:
            InvalidNotationError: If the notation does not decode
            OSError: If the store could not be written
        """
        normalized = notation.strip()
        if not decode(normalized):
            raise InvalidNotationError("Invalid plate notation")

        async with self._write_lock:
            index = await self._load()

            existing = index.notation_to_id.get(normalized)
            if existing:
                return ShortLink(id=existing, notation=normalized)

            short_id = generate_short_id(self.id_length)
            while short_id in index.id_to_notation:
                logger.debug(f"Short id collision on {short_id}, regenerating")
                short_id = generate_short_id(self.id_length)

            link = ShortLink(id=short_id, notation=normalized)
            index.add(link)
            try:
                await self._save(index)
            except OSError as e:
                index.remove(link)
                logger.error(f"Failed to persist short links to {self.path}: {e}")
                raise

            logger.info(f"Created short link {short_id} ({len(normalized)} chars)")
            return link

    async def get_notation_by_short_id(self, short_id: str) -> Optional[str]:
        """Look up the notation for a short id; None when unknown."""
        index = await self._load()
        return index.id_to_notation.get(short_id)

    async def count(self) -> int:
        """Number of stored short links."""
        index = await self._load()
        return len(index.id_to_notation)

    async def _load(self) -> ShortLinkIndex:
        if self._index is not None:
            return self._index

        async with self._load_lock:
            if self._index is None:
                self._index = await asyncio.to_thread(self._read_index)
        return self._index

    def _read_index(self) -> ShortLinkIndex:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No short link store at {self.path}, starting empty")
            return ShortLinkIndex()
        except OSError as e:
            logger.warning(f"Could not read short link store {self.path}: {e}")
            return ShortLinkIndex()

        try:
            index = ShortLinkIndex.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Corrupt short link store {self.path}, starting empty: {e}")
            return ShortLinkIndex()

        logger.info(f"Loaded {len(index.id_to_notation)} short links from {self.path}")
        return index

    async def _save(self, index: ShortLinkIndex) -> None:
        await asyncio.to_thread(self._write_index, index.to_json())

    def _write_index(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
