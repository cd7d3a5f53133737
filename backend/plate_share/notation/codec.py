"""Plate Notation encoder and decoder."""
import logging
import re
from typing import Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from plate_share.models import PlateNotationData, PlateType, WellRecord
from plate_share.notation.format import (
    ESCAPE_MAP,
    FIELD_SEPARATOR,
    ID_SEPARATOR,
    PN_PREFIX,
    PN_VERSION,
    SEGMENT_SEPARATOR,
    UNESCAPE_MAP,
    WELL_FIELDS,
    WELL_SEPARATOR,
)

logger = logging.getLogger(__name__)

WellInput = Union[WellRecord, Mapping]

_ESCAPE_PATTERN = re.compile(r"[~\-*]")
# Known escapes must come before the lone "~" alternative
_FIELD_TOKEN_PATTERN = re.compile(r"~[da~]|-|~|[^~\-]+")
_NUMBER_PATTERN = re.compile(r"[0-9]+")


def escape_field(value: str) -> str:
    """Escape grammar characters inside a field value."""
    return _ESCAPE_PATTERN.sub(lambda m: ESCAPE_MAP[m.group()], value)


def split_fields(data: str) -> List[str]:
    """
    Split a well's field list on unescaped separators, unescaping each field.

    Unknown escapes (``~x``, or a trailing ``~``) are kept literally.
    """
    fields = []
    current = []
    for token in _FIELD_TOKEN_PATTERN.findall(data):
        if token == FIELD_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(UNESCAPE_MAP.get(token, token))
    fields.append("".join(current))
    return fields


def well_sort_key(well_id: str) -> Tuple:
    """Row letter first, then numeric column, so A2 sorts before A10."""
    row = well_id[:1]
    match = _NUMBER_PATTERN.match(well_id, 1)
    if match:
        return (row, 0, int(match.group()), well_id)
    return (row, 1, 0, well_id)


def _field_values(well: WellRecord) -> List[str]:
    values = []
    for name in WELL_FIELDS:
        value = getattr(well, name)
        if value is None:
            values.append("")
        elif isinstance(value, str):
            values.append(value if value.strip() else "")
        else:
            values.append(str(value))
    return values


def _coerce_well(well: WellInput) -> WellRecord:
    if isinstance(well, WellRecord):
        return well
    return WellRecord.model_validate(well)


def encode_well(well_id: str, well: WellRecord) -> Optional[str]:
    """
    Encode one well as ``<well id>:<field>-<field>...``.

    Trailing empty fields are dropped; returns None for an empty well.
    """
    if well.is_empty():
        return None

    fields = _field_values(well)
    while not fields[-1]:
        fields.pop()

    escaped = FIELD_SEPARATOR.join(escape_field(field) for field in fields)
    return f"{well_id}{ID_SEPARATOR}{escaped}"


def decode_well(entry: str) -> Optional[Tuple[str, WellRecord]]:
    """Decode one well entry back into its id and record."""
    well_id, separator, data = entry.partition(ID_SEPARATOR)
    if not separator:
        return None

    fields = split_fields(data)
    record = {
        name: value
        for name, value in zip(WELL_FIELDS, fields)
        if value
    }

    replicate = record.get("replicate")
    if replicate is not None:
        if not _NUMBER_PATTERN.fullmatch(replicate):
            return None
        record["replicate"] = int(replicate)

    try:
        return well_id, WellRecord(**record)
    except ValidationError:
        return None


def encode(
    plate_type: Union[PlateType, int],
    wells: Mapping[str, WellInput]
) -> str:
    """
    Encode a plate into Plate Notation.

    Args:
        plate_type: Plate well count
        wells: Well id -> well record (or a dict of record fields)

    Returns:
        Notation string; wells are always emitted in row/column order

    Raises:
        ValueError: If the plate type is not a supported well count
    """
    plate_type = PlateType(plate_type)

    entries = []
    for well_id in sorted(wells, key=well_sort_key):
        entry = encode_well(well_id, _coerce_well(wells[well_id]))
        if entry:
            entries.append(entry)

    return SEGMENT_SEPARATOR.join([
        f"{PN_PREFIX}{PN_VERSION}",
        str(plate_type.value),
        WELL_SEPARATOR.join(entries),
    ])


def _reject(reason: str, notation: str) -> None:
    logger.debug(f"Rejected plate notation ({reason}): {notation[:80]!r}")
    return None


def decode(notation: str) -> Optional[PlateNotationData]:
    """
    Decode Plate Notation back into plate data.

    Returns None for anything that is not a well-formed notation. A single
    malformed well entry fails the whole decode.
    """
    if not isinstance(notation, str) or not notation.startswith(PN_PREFIX):
        return None

    parts = notation[len(PN_PREFIX):].split(SEGMENT_SEPARATOR, 2)
    if len(parts) < 2:
        return _reject("missing plate type", notation)

    version_text, plate_text = parts[0], parts[1]
    well_data = parts[2] if len(parts) > 2 else ""

    if not _NUMBER_PATTERN.fullmatch(version_text):
        return _reject("non-numeric version", notation)
    version = int(version_text)
    if version < 1:
        return _reject("bad version", notation)

    if not _NUMBER_PATTERN.fullmatch(plate_text):
        return _reject("non-numeric plate type", notation)
    try:
        plate_type = PlateType(int(plate_text))
    except ValueError:
        return _reject("unsupported plate type", notation)

    wells: Dict[str, WellRecord] = {}
    if well_data:
        for entry in well_data.split(WELL_SEPARATOR):
            if not entry.strip():
                continue

            decoded = decode_well(entry)
            if decoded is None:
                return _reject(f"malformed well entry {entry[:20]!r}", notation)
            well_id, well = decoded
            wells[well_id] = well

    return PlateNotationData(version=version, plate_type=plate_type, wells=wells)
