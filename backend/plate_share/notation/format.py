"""Plate Notation (PN) format definitions.

A notation looks like::

    PN:v1/96/A1:CT1-CompA-10-uM-1*A2:CT1-CompA-5-uM-1

i.e. ``PN:v<version>/<plate type>/<well>*<well>...`` where each well is
``<well id>:<cell type>-<compound>-<concentration>-<units>-<replicate>``
with trailing empty fields left off.
"""

PN_VERSION = 1
PN_PREFIX = "PN:v"
SEGMENT_SEPARATOR = "/"
WELL_SEPARATOR = "*"
FIELD_SEPARATOR = "-"
ID_SEPARATOR = ":"
ESCAPE_CHAR = "~"

# Field order inside a well entry (positional)
WELL_FIELDS = (
    "cell_type",
    "compound",
    "concentration",
    "concentration_units",
    "replicate",
)

# Characters that collide with the grammar and their escapes
ESCAPE_MAP = {
    "-": "~d",
    "*": "~a",
    "~": "~~",
}
UNESCAPE_MAP = {escaped: char for char, escaped in ESCAPE_MAP.items()}

# URL fragment key carrying the notation
SHARE_URL_KEY = "pn"

# Same unreserved set as JavaScript's encodeURIComponent, so links stay
# identical to the ones generated by the browser
URL_SAFE_CHARS = "!*'()"

# Rough QR version needed for a given character count
# (max chars, version), checked in order; anything longer -> 25
QR_VERSION_BREAKPOINTS = (
    (25, 1),
    (47, 2),
    (77, 3),
    (114, 4),
    (154, 5),
    (195, 6),
    (367, 8),
    (652, 11),
    (1273, 17),
)
QR_VERSION_MAX = 25
