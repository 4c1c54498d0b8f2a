#!/usr/bin/env python3
"""
Share-URL temple decoder.

Share links carry the temple as a string of characters, each standing for a
5-bit value. Concatenated, the bits form 16-bit room records:

    bits 0-3   x coordinate
    bits 4-7   y coordinate
    bits 8-12  room type id
    bits 13-15 tier

The alphabet is not fixed across site versions, so decoding first tries an
alphabet built from the string's own characters (sorted), then each known
charset in order. An attempt counts only if it yields more than
MIN_DECODED_ROOMS rooms.
"""

import base64
import binascii
import logging
import re
from typing import Dict, List, Optional, Tuple

from room_catalog import CHARSETS, get_room_name
from temple_types import Grid, Room, TempleData, room_from_dict

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

BITS_PER_VALUE = 5
BITS_PER_ROOM = 16
MAX_VALUE = 31
MAX_COORD = 16
MAX_ROOM_TYPE_ID = 31
MIN_DECODED_ROOMS = 5

BASE64_PATTERN = re.compile(r'^[A-Za-z0-9+/=]+$')

# Default grid width when laying out a flat room array
ARRAY_ROW_WIDTH = 10

# =============================================================================
# BIT-LEVEL DECODING
# =============================================================================


def values_to_bits(values: List[int]) -> str:
    """Concatenate values as zero-padded 5-bit binary (wider values keep all their bits)."""
    return ''.join(format(v, '05b') for v in values)


def decode_rooms(bit_string: str) -> Tuple[Grid, List[Room]]:
    """
    Read consecutive 16-bit room records from a bit string.

    Trailing bits that do not fill a whole record are ignored. Records with
    out-of-range fields are skipped but still consume their 16 bits. A later
    record at the same coordinates replaces the earlier one in the grid;
    the returned list keeps every record.
    """
    grid: Grid = {}
    decoded: List[Room] = []

    offset = 0
    while offset + BITS_PER_ROOM <= len(bit_string):
        record = bit_string[offset:offset + BITS_PER_ROOM]
        offset += BITS_PER_ROOM

        x = int(record[0:4], 2)
        y = int(record[4:8], 2)
        room_type_id = int(record[8:13], 2)
        tier = int(record[13:16], 2)

        if x >= MAX_COORD or y >= MAX_COORD or room_type_id > MAX_ROOM_TYPE_ID:
            continue

        room = Room(x=x, y=y, room=get_room_name(room_type_id), tier=tier, room_type_id=room_type_id)
        grid[room.key] = room
        decoded.append(room)

    return grid, decoded


def decode_with_charset(working: str, charset: str) -> Optional[TempleData]:
    """
    Decode with one alphabet. Returns None if a character is missing from the
    alphabet or too few rooms come out. Values above 31 keep all their bits.
    """
    lookup: Dict[str, int] = {ch: i for i, ch in enumerate(charset)}
    values = []
    for ch in working:
        if ch not in lookup:
            return None
        values.append(lookup[ch])

    grid, decoded = decode_rooms(values_to_bits(values))
    if len(grid) <= MIN_DECODED_ROOMS:
        return None
    return TempleData(grid=grid, decoded_rooms=decoded)


def _auto_detect(working: str) -> Optional[TempleData]:
    """Decode with an alphabet built from the string's own sorted characters."""
    charset = ''.join(sorted(set(working)))
    if len(charset) - 1 > MAX_VALUE:
        return None
    logger.debug("Auto-detected charset with %d characters", len(charset))
    return decode_with_charset(working, charset)


def _maybe_base64(encoded: str) -> str:
    """Base64-decode strings that look like base64; otherwise return them unchanged."""
    if not BASE64_PATTERN.match(encoded):
        return encoded

    padded = encoded + '=' * (-len(encoded) % 4)
    try:
        text = base64.b64decode(padded).decode('utf-8', errors='replace')
    except (binascii.Error, ValueError):
        return encoded

    if not text:
        return encoded
    logger.debug("Base64 decoded share data (%d -> %d chars)", len(encoded), len(text))
    return text

# =============================================================================
# PUBLIC API
# =============================================================================


def decode_temple_data(encoded: Optional[str]) -> Optional[TempleData]:
    """
    Decode share-URL temple data.

    Returns None for empty input or when no alphabet produces a plausible
    temple. Never raises.
    """
    if not encoded or not isinstance(encoded, str):
        return None

    try:
        working = _maybe_base64(encoded)

        temple = _auto_detect(working)
        if temple is not None:
            return temple

        for charset in CHARSETS:
            temple = decode_with_charset(working, charset)
            if temple is not None:
                logger.debug("Decoded with fallback charset %s", charset)
                return temple
    except Exception as e:
        logger.error("Error decoding temple data: %s", e)
        return None

    logger.warning("Could not decode temple data with any charset (%d chars)", len(encoded))
    return None


def parse_temple_array(data) -> TempleData:
    """
    Lay out a flat JSON array of room objects as a grid.

    Entries without coordinates are placed row-major, ARRAY_ROW_WIDTH per
    row. Non-object entries are skipped; non-array input gives an empty grid.
    """
    grid: Grid = {}
    if not isinstance(data, list):
        return TempleData(grid=grid)

    for index, item in enumerate(data):
        room = room_from_dict(item, index % ARRAY_ROW_WIDTH, index // ARRAY_ROW_WIDTH)
        if room is None:
            continue
        grid[room.key] = room

    return TempleData(grid=grid)
