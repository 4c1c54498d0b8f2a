#!/usr/bin/env python3
"""
Data model shared by the decoder, the tech detector and the analyzer.

Rooms and analysis results are immutable once built. Incoming JSON is
parsed permissively: bad shapes degrade to empty collections instead of
raising, since temple data arrives straight from share links and clients.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# =============================================================================
# ROOMS
# =============================================================================


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    room: str
    tier: Optional[int] = None
    room_type_id: Optional[int] = None
    connections: Optional[Tuple[str, ...]] = None

    @property
    def key(self) -> str:
        return f"{self.x},{self.y}"

    @property
    def tier_or_zero(self) -> int:
        return self.tier if self.tier is not None else 0

    def to_dict(self) -> dict:
        data = {'x': self.x, 'y': self.y, 'room': self.room}
        if self.tier is not None:
            data['tier'] = self.tier
        if self.room_type_id is not None:
            data['roomTypeId'] = self.room_type_id
        if self.connections is not None:
            data['connections'] = list(self.connections)
        return data


Grid = Dict[str, Room]


@dataclass
class TempleData:
    grid: Grid = field(default_factory=dict)
    dimensions: Optional[dict] = None  # {width, height}
    entry: Optional[dict] = None  # {x, y}
    boss: Optional[dict] = None  # {x, y}
    sacrifice_used: Optional[bool] = None
    altar_of_corruption: Optional[bool] = None
    architect_used: Optional[bool] = None
    medallion_tokens_used: Optional[int] = None
    decoded_rooms: Optional[List[Room]] = None  # every decoded record, in stream order

    def rooms(self) -> List[Room]:
        """Grid rooms in insertion order."""
        return list(self.grid.values())

    def to_dict(self) -> dict:
        data = {'grid': {key: room.to_dict() for key, room in self.grid.items()}}
        for attr, wire_name in _METADATA_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                data[wire_name] = value
        if self.decoded_rooms is not None:
            data['decodedRooms'] = [room.to_dict() for room in self.decoded_rooms]
        return data


# (attribute, JSON key) for the pass-through metadata of a temple
_METADATA_FIELDS = (
    ('dimensions', 'dimensions'),
    ('entry', 'entry'),
    ('boss', 'boss'),
    ('sacrifice_used', 'sacrificeUsed'),
    ('altar_of_corruption', 'altarOfCorruption'),
    ('architect_used', 'architectUsed'),
    ('medallion_tokens_used', 'medallionTokensUsed'),
)

# =============================================================================
# ANALYSIS RESULTS
# =============================================================================


@dataclass(frozen=True)
class TechBonus:
    type: str  # russian_tech | roman_road | double_triple
    name: str
    description: str
    score: int
    percentage: int
    detected: bool
    rooms: Tuple[Room, ...] = ()

    def to_dict(self) -> dict:
        return {
            'type': self.type,
            'name': self.name,
            'description': self.description,
            'score': self.score,
            'percentage': self.percentage,
            'detected': self.detected,
            'rooms': [room.to_dict() for room in self.rooms],
        }


@dataclass(frozen=True)
class TechAnalysis:
    bonuses: Tuple[TechBonus, ...]
    total_tech_score: int
    has_russian_tech: bool
    has_roman_road: bool
    has_double_triple: bool


@dataclass(frozen=True)
class TempleAnalysis:
    room_count: int
    reward_rooms: int
    architect_rooms: int
    boss_rooms: int
    high_tier_rooms: int
    spymasters: int
    golems: int
    t7_rooms: int
    t6_rooms: int
    snake_score: int
    room_score: int
    quantity_score: int
    tech_score: int
    total_score: int
    star_rating: int
    rating_description: str
    suggestions: Tuple[str, ...] = ()
    decoded_rooms: Optional[Tuple[Room, ...]] = None
    tech_bonuses: Tuple[TechBonus, ...] = ()
    has_russian_tech: bool = False
    has_roman_road: bool = False
    has_double_triple: bool = False

    def to_dict(self) -> dict:
        data = {
            'roomCount': self.room_count,
            'rewardRooms': self.reward_rooms,
            'architectRooms': self.architect_rooms,
            'bossRooms': self.boss_rooms,
            'highTierRooms': self.high_tier_rooms,
            'spymasters': self.spymasters,
            'golems': self.golems,
            't7Rooms': self.t7_rooms,
            't6Rooms': self.t6_rooms,
            'snakeScore': self.snake_score,
            'roomScore': self.room_score,
            'quantityScore': self.quantity_score,
            'techScore': self.tech_score,
            'totalScore': self.total_score,
            'starRating': self.star_rating,
            'ratingDescription': self.rating_description,
            'suggestions': list(self.suggestions),
            'techBonuses': [bonus.to_dict() for bonus in self.tech_bonuses],
            'hasRussianTech': self.has_russian_tech,
            'hasRomanRoad': self.has_roman_road,
            'hasDoubleTriple': self.has_double_triple,
        }
        if self.decoded_rooms is not None:
            data['decodedRooms'] = [room.to_dict() for room in self.decoded_rooms]
        return data

# =============================================================================
# PERMISSIVE PARSING
# =============================================================================


def _as_number(value: Any) -> Optional[float]:
    """Numeric value or None. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _key_coords(key: Any) -> Tuple[Optional[int], Optional[int]]:
    """Coordinates encoded in an "x,y" grid key, if any."""
    if not isinstance(key, str):
        return None, None
    parts = key.split(',')
    if len(parts) != 2:
        return None, None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None, None


def room_from_dict(item: Any, default_x: int = 0, default_y: int = 0) -> Optional[Room]:
    """
    Build a Room from a JSON-like mapping.

    Returns None for non-mapping input. The name falls back through
    room -> type -> name -> 'empty'; missing coordinates use the defaults.
    """
    if isinstance(item, Room):
        return item
    if not isinstance(item, dict):
        return None

    x = _as_number(item.get('x'))
    y = _as_number(item.get('y'))

    name = item.get('room') or item.get('type') or item.get('name') or 'empty'
    if not isinstance(name, str):
        name = str(name)

    room_type_id = item.get('roomTypeId', item.get('room_type_id'))
    if _as_number(room_type_id) is None:
        room_type_id = None

    connections = item.get('connections')
    if isinstance(connections, (list, tuple)):
        connections = tuple(str(c) for c in connections)
    else:
        connections = None

    return Room(
        x=x if x is not None else default_x,
        y=y if y is not None else default_y,
        room=name,
        tier=_as_number(item.get('tier')),
        room_type_id=room_type_id,
        connections=connections,
    )


def temple_data_from_dict(data: Any) -> TempleData:
    """Permissively build TempleData from decoded JSON. Never raises."""
    if isinstance(data, TempleData):
        return data
    if not isinstance(data, dict):
        return TempleData()

    grid: Grid = {}
    raw_grid = data.get('grid')
    if isinstance(raw_grid, dict):
        for key, raw_room in raw_grid.items():
            kx, ky = _key_coords(key)
            room = room_from_dict(raw_room, kx or 0, ky or 0)
            if room is not None:
                grid[str(key)] = room

    temple = TempleData(grid=grid)
    for attr, wire_name in _METADATA_FIELDS:
        value = data.get(wire_name, data.get(attr))
        if value is not None:
            setattr(temple, attr, value)

    raw_decoded = data.get('decodedRooms', data.get('decoded_rooms'))
    if isinstance(raw_decoded, list):
        decoded = [room_from_dict(item) for item in raw_decoded]
        temple.decoded_rooms = [room for room in decoded if room is not None]

    return temple
