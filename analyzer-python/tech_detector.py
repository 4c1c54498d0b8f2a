#!/usr/bin/env python3
"""
Tech pattern detection.

Three spatial patterns earn fixed bonus points:
- Russian Tech: a connected cluster of 3+ T7 rooms
- Roman Road: a chain of 4+ T6+ rooms walked one neighbour at a time
- Double Triple: two or more separate clusters of 3+ T6+ rooms

Rooms are adjacent when both coordinate deltas are at most 1 (diagonals
count). All three detectors look at every room in the grid, not only the
reward rooms.
"""

from collections import deque
from dataclasses import replace
from typing import List, Set, Tuple, Union

from scoring import round_half_up
from scoring_config import (
    DOUBLE_TRIPLE_TIER,
    MIN_ROMAN_ROAD_LENGTH,
    MIN_RUSSIAN_TECH_CLUSTER,
    MIN_RUSSIAN_TECH_ROOMS,
    MIN_TRIPLE_CLUSTERS,
    MIN_TRIPLE_SIZE,
    ROMAN_ROAD_TIER,
    RUSSIAN_TECH_TIER,
    TECH_BONUS_POINTS,
    TECH_BONUSES,
)
from temple_types import Room, TechAnalysis, TechBonus, TempleData, temple_data_from_dict

# Shown while a pattern is not present
UNDETECTED_DESCRIPTIONS = {
    'russian_tech': 'Multiple T7 rooms connected',
    'roman_road': 'Linear chain of high-tier rooms',
    'double_triple': 'Two triple connections of T6+ rooms',
}

_BONUS_NAMES = {t: name for t, name, _ in TECH_BONUSES}

# =============================================================================
# ADJACENCY
# =============================================================================


def is_adjacent(a: Room, b: Room) -> bool:
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    return dx <= 1 and dy <= 1 and not (dx == 0 and dy == 0)


def _coords(room: Room) -> Tuple[int, int]:
    return (room.x, room.y)


def find_connected_rooms(rooms: List[Room], start: Room, min_tier: int = 0) -> List[Room]:
    """Breadth-first cluster around start, in visit order."""
    visited: Set[Tuple[int, int]] = {_coords(start)}
    queue = deque([start])
    connected = []

    while queue:
        current = queue.popleft()
        if current.tier_or_zero >= min_tier:
            connected.append(current)

        for room in rooms:
            key = _coords(room)
            if key in visited:
                continue
            if is_adjacent(room, current):
                visited.add(key)
                queue.append(room)

    return connected


def neighbor_lists(rooms: List[Room]) -> List[List[int]]:
    """For each room, indices of its adjacent rooms in list order."""
    return [
        [j for j, other in enumerate(rooms) if is_adjacent(room, other)]
        for room in rooms
    ]


def find_longest_path(rooms: List[Room], start_index: int,
                      neighbors: List[List[int]] = None) -> List[Room]:
    """
    Depth-first walk from rooms[start_index]; returns the deepest path found.

    A room is entered at most once per start, so sibling branches do not
    revisit rooms a previous branch already walked. Iterative to stay clear
    of the recursion limit on long chains.
    """
    if neighbors is None:
        neighbors = neighbor_lists(rooms)

    start = rooms[start_index]
    visited: Set[Tuple[int, int]] = {_coords(start)}
    parent = {start_index: None}
    deepest, deepest_depth = start_index, 1
    # (room index, depth, position in its neighbour list)
    stack = [(start_index, 1, 0)]

    while stack:
        index, depth, position = stack[-1]
        adjacent = neighbors[index]

        while position < len(adjacent):
            next_index = adjacent[position]
            position += 1
            room = rooms[next_index]
            if _coords(room) in visited:
                continue
            stack[-1] = (index, depth, position)
            visited.add(_coords(room))
            parent[next_index] = index
            if depth + 1 > deepest_depth:
                deepest, deepest_depth = next_index, depth + 1
            stack.append((next_index, depth + 1, 0))
            break
        else:
            stack.pop()

    path = []
    node = deepest
    while node is not None:
        path.append(rooms[node])
        node = parent[node]
    path.reverse()
    return path

# =============================================================================
# DETECTORS
# =============================================================================


def _bonus(bonus_type: str, detected: bool = False, description: str = None,
           rooms: List[Room] = ()) -> TechBonus:
    return TechBonus(
        type=bonus_type,
        name=_BONUS_NAMES[bonus_type],
        description=description if detected else UNDETECTED_DESCRIPTIONS[bonus_type],
        score=TECH_BONUS_POINTS[bonus_type] if detected else 0,
        percentage=0,
        detected=detected,
        rooms=tuple(rooms) if detected else (),
    )


def _clusters(rooms: List[Room], min_tier: int) -> List[List[Room]]:
    """Connected components of rooms, each room claimed by the first cluster reaching it."""
    clusters = []
    visited: Set[Tuple[int, int]] = set()
    for room in rooms:
        if _coords(room) in visited:
            continue
        cluster = find_connected_rooms(rooms, room, min_tier)
        visited.update(_coords(r) for r in cluster)
        clusters.append(cluster)
    return clusters


def detect_russian_tech(rooms: List[Room]) -> TechBonus:
    """Largest cluster of T7 rooms; detected at 3+ rooms."""
    t7_rooms = [r for r in rooms if r.tier_or_zero >= RUSSIAN_TECH_TIER]
    if len(t7_rooms) < MIN_RUSSIAN_TECH_ROOMS:
        return _bonus('russian_tech')

    largest: List[Room] = []
    for cluster in _clusters(t7_rooms, RUSSIAN_TECH_TIER):
        if len(cluster) > len(largest):
            largest = cluster

    if len(largest) >= MIN_RUSSIAN_TECH_CLUSTER:
        return _bonus('russian_tech', True, f"{len(largest)} connected T7 rooms", largest)
    return _bonus('russian_tech')


def detect_roman_road(rooms: List[Room]) -> TechBonus:
    """Longest walk through T6+ rooms over every start; detected at 4+ rooms."""
    high_tier = [r for r in rooms if r.tier_or_zero >= ROMAN_ROAD_TIER]
    if len(high_tier) < MIN_ROMAN_ROAD_LENGTH:
        return _bonus('roman_road')

    neighbors = neighbor_lists(high_tier)
    best: List[Room] = []
    for start_index in range(len(high_tier)):
        path = find_longest_path(high_tier, start_index, neighbors)
        if len(path) > len(best):
            best = path

    if len(best) >= MIN_ROMAN_ROAD_LENGTH:
        return _bonus('roman_road', True, f"{len(best)} high-tier rooms in a line", best)
    return _bonus('roman_road')


def detect_double_triple(rooms: List[Room]) -> TechBonus:
    """Two or more T6+ clusters of at least three rooms each."""
    high_tier = [r for r in rooms if r.tier_or_zero >= DOUBLE_TRIPLE_TIER]
    if len(high_tier) < MIN_TRIPLE_SIZE * MIN_TRIPLE_CLUSTERS:
        return _bonus('double_triple')

    triples = [c for c in _clusters(high_tier, DOUBLE_TRIPLE_TIER) if len(c) >= MIN_TRIPLE_SIZE]
    if len(triples) >= MIN_TRIPLE_CLUSTERS:
        total = sum(len(t) for t in triples)
        flat = [room for triple in triples for room in triple]
        return _bonus('double_triple', True, f"{len(triples)} clusters with {total} T6+ rooms", flat)
    return _bonus('double_triple')

# =============================================================================
# ENTRY POINT
# =============================================================================


def analyze_tech_patterns(temple_data: Union[TempleData, dict], total_score: int = 0) -> TechAnalysis:
    """
    Detect all tech patterns in a temple.

    Args:
        temple_data: parsed temple (or raw mapping)
        total_score: overall analysis score; when positive each bonus gets
            its percentage share of it, otherwise percentages are 0

    Returns:
        TechAnalysis with exactly three bonuses in fixed order
    """
    rooms = temple_data_from_dict(temple_data).rooms()

    bonuses = [
        detect_russian_tech(rooms),
        detect_roman_road(rooms),
        detect_double_triple(rooms),
    ]
    total_tech_score = sum(b.score for b in bonuses if b.detected)

    bonuses = [
        replace(b, percentage=round_half_up(b.score / total_score * 100) if total_score > 0 else 0)
        for b in bonuses
    ]

    return TechAnalysis(
        bonuses=tuple(bonuses),
        total_tech_score=total_tech_score,
        has_russian_tech=bonuses[0].detected,
        has_roman_road=bonuses[1].detected,
        has_double_triple=bonuses[2].detected,
    )
