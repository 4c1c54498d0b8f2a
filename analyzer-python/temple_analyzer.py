#!/usr/bin/env python3
"""
POE2 Temple of Atziri layout analyzer.

Scores a decoded temple layout:
1. Keeps the reward rooms (positive rarity, no empty/path, no duplicates)
2. Walks the longest greedy "snake" chain of adjacent reward rooms
3. Adds room-quality, reward-density and tech-pattern points
4. Maps the total onto a 1-5 star rating with improvement suggestions

The chain search is a nearest-neighbour heuristic, not an optimal longest
path; star thresholds are calibrated against its output.

Results are cached per temple in a bounded LRU cache owned by the analyzer.
"""

import json
import logging
import sys
from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple, Union

from lru_cache import LRUCache
from scoring import (
    calculate_overall_score,
    calculate_quantity_score,
    calculate_room_score,
    calculate_snake_score,
    calculate_star_rating,
    generate_advisory_suggestions,
    generate_suggestions,
)
from scoring_config import DEFAULT_CACHE_SIZE, DEFAULT_PROFILE, NON_REWARD_ROOMS, ROOM_RARITY, ScoringProfile
from tech_detector import analyze_tech_patterns
from temple_types import Room, TempleAnalysis, TempleData, temple_data_from_dict

logger = logging.getLogger(__name__)

BOSS_ROOMS = ('boss', 'atziri')
ARCHITECT_ROOM = 'architect'

# =============================================================================
# ROOM SELECTION
# =============================================================================


def filter_reward_rooms(rooms: List[Room]) -> List[Room]:
    """
    Reward rooms in input order.

    Drops empty/path rooms, repeats of the same room type at the same
    coordinates, and rooms without a positive rarity.
    """
    reward_rooms = []
    seen: Set[Tuple] = set()

    for room in rooms:
        if room.room in NON_REWARD_ROOMS:
            continue
        key = (room.y, room.x, room.room)
        if key in seen:
            continue
        seen.add(key)
        if ROOM_RARITY.get(room.room, 0) > 0:
            reward_rooms.append(room)

    return reward_rooms


def find_best_chain(rooms: List[Room]) -> List[Room]:
    """
    Longest greedy chain of rooms.

    From each room not yet part of an earlier chain, repeatedly step to the
    first closest room (Manhattan distance at most 1) not already in this
    chain. Rooms claimed by a chain are not used as later starting points,
    but later chains may still pass through them.
    """
    best: List[Room] = []
    visited: Set[Tuple] = set()

    for start_index, start in enumerate(rooms):
        start_key = (start.y, start.x)
        if start_key in visited:
            continue

        chain = [start]
        in_chain = {start_index}
        visited.add(start_key)
        current = start

        while True:
            next_index = None
            best_dist = None
            for index, room in enumerate(rooms):
                if index in in_chain:
                    continue
                dist = abs(current.x - room.x) + abs(current.y - room.y)
                if dist <= 1 and (best_dist is None or dist < best_dist):
                    best_dist = dist
                    next_index = index

            if next_index is None:
                break

            current = rooms[next_index]
            chain.append(current)
            in_chain.add(next_index)
            visited.add((current.y, current.x))

        if len(chain) > len(best):
            best = chain

    return best


def count_rooms_by_tier(rooms: List[Room]) -> Dict[int, int]:
    """Histogram of rooms per tier (missing tier counts as 0)."""
    counts: Dict[int, int] = {}
    for room in rooms:
        tier = room.tier_or_zero
        counts[tier] = counts.get(tier, 0) + 1
    return counts


def temple_fingerprint(temple: TempleData) -> str:
    """Cache key for a temple. Independent of mapping key order."""
    data = temple.to_dict()
    try:
        return json.dumps(data, sort_keys=True, separators=(',', ':'), default=str)
    except TypeError:
        # Mixed-type mapping keys cannot be sorted
        return repr(data)

# =============================================================================
# ANALYZER
# =============================================================================


class TempleAnalyzer:
    """
    Computes TempleAnalysis results, memoized in an LRU cache.

    The cache is owned by the instance; pass one in to share or size it.
    Not safe for concurrent use without external locking.
    """

    def __init__(self, cache: Optional[LRUCache] = None, profile: ScoringProfile = DEFAULT_PROFILE):
        self.cache = cache if cache is not None else LRUCache(DEFAULT_CACHE_SIZE)
        self.profile = profile

    def clear_cache(self) -> None:
        self.cache.clear()

    def analyze(self, temple_data: Union[TempleData, dict]) -> TempleAnalysis:
        """
        Analyze a temple. Accepts TempleData or any JSON-like mapping;
        malformed input is analyzed as an empty temple rather than rejected.

        Identical input returns the identical cached result object.
        """
        temple = temple_data_from_dict(temple_data)
        key = temple_fingerprint(temple)

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        result = self._compute(temple)
        self.cache.set(key, result)
        return result

    def _compute(self, temple: TempleData) -> TempleAnalysis:
        profile = self.profile
        rooms = temple.rooms()
        reward_rooms = filter_reward_rooms(rooms)
        chain = find_best_chain(reward_rooms)

        snake_score = calculate_snake_score(len(chain), profile)
        room_score, metrics = calculate_room_score(reward_rooms, profile)
        quantity_score = calculate_quantity_score(len(reward_rooms), len(rooms), profile)

        tech = analyze_tech_patterns(temple)
        total_score = calculate_overall_score(snake_score, room_score, quantity_score, tech.total_tech_score)
        # Second pass fills in each bonus's share of the total
        tech = analyze_tech_patterns(temple, total_score)

        star_rating, rating_description = calculate_star_rating(total_score, profile)
        suggestions = generate_suggestions(len(chain), metrics, len(reward_rooms), profile)

        analysis = TempleAnalysis(
            room_count=len(rooms),
            reward_rooms=len(reward_rooms),
            architect_rooms=sum(1 for r in rooms if r.room == ARCHITECT_ROOM),
            boss_rooms=sum(1 for r in rooms if r.room in BOSS_ROOMS),
            high_tier_rooms=metrics.high_tier_rooms,
            spymasters=metrics.spymasters,
            golems=metrics.golems,
            t7_rooms=metrics.t7_rooms,
            t6_rooms=metrics.t6_rooms,
            snake_score=snake_score,
            room_score=room_score,
            quantity_score=quantity_score,
            tech_score=tech.total_tech_score,
            total_score=total_score,
            star_rating=star_rating,
            rating_description=rating_description,
            suggestions=tuple(suggestions),
            decoded_rooms=tuple(temple.decoded_rooms) if temple.decoded_rooms is not None else None,
            tech_bonuses=tech.bonuses,
            has_russian_tech=tech.has_russian_tech,
            has_roman_road=tech.has_roman_road,
            has_double_triple=tech.has_double_triple,
        )

        if profile.include_advisories:
            extra = [s for s in generate_advisory_suggestions(analysis, profile) if s not in suggestions]
            if extra:
                analysis = replace(analysis, suggestions=tuple(suggestions + extra))

        logger.debug("Analyzed %d rooms: chain=%d total=%d stars=%d",
                     len(rooms), len(chain), total_score, star_rating)
        return analysis

# =============================================================================
# CLI INTERFACE
# =============================================================================


def main():
    """Analyze a share URL (argument) or temple JSON (stdin), print JSON."""
    from temple_decoder import decode_temple_data
    from url_parser import extract_share_data

    if len(sys.argv) > 1 and sys.argv[1] == '--help':
        print("""
Temple Analyzer

Usage: python temple_analyzer.py 'https://.../#/atziri-temple?t=...'
       echo '{"grid": {"0,0": {"x": 0, "y": 0, "room": "vault", "tier": 7}}}' | python temple_analyzer.py

Output JSON:
{
    "roomCount": 12,
    "totalScore": 57,
    "starRating": 4,
    "ratingDescription": "...",
    "suggestions": [...],
    "techBonuses": [...],
    ...
}
        """)
        return

    if len(sys.argv) > 1:
        share_data = extract_share_data(sys.argv[1])
        if not share_data:
            print(json.dumps({"success": False, "error": "Could not extract temple data from URL"}))
            sys.exit(1)
        temple = decode_temple_data(share_data)
        if temple is None:
            print(json.dumps({"success": False, "error": "Failed to decode temple data"}))
            sys.exit(1)
    else:
        try:
            temple = json.load(sys.stdin)
        except json.JSONDecodeError as e:
            print(json.dumps({"success": False, "error": f"Invalid JSON: {e}"}))
            sys.exit(1)

    analysis = TempleAnalyzer().analyze(temple)
    print(json.dumps(analysis.to_dict(), indent=2))


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    main()
