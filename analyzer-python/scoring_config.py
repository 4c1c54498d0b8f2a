#!/usr/bin/env python3
"""
Scoring configuration.

Every threshold and weight the analyzer uses lives here, grouped into a
single ScoringProfile. DEFAULT_PROFILE ("snake-18") is the one the tools and
the HTTP server use; tests build variants with dataclasses.replace().
"""

from dataclasses import dataclass
from typing import Dict, Tuple

# =============================================================================
# ROOM RARITY (reward filter weights)
# =============================================================================

# Rooms with a positive rarity count as reward rooms for chain building.
ROOM_RARITY: Dict[str, int] = {
    'corruption': 12,
    'sacrifice': 10,
    'viper_spymaster': 10,
    'golem_works': 9,
    'viper_legion_barracks': 8,
    'transcendent_barracks': 7,
    'vault': 6,
    'reward_currency': 5,
    'reward_room': 5,
    'alchemy_lab': 4,
    'flesh_surgeon': 4,
    'synthflesh': 4,
    'entry': 5,
    'commander': 5,
    'architect': 3,
    'thaumaturge': 3,
    'smithy': 3,
    'armoury': 2,
    'generator': 2,
    'garrison': 2,
    'sacrificial_chamber': 2,
    'altar_of_sacrifice': 1,
    'boss': 8,
    'atziri': 15,
}

# Rooms never considered for chains regardless of rarity.
NON_REWARD_ROOMS = ('empty', 'path')

# =============================================================================
# TECH BONUSES
# =============================================================================

# (type, display name, points), in reporting order.
TECH_BONUSES: Tuple[Tuple[str, str, int], ...] = (
    ('russian_tech', 'Russian Tech', 150),
    ('roman_road', 'Roman Road', 100),
    ('double_triple', 'Double Triple', 120),
)

TECH_BONUS_POINTS: Dict[str, int] = {t: points for t, _, points in TECH_BONUSES}

RUSSIAN_TECH_TIER = 7
ROMAN_ROAD_TIER = 6
DOUBLE_TRIPLE_TIER = 6
MIN_RUSSIAN_TECH_ROOMS = 2
MIN_RUSSIAN_TECH_CLUSTER = 3
MIN_ROMAN_ROAD_LENGTH = 4
MIN_TRIPLE_SIZE = 3
MIN_TRIPLE_CLUSTERS = 2

# =============================================================================
# ROOM VALUE TABLES (per-room tier value helper)
# =============================================================================

TIER_MULTIPLIERS: Dict[int, float] = {
    7: 5.0,
    6: 3.5,
    5: 2.5,
    4: 1.5,
    3: 1.0,
    2: 0.5,
    1: 0.2,
    0: 0.0,
}

ROOM_BASE_VALUES: Dict[str, int] = {
    'viper_spymaster': 10,
    'golem_works': 9,
    'vault': 8,
    'reward_currency': 7,
    'alchemy_lab': 6,
    'flesh_surgeon': 6,
    'synthflesh': 6,
    'transcendent_barracks': 5,
    'viper_legion_barracks': 5,
    'thaumaturge': 4,
    'smithy': 4,
    'armoury': 3,
    'generator': 3,
    'garrison': 3,
    'corruption': 2,
    'reward_room': 5,
}

DEFAULT_ROOM_BASE_VALUE = 1
DEFAULT_DENSITY_MAX_ROOMS = 25
MAX_DENSITY_SCORE = 15

# =============================================================================
# SCORING PROFILE
# =============================================================================


@dataclass(frozen=True)
class ScoringProfile:
    """Thresholds and weights for one scoring profile."""
    name: str = 'snake-18'

    # (min chain length, points), checked highest first
    snake_breakpoints: Tuple[Tuple[int, int], ...] = ((8, 18), (6, 12), (4, 8), (2, 4))
    snake_floor: int = 2

    spymaster_room: str = 'viper_spymaster'
    golem_room: str = 'golem_works'
    multi_spymaster_count: int = 2
    multi_spymaster_bonus: int = 40
    single_spymaster_bonus: int = 15
    t7_tier: int = 7
    t7_cluster_count: int = 3
    t7_cluster_bonus: int = 50
    t7_room_points: int = 12
    golem_room_points: int = 4
    t6_tier: int = 6
    t6_low_count: int = 2
    t6_low_points: int = 4
    t6_extra_points: int = 3
    t6_cap: int = 20
    high_tier: int = 6
    high_tier_count: int = 6
    high_tier_bonus: int = 3
    t6_exceptional_count: int = 5
    t6_exceptional_bonus: int = 28

    # (min reward density, points), checked highest first
    quantity_breakpoints: Tuple[Tuple[float, int], ...] = ((0.8, 12), (0.6, 8), (0.5, 5))
    quantity_floor: int = 2

    # (min total score, stars, description), checked highest first
    rating_thresholds: Tuple[Tuple[int, int, str], ...] = (
        (80, 5, 'God Tier - Exceptional temple with outstanding quality'),
        (55, 4, 'Excellent - Very strong layout with high-value rooms'),
        (38, 3, 'Good - Solid optimization with valuable rooms'),
        (35, 2, 'Average - Basic optimization with some value'),
    )
    floor_rating: Tuple[int, str] = (1, 'Poor - Broken snake chain, no optimization')

    min_chain_length: int = 4
    min_t6_rooms: int = 3
    min_reward_rooms: int = 10
    min_high_tier_rooms: int = 3
    include_advisories: bool = False

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'snakeScore': {
                'breakpoints': [{'minChainLength': n, 'points': p} for n, p in self.snake_breakpoints],
                'floor': self.snake_floor,
            },
            'roomScore': {
                'spymasters': {
                    'room': self.spymaster_room,
                    f'{self.multi_spymaster_count}+': self.multi_spymaster_bonus,
                    '1': self.single_spymaster_bonus,
                },
                't7Rooms': {
                    'minTier': self.t7_tier,
                    f'{self.t7_cluster_count}+': self.t7_cluster_bonus,
                    'perRoom': self.t7_room_points,
                },
                'golems': {'room': self.golem_room, 'perRoom': self.golem_room_points},
                't6Rooms': {
                    'tier': self.t6_tier,
                    'perRoomUpTo': {'count': self.t6_low_count, 'points': self.t6_low_points},
                    'perExtraRoom': self.t6_extra_points,
                    'cap': self.t6_cap,
                },
                'highTierBonus': {
                    'minTier': self.high_tier,
                    'minCount': self.high_tier_count,
                    'points': self.high_tier_bonus,
                },
                't6Exceptional': {
                    'minCount': self.t6_exceptional_count,
                    'points': self.t6_exceptional_bonus,
                },
            },
            'quantityScore': {
                'breakpoints': [{'minDensity': d, 'points': p} for d, p in self.quantity_breakpoints],
                'floor': self.quantity_floor,
            },
            'starRatings': [
                {'minScore': score, 'stars': stars, 'description': desc}
                for score, stars, desc in self.rating_thresholds
            ] + [{'minScore': 0, 'stars': self.floor_rating[0], 'description': self.floor_rating[1]}],
        }


DEFAULT_PROFILE = ScoringProfile()

# Default number of analyses kept by the analyzer's result cache
DEFAULT_CACHE_SIZE = 100
