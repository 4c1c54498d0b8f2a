#!/usr/bin/env python3
"""
Room catalog for the Temple of Atziri.

Maps the 5-bit room type ids used by the share-URL encoding to room names,
and holds the static per-room facts (reward value, reward flag) plus the
character sets tried when decoding share data.
"""

from typing import Dict, Optional

# =============================================================================
# ROOM TYPE IDS (5-bit field of a packed room record)
# =============================================================================

ROOM_TYPE_IDS: Dict[int, str] = {
    0: 'empty',
    1: 'path',
    2: 'entry',
    3: 'boss',
    4: 'corruption',
    5: 'sacrifice',
    6: 'alchemy_lab',
    7: 'armoury',
    8: 'flesh_surgeon',
    9: 'garrison',
    10: 'generator',
    11: 'golem_works',
    12: 'reward_currency',
    13: 'smithy',
    14: 'synthflesh',
    15: 'thaumaturge',
    16: 'transcendent_barracks',
    17: 'vault',
    18: 'viper_legion_barracks',
    19: 'viper_spymaster',
    20: 'commander',
    21: 'architect',
    22: 'altar_of_sacrifice',
    23: 'sacrificial_chamber',
    24: 'reward_room',
    25: 'medallion_bonus',
    26: 'medallion_reroll',
    27: 'medallion_levelup',
    28: 'medallion_increase_max',
    29: 'medallion_prevent_delete',
    30: 'medallion_increase_tokens',
    31: 'unknown',
}

# =============================================================================
# ROOM DATABASE
# =============================================================================

# Grouped the way the in-game temple panel groups them.
ROOM_CATEGORIES: Dict[str, Dict[str, dict]] = {
    'reward': {
        'alchemy_lab': {'rewardValue': 3, 'isReward': True},
        'armoury': {'rewardValue': 2, 'isReward': True},
        'flesh_surgeon': {'rewardValue': 3, 'isReward': True},
        'garrison': {'rewardValue': 2, 'isReward': True},
        'generator': {'rewardValue': 2, 'isReward': True},
        'golem_works': {'rewardValue': 2, 'isReward': True},
        'reward_currency': {'rewardValue': 4, 'isReward': True},
        'smithy': {'rewardValue': 2, 'isReward': True},
        'synthflesh': {'rewardValue': 3, 'isReward': True},
        'thaumaturge': {'rewardValue': 2, 'isReward': True},
        'transcendent_barracks': {'rewardValue': 2, 'isReward': True},
        'vault': {'rewardValue': 4, 'isReward': True},
        'viper_legion_barracks': {'rewardValue': 2, 'isReward': True},
        'viper_spymaster': {'rewardValue': 3, 'isReward': True},
        'reward_room': {'rewardValue': 3, 'isReward': True},
    },
    'special': {
        'corruption': {'rewardValue': 1, 'isReward': False},
        'sacrifice_room': {'rewardValue': 0, 'isReward': False},
        'sacrificial_chamber': {'rewardValue': 0, 'isReward': False},
        'altar_of_sacrifice': {'rewardValue': 0, 'isReward': False},
        'medallion_bonus': {'rewardValue': 0, 'isReward': False},
        'medallion_reroll': {'rewardValue': 0, 'isReward': False},
        'medallion_levelup': {'rewardValue': 0, 'isReward': False},
        'medallion_increase_max': {'rewardValue': 0, 'isReward': False},
        'medallion_prevent_delete': {'rewardValue': 0, 'isReward': False},
        'medallion_increase_tokens': {'rewardValue': 0, 'isReward': False},
    },
    'architect': {
        'commander': {'rewardValue': 0, 'isReward': False},
        'architect': {'rewardValue': 0, 'isReward': False},
    },
    'boss': {
        'atziri': {'rewardValue': 0, 'isReward': False},
    },
    'empty': {
        'empty': {'rewardValue': 0, 'isReward': False},
    },
    'path': {
        'path': {'rewardValue': 0, 'isReward': False},
    },
    'unknown': {
        'unknown': {'rewardValue': 1, 'isReward': False},
    },
}

# Flat lookup: room name -> {type, rewardValue, isReward}
ROOM_TYPES: Dict[str, dict] = {
    name: {'type': category, **info}
    for category, rooms in ROOM_CATEGORIES.items()
    for name, info in rooms.items()
}

# =============================================================================
# SHARE-URL CHARSETS
# =============================================================================

# Alphabets observed in share links, tried in order after auto-detection.
CHARSETS = [
    'ABCDEFHIJKMOQRSTWXYaceghijkopqwx',
    '056ABCEFGIJKMQSTWXYaceghijklnopqrwxy',
    '56ABCDEFGIJKMOQRSUWXYaceghjklpwxy',
    '56ABCDEFGHIKMQRSTWYaceghjklnopwxy',
]


def get_room_name(room_type_id: int) -> str:
    """Room name for a type id, or unknown_<id> when the id is not catalogued."""
    return ROOM_TYPE_IDS.get(room_type_id, f'unknown_{room_type_id}')


def get_room_info(room_name: str) -> Optional[dict]:
    """Catalog entry for a room name, or None."""
    return ROOM_TYPES.get(room_name)
