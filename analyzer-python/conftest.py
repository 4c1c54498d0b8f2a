"""Shared fixtures for the analyzer tests."""

import pytest

from lru_cache import LRUCache
from temple_analyzer import TempleAnalyzer

# 32 distinct characters, sorted, none of them '+' or '/' so the
# string is not mistaken for base64 ('-' is outside the base64 alphabet).
# Character i stands for the 5-bit value i.
SEQUENTIAL_ALPHABET = '-0123456789ABCDEFGHIJKLMNOPQRSTU'

# Rooms packed in the bit stream 00000 00001 ... 11111 (values 0..31),
# as (x, y, room, tier, room_type_id), in stream order.
SEQUENTIAL_ROOMS = [
    (0, 0, 'flesh_surgeon', 4, 8),
    (3, 2, 'entry', 4, 2),
    (12, 7, 'flesh_surgeon', 2, 8),
    (5, 4, 'altar_of_sacrifice', 6, 22),
    (3, 5, 'medallion_bonus', 7, 25),
    (8, 4, 'reward_currency', 5, 12),
    (3, 10, 'generator', 6, 10),
    (13, 7, 'reward_room', 6, 24),
    (7, 5, 'sacrificial_chamber', 6, 23),
    (7, 7, 'medallion_levelup', 7, 27),
]


def make_temple(rooms):
    """Temple JSON from (x, y, room, tier) tuples."""
    return {
        'grid': {
            f"{x},{y}": {'x': x, 'y': y, 'room': room, 'tier': tier}
            for x, y, room, tier in rooms
        }
    }


@pytest.fixture
def analyzer():
    return TempleAnalyzer(cache=LRUCache(100))


@pytest.fixture
def russian_tech_temple():
    return make_temple([
        (0, 0, 'viper_spymaster', 7),
        (1, 0, 'golem_works', 7),
        (1, 1, 'vault', 7),
    ])


@pytest.fixture
def god_tier_temple():
    # Five reward rooms in a row: snake 8, room 60, quantity 12 -> exactly 80
    return make_temple([
        (0, 0, 'viper_spymaster', 5),
        (1, 0, 'viper_spymaster', 5),
        (2, 0, 'golem_works', 5),
        (3, 0, 'golem_works', 5),
        (4, 0, 'vault', 7),
    ])
