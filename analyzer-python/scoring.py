#!/usr/bin/env python3
"""
Score components for temple analysis.

Snake, room-quality and quantity scores, the star rating, and the
improvement suggestions, all driven by a ScoringProfile. Also the per-room
tier value and density helpers used by the evaluation report.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from scoring_config import (
    DEFAULT_DENSITY_MAX_ROOMS,
    DEFAULT_PROFILE,
    DEFAULT_ROOM_BASE_VALUE,
    MAX_DENSITY_SCORE,
    ROOM_BASE_VALUES,
    TIER_MULTIPLIERS,
    ScoringProfile,
)
from temple_types import Room


def round_half_up(value: float) -> int:
    """
    Round .5 up (Python's round() rounds half to even).

    Infinite and NaN values are returned unchanged, so absurd tiers
    propagate as infinity instead of raising.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class RoomMetrics:
    spymasters: int
    golems: int
    t7_rooms: int
    t6_rooms: int
    high_tier_rooms: int

# =============================================================================
# SCORE COMPONENTS
# =============================================================================


def calculate_snake_score(chain_length: int, profile: ScoringProfile = DEFAULT_PROFILE) -> int:
    """Points for the longest connected chain of reward rooms."""
    for min_length, points in profile.snake_breakpoints:
        if chain_length >= min_length:
            return points
    return profile.snake_floor


def calculate_room_score(reward_rooms: List[Room],
                         profile: ScoringProfile = DEFAULT_PROFILE) -> Tuple[int, RoomMetrics]:
    """Quality points for the reward rooms, plus the counts they were derived from."""
    spymasters = sum(1 for r in reward_rooms if r.room == profile.spymaster_room)
    golems = sum(1 for r in reward_rooms if r.room == profile.golem_room)
    t7_rooms = sum(1 for r in reward_rooms if r.tier_or_zero >= profile.t7_tier)
    t6_rooms = sum(1 for r in reward_rooms if r.tier_or_zero == profile.t6_tier)
    high_tier = sum(1 for r in reward_rooms if r.tier_or_zero >= profile.high_tier)

    score = 0

    if spymasters >= profile.multi_spymaster_count:
        score += profile.multi_spymaster_bonus
    elif spymasters == 1:
        score += profile.single_spymaster_bonus

    if t7_rooms >= profile.t7_cluster_count:
        score += profile.t7_cluster_bonus
    elif t7_rooms >= 1:
        score += t7_rooms * profile.t7_room_points

    score += golems * profile.golem_room_points

    if t6_rooms <= profile.t6_low_count:
        t6_score = t6_rooms * profile.t6_low_points
    else:
        t6_score = (profile.t6_low_count * profile.t6_low_points
                    + (t6_rooms - profile.t6_low_count) * profile.t6_extra_points)
    score += min(profile.t6_cap, t6_score)

    if high_tier >= profile.high_tier_count:
        score += profile.high_tier_bonus

    if t6_rooms >= profile.t6_exceptional_count:
        score += profile.t6_exceptional_bonus

    return score, RoomMetrics(
        spymasters=spymasters,
        golems=golems,
        t7_rooms=t7_rooms,
        t6_rooms=t6_rooms,
        high_tier_rooms=high_tier,
    )


def calculate_quantity_score(reward_count: int, room_count: int,
                             profile: ScoringProfile = DEFAULT_PROFILE) -> int:
    """Points for the share of grid rooms that are reward rooms. An empty grid gets the floor."""
    if room_count <= 0:
        return profile.quantity_floor
    density = reward_count / room_count
    for min_density, points in profile.quantity_breakpoints:
        if density >= min_density:
            return points
    return profile.quantity_floor


def calculate_overall_score(snake_score: float, room_score: float, quantity_score: float,
                            tech_score: float = 0) -> int:
    return round_half_up(snake_score + room_score + quantity_score + tech_score)


def calculate_star_rating(total_score: float, profile: ScoringProfile = DEFAULT_PROFILE) -> Tuple[int, str]:
    """(stars, description). A score equal to a threshold earns that threshold's rating."""
    for min_score, stars, description in profile.rating_thresholds:
        if total_score >= min_score:
            return stars, description
    return profile.floor_rating

# =============================================================================
# SUGGESTIONS
# =============================================================================


def generate_suggestions(chain_length: int, metrics: RoomMetrics, reward_count: int,
                         profile: ScoringProfile = DEFAULT_PROFILE) -> List[str]:
    suggestions = []

    if chain_length < profile.min_chain_length:
        suggestions.append(
            f"Snake chain is only {chain_length} rooms. "
            f"Aim for {profile.min_chain_length}+ connected reward rooms."
        )

    if metrics.spymasters == 0 and metrics.t7_rooms == 0 and metrics.t6_rooms < profile.min_t6_rooms:
        suggestions.append(
            'Consider adding more high-value rooms (Spymasters, T7 rooms, or multiple T6 rooms).'
        )

    if reward_count < profile.min_reward_rooms:
        suggestions.append('Consider adding more reward rooms to the temple.')

    return suggestions


def generate_advisory_suggestions(analysis, profile: ScoringProfile = DEFAULT_PROFILE) -> List[str]:
    """Extra room-mix hints for a finished TempleAnalysis."""
    suggestions = []

    if analysis.t7_rooms == 0 and analysis.high_tier_rooms < profile.min_high_tier_rooms:
        suggestions.append('Add more high-tier rooms (T6-T7) for better rewards.')

    if analysis.spymasters == 0:
        suggestions.append('Viper Spymaster rooms provide significant value.')

    if analysis.golems == 0:
        suggestions.append('Golem Works rooms offer excellent rewards.')

    return suggestions

# =============================================================================
# ROOM VALUE HELPERS
# =============================================================================


def calculate_room_value(room: Room) -> int:
    """Base value of the room type scaled by its tier multiplier."""
    multiplier = TIER_MULTIPLIERS.get(room.tier_or_zero, 0)
    base = ROOM_BASE_VALUES.get(room.room, DEFAULT_ROOM_BASE_VALUE)
    return round_half_up(base * multiplier)


def calculate_density_score(room_count: int, max_rooms: int = DEFAULT_DENSITY_MAX_ROOMS) -> float:
    if max_rooms <= 0:
        return 0
    return min(MAX_DENSITY_SCORE, room_count / max_rooms * MAX_DENSITY_SCORE)
