#!/usr/bin/env python3
"""
Gameplay evaluation of a temple layout.

Complements the star rating with a farming-oriented report:
- chained bonuses for clusters of connected T6+ rooms
- stacked bonuses (with diminishing returns) for repeated valuable rooms
- monster scaling, loot modifiers, farming ratings and risk/reward
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from scoring import round_half_up
from temple_types import Room, TempleData, temple_data_from_dict

# =============================================================================
# CONSTANTS
# =============================================================================

CHAIN_MIN_TIER = 6
CHAIN_MIN_LENGTH = 3
CHAIN_BONUS_PER_ROOM = 0.15

STACKED_ROOM_TYPES = ('golem_works', 'viper_spymaster', 'thaumaturge')
STACKED_BASE_VALUE = 100
STACKED_DR_FACTOR = 0.7  # each additional room keeps 70% of the stack value

CURRENCY_ROOMS = ('reward_currency', 'vault')
SACRIFICE_ROOMS = ('sacrifice', 'sacrificial_chamber')
BOSS_ROOMS = ('boss', 'atziri')
FILLER_ROOMS = ('empty', 'path')

DIFFICULTIES = ('Easy', 'Moderate', 'Hard', 'Very Hard', 'Extreme')
FARMING_RATINGS = ('Poor', 'Fair', 'Good', 'Excellent', 'Outstanding')
RISK_LEVELS = ('Low', 'Medium', 'High', 'Very High', 'Extreme')
REWARD_LEVELS = ('Low', 'Medium', 'High', 'Very High', 'Exceptional')

# (min value, rating index), checked highest first
CURRENCY_GRADES = ((2.5, 4), (2.0, 3), (1.5, 2), (1.2, 1))
RARE_MONSTER_GRADES = ((80, 4), (60, 3), (40, 2), (20, 1))
ITEM_GRADES = ((100, 4), (70, 3), (40, 2), (20, 1))
REWARD_GRADES = ((4.5, 4), (3.5, 3), (2.5, 2), (1.5, 1))

# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class ChainedRoomBonus:
    type: str
    description: str
    rooms: Tuple[Room, ...]
    multiplier: float

    def to_dict(self) -> dict:
        return {
            'type': self.type,
            'description': self.description,
            'rooms': [r.to_dict() for r in self.rooms],
            'multiplier': self.multiplier,
        }


@dataclass(frozen=True)
class StackedBonus:
    room_type: str
    count: int
    base_value: int
    actual_value: int
    diminishing_return: int  # percent of value lost

    def to_dict(self) -> dict:
        return {
            'roomType': self.room_type,
            'count': self.count,
            'baseValue': self.base_value,
            'actualValue': self.actual_value,
            'diminishingReturn': self.diminishing_return,
        }


@dataclass(frozen=True)
class MonsterScaling:
    average_tier: float
    difficulty: str
    monster_density: int  # 0-100
    rare_monster_chance: int  # 0-100
    boss_present: bool

    def to_dict(self) -> dict:
        return {
            'averageTier': self.average_tier,
            'difficulty': self.difficulty,
            'monsterDensity': self.monster_density,
            'rareMonsterChance': self.rare_monster_chance,
            'bossPresent': self.boss_present,
        }


@dataclass(frozen=True)
class LootModifiers:
    currency_multiplier: float
    rare_item_chance: int
    unique_item_chance: int
    corruption_available: bool
    sacrifice_value: int

    def to_dict(self) -> dict:
        return {
            'currencyMultiplier': self.currency_multiplier,
            'rareItemChance': self.rare_item_chance,
            'uniqueItemChance': self.unique_item_chance,
            'corruptionAvailable': self.corruption_available,
            'sacrificeValue': self.sacrifice_value,
        }


@dataclass(frozen=True)
class FarmingAssessment:
    currency_farming: str
    rare_monster_farming: str
    item_farming: str
    overall_suitability: str

    def to_dict(self) -> dict:
        return {
            'currencyFarming': self.currency_farming,
            'rareMonsterFarming': self.rare_monster_farming,
            'itemFarming': self.item_farming,
            'overallSuitability': self.overall_suitability,
        }


@dataclass(frozen=True)
class RiskRewardAnalysis:
    risk_level: str
    reward_potential: str
    recommendation: str
    time_investment: str

    def to_dict(self) -> dict:
        return {
            'riskLevel': self.risk_level,
            'rewardPotential': self.reward_potential,
            'recommendation': self.recommendation,
            'timeInvestment': self.time_investment,
        }


@dataclass(frozen=True)
class TempleEvaluation:
    chained_bonuses: Tuple[ChainedRoomBonus, ...]
    stacked_bonuses: Tuple[StackedBonus, ...]
    monster_scaling: MonsterScaling
    loot_modifiers: LootModifiers
    farming_assessment: FarmingAssessment
    risk_reward: RiskRewardAnalysis

    def to_dict(self) -> dict:
        return {
            'chainedBonuses': [b.to_dict() for b in self.chained_bonuses],
            'stackedBonuses': [b.to_dict() for b in self.stacked_bonuses],
            'monsterScaling': self.monster_scaling.to_dict(),
            'lootModifiers': self.loot_modifiers.to_dict(),
            'farmingAssessment': self.farming_assessment.to_dict(),
            'riskReward': self.risk_reward.to_dict(),
        }

# =============================================================================
# HELPERS
# =============================================================================


def _grade(value: float, grades) -> int:
    for minimum, index in grades:
        if value >= minimum:
            return index
    return 0


def _connected_chain(rooms: List[Room], start: Room, visited: set) -> List[Room]:
    """Depth-first cluster from start in visit order; marks rooms in visited."""
    chain = [start]
    visited.add((start.x, start.y))
    stack = [(start, 0)]

    while stack:
        current, index = stack[-1]
        while index < len(rooms):
            room = rooms[index]
            index += 1
            if (room.x, room.y) in visited:
                continue
            if abs(room.x - current.x) > 1 or abs(room.y - current.y) > 1:
                continue
            stack[-1] = (current, index)
            visited.add((room.x, room.y))
            chain.append(room)
            stack.append((room, 0))
            break
        else:
            stack.pop()

    return chain

# =============================================================================
# ANALYSES
# =============================================================================


def analyze_chained_rooms(rooms: List[Room]) -> List[ChainedRoomBonus]:
    high_tier = [r for r in rooms if r.tier_or_zero >= CHAIN_MIN_TIER]
    bonuses = []
    visited = set()

    for room in high_tier:
        if (room.x, room.y) in visited:
            continue
        chain = _connected_chain(high_tier, room, visited)
        if len(chain) >= CHAIN_MIN_LENGTH:
            avg_tier = sum(r.tier_or_zero for r in chain) / len(chain)
            bonuses.append(ChainedRoomBonus(
                type='high_tier_chain',
                description=f"{len(chain)} connected T{int(avg_tier)}+ rooms",
                rooms=tuple(chain),
                multiplier=1 + len(chain) * CHAIN_BONUS_PER_ROOM,
            ))

    return bonuses


def analyze_stacked_bonuses(rooms: List[Room]) -> List[StackedBonus]:
    counts = {}
    for room in rooms:
        if room.room and room.room not in FILLER_ROOMS:
            counts[room.room] = counts.get(room.room, 0) + 1

    bonuses = []
    for room_type in STACKED_ROOM_TYPES:
        count = counts.get(room_type, 0)
        if count == 0:
            continue
        dr_factor = STACKED_DR_FACTOR ** (count - 1) if count > 1 else 1
        actual = STACKED_BASE_VALUE * count * dr_factor
        dr_percent = (1 - dr_factor) * 100 if count > 1 else 0
        bonuses.append(StackedBonus(
            room_type=room_type,
            count=count,
            base_value=STACKED_BASE_VALUE,
            actual_value=round_half_up(actual),
            diminishing_return=round_half_up(dr_percent),
        ))

    return bonuses


def analyze_monster_scaling(rooms: List[Room]) -> MonsterScaling:
    occupied = [r for r in rooms if r.room not in FILLER_ROOMS]
    avg_tier = sum(r.tier_or_zero for r in occupied) / (len(occupied) or 1)
    t7_count = sum(1 for r in rooms if r.tier_or_zero >= 7)
    t6_count = sum(1 for r in rooms if r.tier_or_zero == 6)

    if avg_tier >= 6.5 or t7_count >= 3:
        difficulty = 'Extreme'
    elif avg_tier >= 6 or t7_count >= 2:
        difficulty = 'Very Hard'
    elif avg_tier >= 5 or t6_count >= 4:
        difficulty = 'Hard'
    elif avg_tier >= 4:
        difficulty = 'Moderate'
    else:
        difficulty = 'Easy'

    density = min(100, len(occupied) / 25 * 100 + avg_tier * 5)
    rare_chance = min(100, avg_tier * 12 + t7_count * 10)

    return MonsterScaling(
        average_tier=round_half_up(avg_tier * 10) / 10,
        difficulty=difficulty,
        monster_density=round_half_up(density),
        rare_monster_chance=round_half_up(rare_chance),
        boss_present=any(r.room in BOSS_ROOMS for r in rooms),
    )


def analyze_loot_modifiers(rooms: List[Room]) -> LootModifiers:
    t7_count = sum(1 for r in rooms if r.tier_or_zero >= 7)
    t6_count = sum(1 for r in rooms if r.tier_or_zero == 6)
    currency_rooms = sum(1 for r in rooms if r.room in CURRENCY_ROOMS)
    has_sacrifice = any(r.room in SACRIFICE_ROOMS for r in rooms)

    currency_multiplier = 1 + t7_count * 0.3 + t6_count * 0.15 + currency_rooms * 0.25

    return LootModifiers(
        currency_multiplier=round_half_up(currency_multiplier * 100) / 100,
        rare_item_chance=min(100, 20 + t7_count * 15 + t6_count * 8),
        unique_item_chance=min(50, 5 + t7_count * 8 + t6_count * 3),
        corruption_available=any(r.room == 'corruption' for r in rooms),
        sacrifice_value=(t7_count + t6_count) * 10 if has_sacrifice else 0,
    )


def assess_farming(loot: LootModifiers, scaling: MonsterScaling) -> FarmingAssessment:
    currency = _grade(loot.currency_multiplier, CURRENCY_GRADES)
    rare = _grade((scaling.rare_monster_chance + scaling.monster_density) / 2, RARE_MONSTER_GRADES)
    item = _grade(loot.rare_item_chance + loot.unique_item_chance, ITEM_GRADES)

    if currency >= 3 and rare >= 3:
        suitability = 'Excellent all-around farming temple'
    elif currency >= 3:
        suitability = 'Best for currency farming'
    elif rare >= 3:
        suitability = 'Best for rare monster farming'
    elif item >= 3:
        suitability = 'Best for item farming'
    else:
        suitability = 'Moderate farming potential'

    return FarmingAssessment(
        currency_farming=FARMING_RATINGS[currency],
        rare_monster_farming=FARMING_RATINGS[rare],
        item_farming=FARMING_RATINGS[item],
        overall_suitability=suitability,
    )


def analyze_risk_reward(scaling: MonsterScaling, loot: LootModifiers, rooms: List[Room]) -> RiskRewardAnalysis:
    risk = DIFFICULTIES.index(scaling.difficulty)
    if scaling.boss_present:
        risk = min(4, risk + 1)

    reward_score = loot.currency_multiplier + loot.rare_item_chance / 50 + loot.unique_item_chance / 25
    reward = _grade(reward_score, REWARD_GRADES)

    room_count = sum(1 for r in rooms if r.room not in FILLER_ROOMS)
    if room_count >= 20 and risk >= 3:
        time_investment = 'Very Long'
    elif room_count >= 15 or risk >= 3:
        time_investment = 'Long'
    elif room_count >= 10:
        time_investment = 'Moderate'
    else:
        time_investment = 'Quick'

    if reward > risk + 1:
        recommendation = 'Highly recommended - great rewards for the risk'
    elif reward > risk:
        recommendation = 'Recommended - good risk/reward balance'
    elif reward == risk:
        recommendation = 'Balanced - moderate risk and reward'
    else:
        recommendation = 'Challenging - high risk, consider your build strength'

    return RiskRewardAnalysis(
        risk_level=RISK_LEVELS[risk],
        reward_potential=REWARD_LEVELS[reward],
        recommendation=recommendation,
        time_investment=time_investment,
    )


def evaluate_temple(temple_data: Union[TempleData, dict]) -> TempleEvaluation:
    """Full gameplay evaluation of a temple."""
    rooms = temple_data_from_dict(temple_data).rooms()

    scaling = analyze_monster_scaling(rooms)
    loot = analyze_loot_modifiers(rooms)

    return TempleEvaluation(
        chained_bonuses=tuple(analyze_chained_rooms(rooms)),
        stacked_bonuses=tuple(analyze_stacked_bonuses(rooms)),
        monster_scaling=scaling,
        loot_modifiers=loot,
        farming_assessment=assess_farming(loot, scaling),
        risk_reward=analyze_risk_reward(scaling, loot, rooms),
    )
