"""Analyzer scoring, chain search and caching."""

import io
import json
import sys
from dataclasses import replace

import pytest

from conftest import SEQUENTIAL_ALPHABET, make_temple
from lru_cache import LRUCache
from scoring_config import DEFAULT_PROFILE
from temple_analyzer import (
    TempleAnalyzer,
    count_rooms_by_tier,
    filter_reward_rooms,
    find_best_chain,
    main,
)
from temple_types import Room


# =============================================================================
# Room selection
# =============================================================================

def test_filter_reward_rooms():
    rooms = [
        Room(0, 0, 'empty'),
        Room(1, 0, 'path'),
        Room(2, 0, 'vault', 5),
        Room(2, 0, 'vault', 7),      # same type, same cell
        Room(2, 0, 'garrison', 3),   # same cell, other type
        Room(3, 0, 'mystery_room', 7),
        Room(4, 0, 'unknown', 7),
    ]
    result = filter_reward_rooms(rooms)
    assert [(r.room, r.tier) for r in result] == [('vault', 5), ('garrison', 3)]


def test_chain_is_greedy_and_first_found():
    a, b, c = Room(0, 0, 'vault'), Room(0, 1, 'vault'), Room(1, 0, 'vault')
    # From a the first neighbour is b, and b cannot reach c.
    # c was never visited, so it starts its own chain through a and b.
    assert find_best_chain([a, b, c]) == [c, a, b]


def test_chain_of_diagonal_rooms_is_single():
    rooms = [Room(i, i, 'vault') for i in range(5)]
    assert len(find_best_chain(rooms)) == 1


def test_count_rooms_by_tier():
    rooms = [Room(0, 0, 'vault', 7), Room(1, 0, 'vault', 7), Room(2, 0, 'vault'), Room(3, 0, 'smithy', 5)]
    assert count_rooms_by_tier(rooms) == {7: 2, 0: 1, 5: 1}
    assert count_rooms_by_tier([]) == {}


# =============================================================================
# Scoring
# =============================================================================

def test_empty_grid(analyzer):
    result = analyzer.analyze({'grid': {}})
    assert result.room_count == 0
    assert result.reward_rooms == 0
    assert result.snake_score == 2
    assert result.room_score == 0
    assert result.quantity_score == 2
    assert result.tech_score == 0
    assert result.total_score == 4
    assert result.star_rating == 1
    assert result.rating_description.startswith('Poor')
    assert result.suggestions == (
        'Snake chain is only 0 rooms. Aim for 4+ connected reward rooms.',
        'Consider adding more high-value rooms (Spymasters, T7 rooms, or multiple T6 rooms).',
        'Consider adding more reward rooms to the temple.',
    )
    assert len(result.tech_bonuses) == 3


def test_malformed_input_is_an_empty_temple(analyzer):
    for data in [None, 'garbage', 42, {'grid': 'nope'}, {'grid': {'0,0': 'junk'}}, {}]:
        result = analyzer.analyze(data)
        assert result.room_count == 0
        assert result.total_score == 4


def test_russian_tech_scenario(analyzer, russian_tech_temple):
    result = analyzer.analyze(russian_tech_temple)
    assert result.reward_rooms == 3
    assert result.snake_score == 4
    assert result.room_score == 15 + 50 + 4
    assert result.quantity_score == 12
    assert result.tech_score == 150
    assert result.total_score == 235
    assert result.star_rating == 5
    assert result.has_russian_tech
    assert result.tech_bonuses[0].percentage == 64
    assert result.suggestions == (
        'Snake chain is only 3 rooms. Aim for 4+ connected reward rooms.',
        'Consider adding more reward rooms to the temple.',
    )


def test_score_of_exactly_80_is_five_stars(analyzer, god_tier_temple):
    result = analyzer.analyze(god_tier_temple)
    assert result.snake_score == 8
    assert result.room_score == 60
    assert result.quantity_score == 12
    assert result.total_score == 80
    assert result.star_rating == 5
    assert result.rating_description.startswith('God Tier')


def test_counts(analyzer):
    result = analyzer.analyze(make_temple([
        (0, 0, 'architect', None),
        (1, 0, 'boss', 3),
        (2, 0, 'atziri', None),
        (3, 0, 'empty', None),
        (4, 0, 'vault', 6),
        (5, 0, 'garrison', 6),
    ]))
    assert result.room_count == 6
    assert result.architect_rooms == 1
    assert result.boss_rooms == 2
    assert result.t6_rooms == 2
    assert result.high_tier_rooms == 2


def test_t6_score_is_capped(analyzer):
    rooms = [(i, 0, 'garrison', 6) for i in range(10)]
    result = analyzer.analyze(make_temple(rooms))
    # min(20, 8 + 8*3) + high-tier bonus 3 + exceptional T6 bonus 28
    assert result.room_score == 20 + 3 + 28


def test_decoded_rooms_are_echoed(analyzer):
    data = make_temple([(0, 0, 'vault', 5)])
    data['decodedRooms'] = [{'x': 0, 'y': 0, 'room': 'vault', 'tier': 5, 'roomTypeId': 17}]
    result = analyzer.analyze(data)
    assert result.decoded_rooms[0].room_type_id == 17
    assert result.to_dict()['decodedRooms'][0]['roomTypeId'] == 17
    assert 'decodedRooms' not in analyzer.analyze(make_temple([(0, 0, 'vault', 5)])).to_dict()


def test_advisories_are_opt_in():
    analyzer = TempleAnalyzer(profile=replace(DEFAULT_PROFILE, include_advisories=True))
    result = analyzer.analyze(make_temple([(0, 0, 'garrison', 3)]))
    assert 'Viper Spymaster rooms provide significant value.' in result.suggestions
    assert 'Golem Works rooms offer excellent rewards.' in result.suggestions


def test_thousand_rooms(analyzer):
    data = {'grid': {f"{i},{i}": {'x': i, 'y': i, 'room': 'vault', 'tier': 5} for i in range(1000)}}
    result = analyzer.analyze(data)
    assert result.room_count == 1000
    assert result.reward_rooms == 1000
    assert result.snake_score == 2


# =============================================================================
# Caching
# =============================================================================

def test_repeat_analysis_returns_cached_object(analyzer, russian_tech_temple):
    first = analyzer.analyze(russian_tech_temple)
    assert analyzer.analyze(russian_tech_temple) is first
    assert analyzer.cache.size == 1


def test_cache_key_ignores_key_order(analyzer, russian_tech_temple):
    first = analyzer.analyze(russian_tech_temple)
    reordered = {'grid': dict(reversed(list(russian_tech_temple['grid'].items())))}
    assert analyzer.analyze(reordered) is first


def test_clear_cache_recomputes(analyzer, russian_tech_temple):
    first = analyzer.analyze(russian_tech_temple)
    analyzer.clear_cache()
    second = analyzer.analyze(russian_tech_temple)
    assert second is not first
    assert second == first


def test_eviction_recomputes_oldest():
    analyzer = TempleAnalyzer(cache=LRUCache(2))
    temples = [make_temple([(i, 0, 'vault', 5)]) for i in range(3)]
    first = analyzer.analyze(temples[0])
    analyzer.analyze(temples[1])
    analyzer.analyze(temples[2])
    assert analyzer.cache.size == 2
    assert analyzer.analyze(temples[0]) is not first


def test_analyzers_do_not_share_caches(russian_tech_temple):
    one, two = TempleAnalyzer(), TempleAnalyzer()
    assert one.analyze(russian_tech_temple) is not two.analyze(russian_tech_temple)


# =============================================================================
# CLI
# =============================================================================

def test_cli_share_url(monkeypatch, capsys):
    url = f'http://localhost:8080/#/atziri-temple?t={SEQUENTIAL_ALPHABET}'
    monkeypatch.setattr(sys, 'argv', ['temple_analyzer.py', url])
    main()
    assert json.loads(capsys.readouterr().out)['roomCount'] == 10


def test_cli_stdin(monkeypatch, capsys, god_tier_temple):
    monkeypatch.setattr(sys, 'argv', ['temple_analyzer.py'])
    monkeypatch.setattr(sys, 'stdin', io.StringIO(json.dumps(god_tier_temple)))
    main()
    assert json.loads(capsys.readouterr().out)['starRating'] == 5


def test_cli_bad_url_exits(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'argv', ['temple_analyzer.py', 'https://example.com/'])
    with pytest.raises(SystemExit):
        main()
    assert json.loads(capsys.readouterr().out)['success'] is False
