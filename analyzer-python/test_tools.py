"""Tool handlers and dispatch."""

import base64
import json

from conftest import SEQUENTIAL_ALPHABET, make_temple
from tools import TOOLS, call_tool, list_tools


def _text(result):
    assert result['content'][0]['type'] == 'text'
    return result['content'][0]['text']


def test_list_tools():
    names = [tool['name'] for tool in list_tools()]
    assert names == list(TOOLS)
    assert {'analyze_temple', 'analyze_temple_data', 'get_room_info', 'get_rating_criteria'} <= set(names)
    assert all('inputSchema' in tool for tool in list_tools())


def test_analyze_temple_from_url(analyzer):
    url = f'http://localhost:8080/#/atziri-temple?t={SEQUENTIAL_ALPHABET}'
    result = call_tool(analyzer, 'analyze_temple', {'shareUrl': url})
    assert 'isError' not in result
    analysis = json.loads(_text(result))
    assert analysis['roomCount'] == 10
    assert len(analysis['decodedRooms']) == 10
    assert len(analysis['techBonuses']) == 3


def test_analyze_temple_from_base64_url(analyzer):
    encoded = base64.b64encode(SEQUENTIAL_ALPHABET.encode()).decode()
    url = f'http://localhost:8080/#/atziri-temple?t={encoded}'
    analysis = json.loads(_text(call_tool(analyzer, 'analyze_temple', {'shareUrl': url})))
    assert analysis['roomCount'] == 10


def test_analyze_temple_without_share_data(analyzer):
    result = call_tool(analyzer, 'analyze_temple', {'shareUrl': 'http://localhost:8080/#/atziri-temple'})
    assert result['isError']
    assert _text(result) == 'Error: Could not extract temple data from URL'


def test_analyze_temple_undecodable(analyzer):
    result = call_tool(analyzer, 'analyze_temple', {'shareUrl': 'http://localhost:8080/#/x?t=---'})
    assert result['isError']
    assert _text(result) == 'Error: Failed to decode temple data'


def test_analyze_temple_data(analyzer, god_tier_temple):
    analysis = json.loads(_text(call_tool(analyzer, 'analyze_temple_data', {'templeData': god_tier_temple})))
    assert analysis['totalScore'] == 80
    assert analysis['starRating'] == 5


def test_analyze_temple_data_accepts_room_array(analyzer):
    rooms = [{'room': 'vault', 'tier': 5}, {'room': 'garrison', 'tier': 3}]
    analysis = json.loads(_text(call_tool(analyzer, 'analyze_temple_data', {'templeData': rooms})))
    assert analysis['roomCount'] == 2
    assert analysis['snakeScore'] == 4


def test_analyze_temple_data_requires_argument(analyzer):
    result = call_tool(analyzer, 'analyze_temple_data', {})
    assert result['isError']
    assert 'templeData' in _text(result)


def test_get_room_info(analyzer):
    info = json.loads(_text(call_tool(analyzer, 'get_room_info', {'roomType': 'vault'})))
    assert info == {'type': 'reward', 'rewardValue': 4, 'isReward': True}


def test_get_room_info_not_found(analyzer):
    result = call_tool(analyzer, 'get_room_info', {'roomType': 'ballroom'})
    assert 'isError' not in result
    assert _text(result) == "Room type 'ballroom' not found in database"


def test_get_rating_criteria(analyzer):
    criteria = json.loads(_text(call_tool(analyzer, 'get_rating_criteria')))
    assert criteria['profile']['name'] == 'snake-18'
    assert criteria['profile']['starRatings'][0] == {
        'minScore': 80, 'stars': 5,
        'description': 'God Tier - Exceptional temple with outstanding quality',
    }
    assert [b['points'] for b in criteria['techBonuses']] == [150, 100, 120]
    assert '16 bits per room' in criteria['encoding']['roomEncoding']


def test_evaluate_temple(analyzer, russian_tech_temple):
    report = json.loads(_text(call_tool(analyzer, 'evaluate_temple', {'templeData': russian_tech_temple})))
    assert report['monsterScaling']['difficulty'] == 'Extreme'


def test_unknown_tool(analyzer):
    result = call_tool(analyzer, 'summon_atziri', {})
    assert result['isError']
    assert _text(result) == 'Error: Unknown tool: summon_atziri'


def test_tool_results_share_the_analyzer_cache(analyzer):
    data = make_temple([(0, 0, 'vault', 5)])
    call_tool(analyzer, 'analyze_temple_data', {'templeData': data})
    call_tool(analyzer, 'analyze_temple_data', {'templeData': data})
    assert analyzer.cache.size == 1


def test_unexpected_handler_error_is_tagged(analyzer, monkeypatch):
    def boom(analyzer, args):
        raise KeyError('roomType')

    monkeypatch.setitem(TOOLS['get_room_info'], 'handler', boom)
    result = call_tool(analyzer, 'get_room_info', {'roomType': 'vault'})
    assert result['isError']
    assert _text(result) == "Error: 'roomType'"


def test_evaluate_temple_with_huge_tier(analyzer):
    data = {'grid': {'0,0': {'x': 0, 'y': 0, 'room': 'vault', 'tier': 1e308}}}
    result = call_tool(analyzer, 'evaluate_temple', {'templeData': data})
    assert 'isError' not in result
    assert json.loads(_text(result))['monsterScaling']['averageTier'] == float('inf')
