#!/usr/bin/env python3
"""
Named tools exposed to clients.

Each tool takes a JSON-like arguments mapping and returns a text payload in
the {"content": [{"type": "text", "text": ...}]} shape. call_tool() is the
single dispatch point: failures, including unknown tool names, come back
as error-tagged payloads rather than exceptions.
"""

import json
import logging

from room_catalog import CHARSETS, get_room_info
from scoring_config import TECH_BONUSES, TIER_MULTIPLIERS
from temple_analyzer import TempleAnalyzer
from temple_decoder import BITS_PER_ROOM, BITS_PER_VALUE, MIN_DECODED_ROOMS, decode_temple_data, parse_temple_array
from temple_evaluation import evaluate_temple
from url_parser import extract_share_data

logger = logging.getLogger(__name__)

SERVER_NAME = 'poe2-temple-analyzer'


def text_result(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def error_result(message: str) -> dict:
    return {"content": [{"type": "text", "text": f"Error: {message}"}], "isError": True}


def _temple_argument(args: dict):
    temple_data = args.get('templeData')
    if temple_data is None:
        raise ValueError("Missing required argument: templeData")
    if isinstance(temple_data, list):
        return parse_temple_array(temple_data)
    return temple_data

# =============================================================================
# HANDLERS
# =============================================================================


def analyze_temple_url(analyzer: TempleAnalyzer, args: dict) -> dict:
    encoded = extract_share_data(args.get('shareUrl'))
    if not encoded:
        raise ValueError('Could not extract temple data from URL')

    temple = decode_temple_data(encoded)
    if temple is None:
        raise ValueError('Failed to decode temple data')

    analysis = analyzer.analyze(temple)
    return text_result(json.dumps(analysis.to_dict(), indent=2))


def analyze_temple_data(analyzer: TempleAnalyzer, args: dict) -> dict:
    analysis = analyzer.analyze(_temple_argument(args))
    return text_result(json.dumps(analysis.to_dict(), indent=2))


def room_info(analyzer: TempleAnalyzer, args: dict) -> dict:
    room_type = args.get('roomType')
    if room_type is None:
        raise ValueError("Missing required argument: roomType")

    info = get_room_info(room_type) if isinstance(room_type, str) else None
    if info is None:
        return text_result(f"Room type '{room_type}' not found in database")
    return text_result(json.dumps(info, indent=2))


def rating_criteria(analyzer: TempleAnalyzer, args: dict) -> dict:
    profile = analyzer.profile
    criteria = {
        'description': 'Star rating = snake score + room quality score + quantity score + tech bonuses',
        'profile': profile.to_dict(),
        'techBonuses': [
            {'type': bonus_type, 'name': name, 'points': points}
            for bonus_type, name, points in TECH_BONUSES
        ],
        'tierMultipliers': {str(tier): mult for tier, mult in sorted(TIER_MULTIPLIERS.items())},
        'encoding': {
            'format': f'{BITS_PER_VALUE}-bit values, one per character',
            'charsets': CHARSETS,
            'roomEncoding': (f'{BITS_PER_ROOM} bits per room: 4 bits x + 4 bits y '
                             f'+ 5 bits room type + 3 bits tier'),
            'minDecodedRooms': MIN_DECODED_ROOMS + 1,
        },
    }
    return text_result(json.dumps(criteria, indent=2))


def temple_evaluation(analyzer: TempleAnalyzer, args: dict) -> dict:
    evaluation = evaluate_temple(_temple_argument(args))
    return text_result(json.dumps(evaluation.to_dict(), indent=2))

# =============================================================================
# REGISTRY
# =============================================================================

TOOLS = {
    'analyze_temple': {
        'description': 'Analyze a PoE2 Vaal Temple layout from a share URL and calculate star rating',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'shareUrl': {
                    'type': 'string',
                    'description': 'Share URL containing temple data '
                                   '(e.g., http://localhost:8080/#/atziri-temple?t=...)',
                },
            },
            'required': ['shareUrl'],
        },
        'handler': analyze_temple_url,
    },
    'analyze_temple_data': {
        'description': 'Analyze temple data directly from decoded JSON structure',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'templeData': {
                    'type': ['object', 'array'],
                    'description': 'Temple data with grid, or a flat array of rooms',
                },
            },
            'required': ['templeData'],
        },
        'handler': analyze_temple_data,
    },
    'get_room_info': {
        'description': 'Get information about a specific room type in PoE2 Vaal Temple',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'roomType': {
                    'type': 'string',
                    'description': "The room type name (e.g., 'alchemy_lab', 'vault', 'commander')",
                },
            },
            'required': ['roomType'],
        },
        'handler': room_info,
    },
    'get_rating_criteria': {
        'description': 'Get the criteria and formulas used for calculating star ratings',
        'inputSchema': {'type': 'object', 'properties': {}},
        'handler': rating_criteria,
    },
    'evaluate_temple': {
        'description': 'Farming, loot, monster scaling and risk/reward report for temple data',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'templeData': {
                    'type': ['object', 'array'],
                    'description': 'Temple data with grid, or a flat array of rooms',
                },
            },
            'required': ['templeData'],
        },
        'handler': temple_evaluation,
    },
}


def list_tools() -> list:
    return [
        {'name': name, 'description': tool['description'], 'inputSchema': tool['inputSchema']}
        for name, tool in TOOLS.items()
    ]


def call_tool(analyzer: TempleAnalyzer, name: str, arguments: dict = None) -> dict:
    """Run a tool by name. Never raises; failures become error-tagged results."""
    try:
        tool = TOOLS.get(name)
        if tool is None:
            raise ValueError(f"Unknown tool: {name}")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValueError("Tool arguments must be an object")
        return tool['handler'](analyzer, arguments)
    except ValueError as e:
        logger.warning("Tool %s failed: %s", name, e)
        return error_result(str(e))
    except Exception as e:
        logger.exception("Tool %s raised", name)
        return error_result(str(e))
