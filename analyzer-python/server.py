#!/usr/bin/env python3
"""
Flask API server for the Temple Analyzer.

Run with: python server.py
For production: gunicorn -c ../deploy/gunicorn.conf.py server:app
"""

import os
import threading
import time
from flask import Flask, request, jsonify
from flask_cors import CORS
from lru_cache import LRUCache
from scoring_config import DEFAULT_CACHE_SIZE
from temple_analyzer import TempleAnalyzer
from tools import SERVER_NAME, call_tool, list_tools

# =============================================================================
# Configuration
# =============================================================================

ANALYSIS_CACHE_SIZE = int(os.environ.get('ANALYSIS_CACHE_SIZE', DEFAULT_CACHE_SIZE))
PORT = int(os.environ.get('PORT', 5000))

SERVER_START_TIME = time.time()
total_calls = 0

# =============================================================================
# App Setup
# =============================================================================

app = Flask(__name__)

# CORS
default_origins = 'http://localhost:8080,http://localhost:5173,http://localhost:3000'
allowed_origins = os.environ.get('ALLOWED_ORIGINS', default_origins)
if allowed_origins != '*':
    allowed_origins = [o.strip() for o in allowed_origins.split(',')]
CORS(app, origins=allowed_origins)

# One analyzer per process; the lock serializes access to its cache
analyzer = TempleAnalyzer(cache=LRUCache(ANALYSIS_CACHE_SIZE))
analyzer_lock = threading.Lock()

# =============================================================================
# Routes
# =============================================================================


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "name": SERVER_NAME})


@app.route('/status', methods=['GET'])
def status():
    """Cache and call statistics."""
    with analyzer_lock:
        return jsonify({
            "cache_size": analyzer.cache.size,
            "cache_capacity": analyzer.cache.capacity,
            "total_calls": total_calls,
            "uptime_seconds": round(time.time() - SERVER_START_TIME, 1),
        })


@app.route('/tools', methods=['GET'])
def tools():
    """List available tools with their input schemas."""
    return jsonify({"tools": list_tools()})


@app.route('/tools/<name>', methods=['POST'])
def run_tool(name):
    """
    Call a tool.

    Request JSON: the tool arguments, e.g. {"shareUrl": "http://..."}
    Response JSON: {"content": [{"type": "text", "text": "..."}]}
    """
    global total_calls

    arguments = request.get_json(silent=True)
    if arguments is None:
        if request.data:
            return jsonify({"success": False, "error": "Request body must be JSON"}), 400
        arguments = {}

    app.logger.info(f"Tool call: {name}")
    with analyzer_lock:
        total_calls += 1
        result = call_tool(analyzer, name, arguments)

    if result.get("isError"):
        app.logger.error(f"Tool {name} failed: {result['content'][0]['text']}")
        return jsonify(result), 400
    return jsonify(result)


@app.route('/cache', methods=['DELETE'])
def clear_cache():
    """Drop all cached analyses."""
    with analyzer_lock:
        analyzer.clear_cache()
    app.logger.info("Analysis cache cleared")
    return jsonify({"success": True})


if __name__ == '__main__':
    print("=" * 60)
    print("POE2 Temple Analyzer - API Server")
    print("=" * 60)
    print(f"Analysis cache size: {ANALYSIS_CACHE_SIZE}")
    print()
    print("Endpoints:")
    print("  GET    /health        - Health check")
    print("  GET    /status        - Cache status")
    print("  GET    /tools         - List tools")
    print("  POST   /tools/<name>  - Call a tool")
    print("  DELETE /cache         - Clear analysis cache")
    print()
    print("For production, run with:")
    print("  gunicorn -c ../deploy/gunicorn.conf.py server:app")
    print("=" * 60)

    app.run(host='0.0.0.0', port=PORT, debug=True)
