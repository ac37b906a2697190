"""
Dip Alert Web Handler

Routes:
  GET /get        -> last scan's dips from the in-memory cache (no scan)
                     (exact match; a query string makes it a fresh scan)
  anything else   -> run a fresh scan with alerts and return its dips

Every documented response is HTTP 200 JSON with an "ok" flag; "ok" is
false when the scan did not run because the alert window is closed.
"""

import logging
from typing import Dict

from flask import Flask, jsonify, request

from dip_scanner import DipScanner
from result_cache import ResultCache, get_result_cache, strip_delivery, DELIVERY_FIELD

logger = logging.getLogger(__name__)

ALL_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


def handle_request(method: str, path: str, scanner: DipScanner, cache: ResultCache) -> Dict:
    """
    Dispatch one request by method + path (path includes any query string)

    Returns:
        JSON-serializable response body
    """
    if method == 'GET' and path == '/get':
        return {'ok': True, 'dips': cache.get_last()}

    logger.info(f"{method} {path}: running fresh scan")
    result = scanner.scan()

    body = {
        'ok': result['ok'],
        'dips': [strip_delivery(dip) for dip in result['dips']],
    }
    telegram_responses = [dip[DELIVERY_FIELD] for dip in result['dips']
                          if dip.get(DELIVERY_FIELD) is not None]
    if telegram_responses:
        body['telegram'] = telegram_responses
    return body


def create_app(scanner: DipScanner = None, cache: ResultCache = None) -> Flask:
    """
    Build the Flask app

    Args:
        scanner: Scanner used for fresh scans (defaults to one sharing `cache`)
        cache: Result cache served by /get (defaults to the process-wide cache)
    """
    cache = cache if cache is not None else get_result_cache()
    scanner = scanner or DipScanner(cache=cache)

    app = Flask(__name__)

    @app.route('/', defaults={'path': ''}, methods=ALL_METHODS)
    @app.route('/<path:path>', methods=ALL_METHODS)
    def dispatch(path):
        return jsonify(handle_request(request.method, request.full_path.rstrip('?'), scanner, cache)), 200

    return app
