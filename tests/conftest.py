import os
import sys
from datetime import datetime
from unittest.mock import Mock

import pytest
import pytz

# Project modules live at the repository root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from dip_scanner import DipScanner
from rate_limiter import RateLimiter
from result_cache import ResultCache

IST = pytz.timezone('Asia/Kolkata')


def ist(year, month, day, hour=0, minute=0, second=0, microsecond=0):
    """Timezone-aware IST datetime"""
    return IST.localize(datetime(year, month, day, hour, minute, second, microsecond))


# Monday 6 Jan 2025, inside the alert window
MONDAY_MORNING = ist(2025, 1, 6, 10, 30)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of the developer's .env"""
    monkeypatch.setattr(config, 'API_KEY', 'test-key')
    monkeypatch.setattr(config, 'TG_BOT_TOKEN', None)
    monkeypatch.setattr(config, 'TG_CHAT_ID', None)
    monkeypatch.setattr(config, 'EARLY_CUTOFF_MINUTES', 15)


def make_quote(symbol, price, prev_close, source='GLOBAL_QUOTE'):
    return {'symbol': symbol, 'price': price, 'prev_close': prev_close, 'source': source}


@pytest.fixture
def watchlist():
    return [
        {'name': 'Alpha ETF (A)', 'symbol': 'A'},
        {'name': 'Beta ETF (B)', 'symbol': 'B'},
        {'name': 'Gamma ETF (C)', 'symbol': 'C'},
    ]


@pytest.fixture
def mock_client():
    """Quote source returning quotes from `mock_client.quotes` by symbol"""
    client = Mock()
    client.quotes = {}
    client.fetch_quote.side_effect = lambda symbol: client.quotes.get(symbol)
    return client


@pytest.fixture
def cache():
    return ResultCache()


@pytest.fixture
def sleep_mock():
    return Mock()


@pytest.fixture
def make_scanner(mock_client, cache, sleep_mock, watchlist):
    """Factory for scanners wired to mocks; pass now=... to move the clock"""
    def _make(now=MONDAY_MORNING, **kwargs):
        params = dict(
            client=mock_client,
            cache=cache,
            rate_limiter=RateLimiter(1.3, sleep_func=sleep_mock),
            clock=lambda: now,
            watchlist=watchlist,
        )
        params.update(kwargs)
        return DipScanner(**params)
    return _make


def mock_response(payload):
    """requests.Response stand-in returning `payload` as JSON"""
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response
