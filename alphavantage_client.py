"""
Alpha Vantage quote source.

Fetches the current price and previous close for one symbol. The real-time
GLOBAL_QUOTE endpoint is tried first; when it lacks price or previous close
the quote is derived from the 5-minute intraday series (current price) and
the daily series (previous close).

Every failure path returns None - a symbol that cannot be quoted is simply
skipped for the current scan.
"""

import logging
from typing import Dict, Optional

import pandas as pd
import requests

import config

logger = logging.getLogger(__name__)

SOURCE_PRIMARY = 'GLOBAL_QUOTE'
SOURCE_DERIVED = 'INTRADAY+DAILY'

CLOSE_FIELD = '4. close'

# Transport problems plus anything a malformed series payload can raise
SERIES_FETCH_ERRORS = (requests.exceptions.RequestException, ValueError, KeyError,
                       TypeError, IndexError, AttributeError)


def _to_float(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _closes_from_series(series: Dict) -> pd.Series:
    """
    Convert an Alpha Vantage time series payload to a chronologically sorted close series

    Args:
        series: Mapping of timestamp string -> bar dict ("1. open", ..., "4. close")

    Returns:
        Float Series of closes indexed by timestamp, oldest first
    """
    df = pd.DataFrame.from_dict(series, orient='index')
    df.index = pd.to_datetime(df.index)
    df = df.sort_index()
    return df[CLOSE_FIELD].astype(float)


class AlphaVantageClient:
    """Quote source backed by the Alpha Vantage REST API"""

    def __init__(self, api_key: str = None, base_url: str = None):
        self.api_key = api_key if api_key is not None else config.API_KEY
        self.base_url = base_url or config.ALPHAVANTAGE_BASE_URL

    def _query(self, params: Dict, timeout: float) -> Dict:
        """Run one API query and return the decoded JSON body"""
        query = dict(params, apikey=self.api_key)
        response = requests.get(self.base_url, params=query, timeout=timeout)
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected payload type: {type(data).__name__}")

        # Throttling and bad-key responses come back as 200 with a note instead of data
        for key in ('Note', 'Information', 'Error Message'):
            if key in data:
                logger.warning(f"Alpha Vantage {params.get('function')} {params.get('symbol')}: {data[key]}")

        return data

    def fetch_quote(self, symbol: str) -> Optional[Dict]:
        """
        Fetch current price and previous close for a symbol

        Args:
            symbol: Alpha Vantage symbol (e.g. 'NIFTYBEES')

        Returns:
            Quote dict with symbol, price, prev_close and source,
            or None if the symbol could not be quoted
        """
        try:
            data = self._query({'function': 'GLOBAL_QUOTE', 'symbol': symbol},
                               timeout=config.QUOTE_TIMEOUT_SECONDS)
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"{symbol}: GLOBAL_QUOTE request failed - {e}")
            return None

        quote = data.get('Global Quote')
        if not isinstance(quote, dict):
            quote = {}
        price = _to_float(quote.get('05. price'))
        prev_close = _to_float(quote.get('08. previous close'))

        if price is None or prev_close is None:
            logger.info(f"{symbol}: GLOBAL_QUOTE incomplete, deriving from intraday + daily series")
            return self.fetch_derived_quote(symbol)

        return {
            'symbol': symbol,
            'price': price,
            'prev_close': prev_close,
            'source': SOURCE_PRIMARY
        }

    def fetch_derived_quote(self, symbol: str) -> Optional[Dict]:
        """Build a quote from the latest intraday bar and the prior daily close"""
        price = self.fetch_intraday_price(symbol)
        if price is None:
            return None

        prev_close = self.fetch_daily_prev_close(symbol)
        if prev_close is None:
            return None

        return {
            'symbol': symbol,
            'price': price,
            'prev_close': prev_close,
            'source': SOURCE_DERIVED
        }

    def fetch_intraday_price(self, symbol: str) -> Optional[float]:
        """
        Get the close of the most recent intraday bar

        Returns:
            Latest close, or None on any request/parse failure
        """
        series_key = f"Time Series ({config.INTRADAY_INTERVAL})"
        try:
            data = self._query({
                'function': 'TIME_SERIES_INTRADAY',
                'symbol': symbol,
                'interval': config.INTRADAY_INTERVAL,
                'outputsize': 'compact'
            }, timeout=config.INTRADAY_TIMEOUT_SECONDS)

            series = data.get(series_key)
            if not series or not isinstance(series, dict):
                logger.warning(f"{symbol}: No intraday series in response")
                return None

            closes = _closes_from_series(series)
            return float(closes.iloc[-1])

        except SERIES_FETCH_ERRORS as e:
            logger.warning(f"{symbol}: Intraday fetch failed - {e}")
            return None

    def fetch_daily_prev_close(self, symbol: str) -> Optional[float]:
        """
        Get the previous trading day's close from the daily series

        When only one day is available its close is used as the previous close.

        Returns:
            Previous close, or None on any request/parse failure
        """
        try:
            data = self._query({
                'function': 'TIME_SERIES_DAILY_ADJUSTED',
                'symbol': symbol,
                'outputsize': 'compact'
            }, timeout=config.DAILY_TIMEOUT_SECONDS)

            series = data.get('Time Series (Daily)')
            if not series or not isinstance(series, dict):
                logger.warning(f"{symbol}: No daily series in response")
                return None

            closes = _closes_from_series(series)
            if len(closes) >= 2:
                return float(closes.iloc[-2])
            return float(closes.iloc[-1])

        except SERIES_FETCH_ERRORS as e:
            logger.warning(f"{symbol}: Daily fetch failed - {e}")
            return None
