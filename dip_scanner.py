import logging
import threading
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional

import requests

from alphavantage_client import AlphaVantageClient
from dip_detector import pct_change, is_dip, format_dip_alert, build_dip_record
from market_utils import get_current_ist_time, is_alert_window, to_market_time
from notifiers import ConsoleNotifier, Notifier, TelegramNotifier
from rate_limiter import RateLimiter
from result_cache import ResultCache, get_result_cache
import config

logger = logging.getLogger(__name__)

OUTSIDE_WINDOW_MESSAGE = "Outside alert window"


class DipScanner:
    """Scans the watchlist for dips vs previous close and sends alerts"""

    def __init__(self, client: AlphaVantageClient = None, cache: ResultCache = None,
                 rate_limiter: RateLimiter = None, telegram: TelegramNotifier = None,
                 clock: Callable = None, watchlist: List[Dict] = None):
        """
        Args:
            client: Quote source (defaults to AlphaVantageClient from config)
            cache: Result cache updated after each scan (defaults to the process-wide cache)
            rate_limiter: Pacing between quote fetches
            telegram: Telegram notifier; built from config when credentials are set
            clock: Returns the current IST datetime
            watchlist: Instruments to scan, in order (defaults to config.WATCHLIST)
        """
        self.client = client or AlphaVantageClient()
        self.cache = cache if cache is not None else get_result_cache()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.telegram = telegram
        self.clock = clock or get_current_ist_time
        self.watchlist = watchlist if watchlist is not None else config.WATCHLIST

        # One scan at a time - overlapping requests queue up behind the running scan
        self._scan_lock = threading.Lock()

    def _telegram_notifier(self) -> Optional[TelegramNotifier]:
        if self.telegram is not None:
            return self.telegram
        telegram = TelegramNotifier.from_config()
        return telegram if telegram.is_configured else None

    def scan(self, notifier: Notifier = None, suppress_notify: bool = False) -> Dict:
        """
        Check every watchlist instrument for a dip

        Args:
            notifier: Primary notifier (defaults to ConsoleNotifier)
            suppress_notify: Skip all alert delivery, only collect dips

        Returns:
            dict with keys: ok, dips (and message when the scan did not run)
        """
        with self._scan_lock:
            return self._scan(notifier or ConsoleNotifier(), suppress_notify)

    def _scan(self, notifier: Notifier, suppress_notify: bool) -> Dict:
        now = to_market_time(self.clock())
        if not is_alert_window(now):
            logger.info(f"{now.strftime('%H:%M')} IST is outside the alert window, skipping scan")
            return {'ok': False, 'message': OUTSIDE_WINDOW_MESSAGE, 'dips': []}

        telegram = None if suppress_notify else self._telegram_notifier()
        self.rate_limiter.reset()
        start_time = time.time()
        dips = []

        logger.info(f"Scanning {len(self.watchlist)} instruments for dips "
                    f"<= {config.DIP_THRESHOLD_PCT}% vs prev close")

        for item in self.watchlist:
            try:
                dip = self._check_instrument(item, now, notifier, telegram, suppress_notify)
            except (requests.exceptions.RequestException, ValueError, KeyError) as e:
                logger.error(f"{item['symbol']}: Error during scan - {e}")
                continue

            if dip is not None:
                dips.append(dip)

        self.cache.set_last(dips)

        elapsed = time.time() - start_time
        logger.info(f"Scan complete in {elapsed:.1f}s: {len(dips)} dip(s) found")
        return {'ok': True, 'dips': dips}

    def _check_instrument(self, item: Dict, now: datetime, notifier: Notifier,
                          telegram: Optional[Notifier], suppress_notify: bool) -> Optional[Dict]:
        """Fetch, evaluate and (on a dip) alert for one instrument"""
        symbol = item['symbol']

        self.rate_limiter.wait()
        quote = self.client.fetch_quote(symbol)
        if not quote:
            logger.debug(f"{symbol}: No quote, skipping")
            return None

        change = pct_change(quote['price'], quote['prev_close'])
        if change is None:
            logger.debug(f"{symbol}: Unusable price data, skipping")
            return None

        logger.debug(f"{symbol}: ₹{quote['price']:.2f} vs ₹{quote['prev_close']:.2f} "
                     f"({change:+.2f}%, {quote['source']})")
        if not is_dip(change):
            return None

        logger.info(f"{symbol}: Dip detected ({change:.2f}%)")
        message = format_dip_alert(item['name'], symbol, change,
                                   quote['price'], quote['prev_close'], now)

        telegram_result = None
        if not suppress_notify:
            notifier.deliver(message)
            if telegram is not None:
                telegram_result = telegram.deliver(message)

        return build_dip_record(item, quote, change, now, telegram_result)
