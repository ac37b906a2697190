import logging
import time

import config

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Fixed-interval pacing between sequential API calls.

    wait() is called before every request; the first call of a run goes
    through immediately, every later call sleeps for the interval.
    """

    def __init__(self, interval_seconds: float = None, sleep_func=time.sleep):
        """
        Args:
            interval_seconds: Pause between requests (defaults to config.REQUEST_DELAY_SECONDS)
            sleep_func: Sleep implementation, swapped out in tests
        """
        if interval_seconds is None:
            interval_seconds = config.REQUEST_DELAY_SECONDS
        self.interval_seconds = interval_seconds
        self.sleep_func = sleep_func
        self.call_count = 0

    def wait(self):
        if self.call_count > 0 and self.interval_seconds > 0:
            logger.debug(f"Rate limit: sleeping {self.interval_seconds}s")
            self.sleep_func(self.interval_seconds)
        self.call_count += 1

    def reset(self):
        """Start a new run (next wait() does not sleep)"""
        self.call_count = 0
