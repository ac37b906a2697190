from datetime import datetime, timedelta
import pytz
import config


def get_current_ist_time() -> datetime:
    """Get current time in IST timezone"""
    ist = pytz.timezone(config.MARKET_TIMEZONE)
    return datetime.now(ist)


def to_market_time(now: datetime) -> datetime:
    """Convert an aware datetime to market (IST) time"""
    return now.astimezone(pytz.timezone(config.MARKET_TIMEZONE))


def is_trading_day(now: datetime) -> bool:
    """
    Check if the given time falls on a weekday (Monday-Friday) in IST
    """
    # Saturday=5, Sunday=6
    return to_market_time(now).weekday() < 5


def get_alert_window(now: datetime, early_cutoff_minutes: int = None):
    """
    Get the alert window bounds for the IST trading day of `now`

    Args:
        now: Timezone-aware datetime (any timezone)
        early_cutoff_minutes: Minutes before close to stop alerting
                              (defaults to config.EARLY_CUTOFF_MINUTES)

    Returns:
        Tuple of (start, cutoff) IST datetimes on the same day as `now`
    """
    if early_cutoff_minutes is None:
        early_cutoff_minutes = config.EARLY_CUTOFF_MINUTES

    now = to_market_time(now)
    start = now.replace(hour=config.ALERT_START_HOUR, minute=config.ALERT_START_MINUTE,
                        second=0, microsecond=0)
    close = now.replace(hour=config.MARKET_CLOSE_HOUR, minute=config.MARKET_CLOSE_MINUTE,
                        second=0, microsecond=0)
    cutoff = close - timedelta(minutes=early_cutoff_minutes)
    return start, cutoff


def is_alert_window(now: datetime, early_cutoff_minutes: int = None) -> bool:
    """
    Check if `now` is inside the dip alert window
    Weekdays only, 9:20 AM IST up to 3:00 PM minus the early cutoff (both inclusive)
    """
    now = to_market_time(now)
    if not is_trading_day(now):
        return False

    start, cutoff = get_alert_window(now, early_cutoff_minutes)
    return start <= now <= cutoff


def get_market_status(now: datetime = None) -> dict:
    """
    Get alert window status information

    Returns:
        dict with keys: is_open, is_trading_day, window_start, window_cutoff, current_time
    """
    if now is None:
        now = get_current_ist_time()
    now = to_market_time(now)
    start, cutoff = get_alert_window(now)

    return {
        "is_open": is_alert_window(now),
        "is_trading_day": is_trading_day(now),
        "window_start": start.strftime("%H:%M"),
        "window_cutoff": cutoff.strftime("%H:%M"),
        "current_time": now.strftime("%Y-%m-%d %H:%M:%S %Z")
    }
