import math
from datetime import datetime
from typing import Dict, Optional

import config


def pct_change(latest, prior) -> Optional[float]:
    """
    Calculate percentage change from prior to latest

    Returns:
        Percent change (negative for a drop), or None if either value is
        not a finite number or prior is zero
    """
    try:
        if not math.isfinite(latest) or not math.isfinite(prior):
            return None
    except TypeError:
        return None
    if prior == 0:
        return None
    return (latest - prior) * 100 / prior


def is_dip(change: float, threshold: float = None) -> bool:
    """Dip when change is at or below the (negative) threshold"""
    if threshold is None:
        threshold = config.DIP_THRESHOLD_PCT
    return change <= threshold


def format_dip_alert(name: str, symbol: str, change: float, price: float,
                     prev_close: float, now: datetime) -> str:
    """
    Format dip alert message (Telegram Markdown)

    Args:
        name: Display name of the instrument
        symbol: Instrument symbol
        change: Percent change vs previous close
        price: Current price
        prev_close: Previous close
        now: IST time of the scan

    Returns:
        Formatted message string
    """
    return (
        f"🚨 *Dip Alert*\n"
        f"{name} ({symbol}) is {change:.2f}% vs prev close.\n"
        f"Price: ₹{price:.2f} | Prev: ₹{prev_close:.2f}\n"
        f"({now.strftime('%d %b %Y %H:%M')} IST)"
    )


def build_dip_record(instrument: Dict, quote: Dict, change: float,
                     now: datetime, telegram: Dict = None) -> Dict:
    """Build the dip record returned by a scan"""
    return {
        'name': instrument['name'],
        'symbol': instrument['symbol'],
        'price': quote['price'],
        'prevClose': quote['prev_close'],
        'change': round(change, 2),
        'time': now.isoformat(),
        'telegram': telegram
    }
