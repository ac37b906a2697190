"""
Notifiers Module

Alert delivery sinks. Every notifier exposes the same single capability,
deliver(message) -> delivery result dict, so sinks can be swapped or
combined without subclassing.
"""

from notifiers.delivery import Notifier, delivery_result
from notifiers.console_notifier import ConsoleNotifier
from notifiers.telegram_notifier import TelegramNotifier

__all__ = [
    'Notifier',
    'delivery_result',
    'ConsoleNotifier',
    'TelegramNotifier',
]
