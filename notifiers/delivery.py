"""Delivery capability shared by all notifiers."""
from typing import Any, Dict, Protocol


def delivery_result(delivered: bool, detail: Any = None) -> Dict:
    """
    Build a delivery result.

    Args:
        delivered: Whether the sink accepted the message
        detail: Failure reason or sink response payload

    Returns:
        dict with keys: delivered, detail
    """
    return {'delivered': delivered, 'detail': detail}


class Notifier(Protocol):
    """Anything that can deliver an alert message."""

    def deliver(self, message: str) -> Dict:
        ...
