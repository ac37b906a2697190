"""Console sink - prints alerts to the local output stream."""
import logging
import sys
from typing import Dict, TextIO

from notifiers.delivery import delivery_result

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Writes alerts to stdout (or any text stream). Never fails."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream

    def deliver(self, message: str) -> Dict:
        stream = self.stream or sys.stdout
        print(f"[ALERT] {message}", file=stream)
        logger.debug("Alert written to console")
        return delivery_result(True, "console")
