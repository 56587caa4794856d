"""Status sink - keeps the latest status text for the user to read."""
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class StatusBoard:
    """
    In-memory status surface.

    Implements IStatusSink protocol. Only the latest message is kept;
    every update overwrites the previous one.
    """

    def __init__(self):
        self._message: Optional[str] = None
        self._listeners: List[Callable[[str], None]] = []

    @property
    def message(self) -> Optional[str]:
        return self._message

    def on_change(self, callback: Callable[[str], None]):
        """Subscribe to status updates."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def off_change(self, callback: Callable[[str], None]):
        """Unsubscribe from status updates."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def update(self, message: str) -> None:
        self._message = message
        logger.debug("status: %s", message)
        for callback in self._listeners[:]:
            try:
                callback(message)
            except Exception as e:
                logger.error(f"Error in status listener: {e}")
