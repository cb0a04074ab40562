"""One-shot triggers for running a capture phase at the right moment.

Hosts often have no hook for "the collection is now in the state we want",
only a stream of notifications (log lines, lifecycle events). OneShotTrigger
listens on such a stream, runs its callback for the first matching message
and unhooks itself.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal, SignalInstance

logger = logging.getLogger(__name__)


class OneShotTrigger(QObject):
    """Runs a callback exactly once.

    Signals:
        fired: Emitted with the accepted message right before the callback runs
    """

    fired = Signal(str)

    def __init__(
        self,
        callback: Callable[[], Any],
        message: str | None = None,
        predicate: Callable[[str], bool] | None = None,
        parent: QObject | None = None,
    ):
        """Initialize trigger.

        Args:
            callback: Routine to run once (a capture phase)
            message: Notification text that fires the trigger
            predicate: Custom matcher; takes precedence over message
            parent: Optional Qt parent
        """
        super().__init__(parent)
        if predicate is None and message is None:
            raise ValueError("either message or predicate is required")
        self._callback = callback
        self._predicate = predicate or (lambda text: text == message)
        self._source: SignalInstance | None = None
        self._done = False
        self.result: Any = None

    @property
    def done(self) -> bool:
        return self._done

    def watch(self, source: SignalInstance) -> None:
        """Subscribe to a signal that carries notification text."""
        if self._done:
            return
        self._unwatch()
        self._source = source
        source.connect(self._on_message)

    def fire(self, message: str = "") -> bool:
        """Run the callback now unless it already ran.

        Returns:
            True if this call ran the callback
        """
        if self._done:
            return False
        self._done = True
        self._unwatch()
        self.fired.emit(message)
        self.result = self._callback()
        return True

    def _on_message(self, message: str) -> None:
        if self._done or not self._predicate(message):
            return
        logger.info("trigger matched notification %r", message)
        self.fire(message)

    def _unwatch(self) -> None:
        if self._source is None:
            return
        try:
            self._source.disconnect(self._on_message)
        except (RuntimeError, TypeError):
            # Source object already destroyed
            pass
        self._source = None
