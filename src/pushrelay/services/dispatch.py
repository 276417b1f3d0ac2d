from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..models.payload import MalformedPayloadError
from .relay import NotificationDisplay, NotificationHandler

log = logging.getLogger(__name__)


class MessageDispatcher:
    """Route each inbound payload to the foreground sink or the background handler.

    Failures are contained per message so one bad delivery never affects the next.
    """

    def __init__(
        self,
        handler: NotificationHandler,
        display: NotificationDisplay,
        is_foreground: Optional[Callable[[], bool]] = None,
        foreground_sink: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self._handler = handler
        self._display = display
        self._is_foreground = is_foreground
        self._foreground_sink = foreground_sink

    def _in_foreground(self) -> bool:
        if self._is_foreground is None or self._foreground_sink is None:
            return False
        try:
            return bool(self._is_foreground())
        except Exception as e:
            log.debug("Foreground check failed, treating as background: %s", e)
            return False

    def dispatch(self, payload: Any) -> None:
        try:
            if self._in_foreground():
                self._foreground_sink(payload)  # type: ignore[misc]
                return
            self._handler.handle(payload, self._display)
        except MalformedPayloadError as e:
            log.warning("Dropped push message without %s: %s", e.field, e)
        except Exception:
            log.exception("Failed to handle push message")
