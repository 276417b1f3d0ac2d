"""Background notification relay.

Turns the notification fields of an inbound push into one call on a display
capability. Holds no state between messages.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol

from ..models.payload import InboundMessage, NotificationOptions

log = logging.getLogger(__name__)

NOTIFICATION_ICON = "/icons/Icon-192.png"


class NotificationDisplay(Protocol):
    def show(self, title: str, options: NotificationOptions) -> None: ...


class NotificationHandler(Protocol):
    def handle(self, payload: Any, display: NotificationDisplay) -> None: ...


class BackgroundNotificationRelay:
    """Show a system notification for each push received while in the background.

    Raises MalformedPayloadError (without touching the display) when the payload
    has no notification title/body.
    """

    def handle(self, payload: Any, display: NotificationDisplay) -> None:
        message = InboundMessage.from_payload(payload)
        options = NotificationOptions(body=message.body, icon=NOTIFICATION_ICON)
        log.debug("Showing notification %r (message_id=%s)", message.title, message.message_id)
        display.show(message.title, options)
