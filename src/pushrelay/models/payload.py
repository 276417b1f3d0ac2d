"""Typed view of an inbound push payload.

The provider hands over a decoded JSON mapping such as::

    {"notification": {"title": "...", "body": "..."}, "data": {...}, "fcmMessageId": "..."}

Only the notification title and body are required; everything else is optional.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


class MalformedPayloadError(ValueError):
    """Raised when a payload lacks the notification fields the relay needs."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class NotificationOptions:
    body: str
    icon: str


@dataclass(frozen=True)
class InboundMessage:
    title: str
    body: str
    data: Dict[str, Any] = field(default_factory=dict)
    message_id: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "InboundMessage":
        if not isinstance(payload, Mapping):
            raise MalformedPayloadError("notification", f"Payload must be a mapping, got {type(payload).__name__}")
        notification = payload.get("notification")
        if not isinstance(notification, Mapping):
            raise MalformedPayloadError("notification", "Payload has no 'notification' object")
        title = notification.get("title")
        if not isinstance(title, str):
            raise MalformedPayloadError("notification.title", "Notification has no text 'title'")
        body = notification.get("body")
        if not isinstance(body, str):
            raise MalformedPayloadError("notification.body", "Notification has no text 'body'")

        data = payload.get("data")
        message_id = payload.get("fcmMessageId")
        return cls(
            title=title,
            body=body,
            data=dict(data) if isinstance(data, Mapping) else {},
            message_id=str(message_id) if message_id is not None else None,
        )
