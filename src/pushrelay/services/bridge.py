from __future__ import annotations

from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal as Signal


class MessageBridge(QObject):
    """Hands listener-thread callbacks to the Qt main thread via queued signals."""

    message_received = Signal(object)
    token_received = Signal(str)
    error_occurred = Signal(str)

    def on_message(self, payload: Any) -> None:
        self.message_received.emit(payload)

    def on_token(self, token: str) -> None:
        self.token_received.emit(token)

    def on_error(self, exc: BaseException) -> None:
        self.error_occurred.emit(str(exc) or type(exc).__name__)
