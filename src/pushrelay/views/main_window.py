from __future__ import annotations

from datetime import datetime
from typing import Any

from PyQt6.QtGui import QCloseEvent, QGuiApplication
from PyQt6.QtWidgets import QLabel, QListWidget, QMainWindow, QPushButton, QVBoxLayout, QWidget

from ..models.payload import InboundMessage


class MainWindow(QMainWindow):
    """Token, connection status and the most recent push messages.

    While this window is active, pushes are shown here instead of as OS notifications.
    """

    def __init__(self, cfg_ns) -> None:
        super().__init__()
        self.setWindowTitle("PushRelay")
        self._cfg_ns = cfg_ns
        self._history_size = int(getattr(cfg_ns.app, "history_size", 50))
        self._token = ""

        central = QWidget(self)
        v = QVBoxLayout(central)

        project = QLabel(f"Project: {cfg_ns.firebase.project_id}", central)
        project.setProperty("pr", "muted")
        v.addWidget(project)

        self._status = QLabel("Connecting…", central)
        self._status.setProperty("pr", "status")
        v.addWidget(self._status)

        self._token_label = QLabel("Token: —", central)
        self._token_label.setWordWrap(True)
        v.addWidget(self._token_label)

        copy_btn = QPushButton("Copy token", central)
        copy_btn.clicked.connect(self.copy_token)
        v.addWidget(copy_btn)

        self._messages = QListWidget(central)
        v.addWidget(self._messages)

        self.setCentralWidget(central)
        self.resize(420, 360)

    def is_foreground(self) -> bool:
        return self.isVisible() and self.isActiveWindow()

    def set_token(self, token: str) -> None:
        self._token = token
        self._token_label.setText(f"Token: {token}")
        self.set_status("Listening for push messages")

    def set_status(self, text: str, error: bool = False) -> None:
        self._status.setText(text)
        self._status.setProperty("class", "error" if error else "")
        # Re-polish so the dynamic property takes effect
        self._status.style().unpolish(self._status)
        self._status.style().polish(self._status)

    def copy_token(self) -> None:
        if self._token:
            QGuiApplication.clipboard().setText(self._token)

    def add_message(self, payload: Any) -> None:
        message = InboundMessage.from_payload(payload)
        stamp = datetime.now().strftime("%H:%M:%S")
        self._messages.insertItem(0, f"{stamp}  {message.title}\n{message.body}")
        while self._messages.count() > self._history_size:
            self._messages.takeItem(self._messages.count() - 1)

    # Don’t quit the app when the main window is closed; just hide to tray
    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        try:
            event.ignore()
        except Exception:
            pass
        self.hide()
