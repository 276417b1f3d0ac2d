from __future__ import annotations

from typing import Optional

from PyQt6.QtWidgets import QApplication

from .utils.qt_helpers import apply_modern_style


def build_app(existing: Optional[QApplication] = None, theme: str = "auto") -> QApplication:
    """Return the styled QApplication for the tray relay.

    Closing the last window leaves the app running in the tray.
    """
    app = existing or QApplication.instance()  # type: ignore[assignment]
    if app is None:
        app = QApplication([])
    app.setApplicationName("PushRelay")
    app.setQuitOnLastWindowClosed(False)
    apply_modern_style(app, theme=theme)
    return app
