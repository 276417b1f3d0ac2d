"""OS notifications abstraction.

Notifications go through the application's system tray integration
(QSystemTrayIcon.showMessage). On Windows and most Linux desktops Qt routes
this to native notifications. Falls back to stderr if no tray is present.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from ..models.payload import NotificationOptions
from .icons import IconResolver

log = logging.getLogger(__name__)

# Assigned by main once the tray icon exists
tray: Any = None


def _to_stderr(title: str, message: str) -> None:
    print(f"[Notification] {title}: {message}", file=sys.stderr)


def _load_qicon(path: Path) -> Any:
    from PyQt6.QtGui import QIcon  # type: ignore

    return QIcon(str(path))


class StderrDisplay:
    """Display capability used when no system tray is available."""

    def show(self, title: str, options: NotificationOptions) -> None:
        _to_stderr(title, options.body)


class TrayDisplay:
    """Display capability backed by a QSystemTrayIcon. Never raises."""

    def __init__(self, tray_icon: Any, icons: Optional[IconResolver] = None) -> None:
        self._tray = tray_icon
        self._icons = icons or IconResolver()

    def show(self, title: str, options: NotificationOptions) -> None:
        try:
            path = self._icons.resolve(options.icon)
            if path is not None:
                self._tray.showMessage(title, options.body, _load_qicon(path))
            else:
                self._tray.showMessage(title, options.body)
            return
        except Exception as e:
            log.warning("Tray notification failed, falling back to stderr: %s", e)
        _to_stderr(title, options.body)


def notify(title: str, message: str) -> None:
    """Show an app-level notice using the tray if available, else stderr. Never raises."""
    if tray is not None:
        try:
            tray.showMessage(title, message)
            return
        except Exception:
            # Ignore Qt usage issues and fall back
            pass
    _to_stderr(title, message)
