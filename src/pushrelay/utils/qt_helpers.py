from __future__ import annotations

try:
    from PyQt6.QtGui import QFont
    from PyQt6.QtWidgets import QApplication
    import qdarktheme  # type: ignore
except Exception:
    # In test environments, a minimal dummy PyQt6 or missing qdarktheme may be present; gracefully degrade.
    QFont = object  # type: ignore
    QApplication = object  # type: ignore
    qdarktheme = None  # type: ignore


_EXTRA_QSS = """
QPushButton, QLineEdit, QPlainTextEdit, QListWidget {
    border-radius: 8px;
    padding: 6px 10px;
}
QMenu::item { border-radius: 6px; padding: 6px 12px; }

/* PushRelay window styles */
QLabel[pr="muted"] { color: palette(mid); }
QLabel[pr="status"] { font-weight: 600; }
QLabel[pr="status"][class="error"] { color: #c62828; }
"""


def apply_modern_style(app: QApplication, theme: str = "auto") -> None:
    """Apply PyQtDarkTheme as the single source of styling.

    theme is 'auto' | 'dark' | 'light'; 'auto' follows the OS theme.
    """
    if qdarktheme is not None:
        if hasattr(qdarktheme, "setup_theme"):
            qdarktheme.setup_theme(theme=theme, corner_shape="rounded", additional_qss=_EXTRA_QSS)
        elif hasattr(qdarktheme, "load_stylesheet"):
            # PyQtDarkTheme < 2.0 only offers the stylesheet string API
            base_theme = theme if theme in ("dark", "light") else "dark"
            try:
                app.setStyleSheet(qdarktheme.load_stylesheet(base_theme) + _EXTRA_QSS)
            except Exception:
                pass

    # Slightly larger, readable default font
    f: QFont = app.font()
    if hasattr(f, "pointSize") and f.pointSize() > 0:
        f.setPointSize(max(f.pointSize(), 10))
    elif hasattr(f, "pixelSize"):
        f.setPixelSize(max(f.pixelSize(), 14))
    try:
        app.setFont(f)
    except Exception:
        pass
