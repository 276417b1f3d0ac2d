import sys
import logging

# Allow running as a script (python path/to/pushrelay/main.py) by adding src to sys.path
try:
    if not __package__:
        from pathlib import Path as _Path
        _src = _Path(__file__).resolve().parents[1]
        if str(_src) not in sys.path:
            sys.path.insert(0, str(_src))
except Exception:
    pass

from PyQt6.QtWidgets import QApplication, QSystemTrayIcon, QMenu, QStyle
from PyQt6.QtGui import QIcon, QAction

try:
    from .app import build_app
    from .config import load_config, data_dir
    from .services import notifier
    from .services.bridge import MessageBridge
    from .services.dispatch import MessageDispatcher
    from .services.icons import IconResolver
    from .services.messaging import InitializationError, MessagingConfig, initialize_app
    from .services.relay import BackgroundNotificationRelay, NOTIFICATION_ICON
    from .views.main_window import MainWindow
except ImportError:
    from pushrelay.app import build_app
    from pushrelay.config import load_config, data_dir
    from pushrelay.services import notifier
    from pushrelay.services.bridge import MessageBridge
    from pushrelay.services.dispatch import MessageDispatcher
    from pushrelay.services.icons import IconResolver
    from pushrelay.services.messaging import InitializationError, MessagingConfig, initialize_app
    from pushrelay.services.relay import BackgroundNotificationRelay, NOTIFICATION_ICON
    from pushrelay.views.main_window import MainWindow


def _load_app_icon(icons: IconResolver) -> QIcon:
    """Use the notification icon for the tray too, falling back to a system icon."""
    path = icons.resolve(NOTIFICATION_ICON)
    if path is not None:
        return QIcon(str(path))
    try:
        app = QApplication.instance()
        if app is not None:
            return app.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
    except Exception:
        pass
    return QIcon()


def create_tray_icon(app: QApplication, icon: QIcon) -> QSystemTrayIcon:
    tray = QSystemTrayIcon(icon, app)

    menu = QMenu()
    quit_action = QAction("Quit", menu)
    quit_action.triggered.connect(app.quit)
    menu.addAction(quit_action)

    tray.setContextMenu(menu)
    tray.setToolTip("PushRelay")
    tray.show()
    return tray


def _setup_file_logging(level_name: str) -> None:
    log = logging.getLogger("pushrelay")
    try:
        logfile = data_dir() / "pushrelay.log"
        root_logger = logging.getLogger()
        level = getattr(logging, level_name, logging.INFO)
        root_logger.setLevel(level)
        # Avoid adding duplicate file handlers
        for h in root_logger.handlers:
            if isinstance(h, logging.FileHandler) and str(getattr(h, "baseFilename", "")) == str(logfile):
                return
        fh = logging.FileHandler(str(logfile), encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root_logger.addHandler(fh)
        log.info("Logging to %s (level %s)", logfile, level_name)
    except Exception as e:
        log.warning("File logging unavailable: %s", e)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log = logging.getLogger("pushrelay")

    ns = load_config()
    cfg = ns.app
    _setup_file_logging(str(getattr(cfg, "log_level", "INFO")).upper())

    try:
        messaging = initialize_app(MessagingConfig.from_namespace(ns.firebase))
    except InitializationError as e:
        log.error("Cannot start: %s", e)
        return 1

    app = build_app(theme=str(getattr(cfg, "theme", "auto")))
    icons = IconResolver(cfg.asset_root)
    app_icon = _load_app_icon(icons)
    app.setWindowIcon(app_icon)

    # Keep references so they're not garbage-collected
    if QSystemTrayIcon.isSystemTrayAvailable():
        tray = create_tray_icon(app, app_icon)
        display = notifier.TrayDisplay(tray, icons)
        notifier.tray = tray
    else:
        log.warning("No system tray available; notifications go to stderr")
        tray = None
        display = notifier.StderrDisplay()

    main_window = MainWindow(ns)

    if tray is not None:
        menu = tray.contextMenu()
        open_action = QAction("Open PushRelay…", menu)

        def open_main_window():
            main_window.show()
            main_window.raise_()
            main_window.activateWindow()

        open_action.triggered.connect(open_main_window)
        menu.insertAction(menu.actions()[0], open_action)

        def _on_tray_activated(reason):
            if reason in (
                QSystemTrayIcon.ActivationReason.Trigger,
                QSystemTrayIcon.ActivationReason.DoubleClick,
            ):
                open_main_window()

        tray.activated.connect(_on_tray_activated)
    else:
        main_window.show()

    dispatcher = MessageDispatcher(
        BackgroundNotificationRelay(),
        display,
        is_foreground=main_window.is_foreground,
        foreground_sink=main_window.add_message,
    )

    bridge = MessageBridge()
    bridge.message_received.connect(dispatcher.dispatch)
    bridge.token_received.connect(main_window.set_token)
    bridge.error_occurred.connect(lambda msg: main_window.set_status(f"Messaging unavailable: {msg}", error=True))
    if getattr(cfg, "show_connected_notice", True):
        bridge.token_received.connect(lambda _t: notifier.notify("PushRelay", "Listening for push messages"))

    log.info("Starting PushRelay for project %s", messaging.config.project_id)
    messaging.listen(bridge.on_message, on_token=bridge.on_token, on_error=bridge.on_error)

    def _cleanup():
        messaging.stop()
        if tray is not None:
            tray.hide()
        main_window.hide()

    app.aboutToQuit.connect(_cleanup)

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
