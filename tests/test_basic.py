import sys
import types


def _stub(name, *attrs, **values):
    m = types.ModuleType(name)
    for n in attrs:
        setattr(m, n, object)
    for k, v in values.items():
        setattr(m, k, v)
    return m


def test_import_main(monkeypatch):
    # Install minimal dummy PyQt6 modules to satisfy imports in main.py
    qtcore = _stub("PyQt6.QtCore", "QObject", "QTimer", pyqtSignal=lambda *a, **k: None)
    qtwidgets = _stub(
        "PyQt6.QtWidgets",
        "QApplication", "QSystemTrayIcon", "QMenu", "QStyle", "QLabel", "QListWidget",
        "QMainWindow", "QPushButton", "QVBoxLayout", "QWidget",
    )
    qtgui = _stub("PyQt6.QtGui", "QIcon", "QAction", "QCloseEvent", "QGuiApplication", "QFont")
    pyqt6 = _stub("PyQt6", QtCore=qtcore, QtWidgets=qtwidgets, QtGui=qtgui)
    monkeypatch.setitem(sys.modules, "PyQt6", pyqt6)
    monkeypatch.setitem(sys.modules, "PyQt6.QtCore", qtcore)
    monkeypatch.setitem(sys.modules, "PyQt6.QtWidgets", qtwidgets)
    monkeypatch.setitem(sys.modules, "PyQt6.QtGui", qtgui)

    before = {name for name in sys.modules if name.startswith("pushrelay")}
    try:
        import pushrelay.main as main_mod

        assert callable(main_mod.main)
        assert main_mod.NOTIFICATION_ICON == "/icons/Icon-192.png"
    finally:
        # Drop modules bound to the dummy Qt so later tests get the real ones
        for name in [n for n in sys.modules if n.startswith("pushrelay") and n not in before]:
            del sys.modules[name]
