import os
import sys
from pathlib import Path

import pytest

def pytest_sessionstart(session):
    # Ensure headless Qt where applicable
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    # Ensure src is on sys.path without needing plugins
    root = Path(__file__).resolve().parents[1]
    src = root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
