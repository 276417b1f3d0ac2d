from __future__ import annotations

import logging
from types import SimpleNamespace
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except Exception:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

from platformdirs import PlatformDirs

log = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
APP_NAME = "PushRelay"
APP_AUTHOR = "PushRelay"

FIREBASE_KEYS = (
    "api_key",
    "auth_domain",
    "project_id",
    "storage_bucket",
    "messaging_sender_id",
    "app_id",
)

# Written to the user data folder on first run
_DEFAULT_CONFIG_TOML = b"""
[firebase]
api_key = "AIzaSyDummyKeyForTesting"
auth_domain = "fastfoodgo-deliver.firebaseapp.com"
project_id = "fastfoodgo-deliver"
storage_bucket = "fastfoodgo-deliver.appspot.com"
messaging_sender_id = "123456789"
app_id = "1:123456789:web:abcdef123456"

[app]
asset_root = ""
theme = "auto"
history_size = 50
show_connected_notice = true
log_level = "WARNING"
"""


def _load_from_path(p: Path) -> Dict[str, Any]:
    with p.open("rb") as f:
        return tomllib.load(f)


def data_dir() -> Path:
    """Folder holding the user config and the log file."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=False)
    p = Path(dirs.user_data_dir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _seed_candidates() -> list[Path]:
    """A config.toml at the project root (development runs) or shipped in the package."""
    here = Path(__file__).resolve()
    return [here.parents[2] / CONFIG_FILENAME, here.parent / "resources" / CONFIG_FILENAME]


def _write_default_to(path: Path) -> None:
    path.write_bytes(_DEFAULT_CONFIG_TOML)
    log.info("Created default config at %s", path)


def load_config(path: Optional[Path | str] = None) -> SimpleNamespace:
    """Load configuration into a SimpleNamespace with `firebase` and `app` sections.

    Behavior:
    - If an explicit `path` is provided and the file doesn't exist, raise FileNotFoundError.
    - If `path` is None, prefer the user data folder; if no config exists there, seed it from
      the project root or the embedded defaults and load it.
    """
    data: Dict[str, Any]

    if path is not None:
        cfg_path = Path(path)
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config file not found at {cfg_path}")
        data = _load_from_path(cfg_path)
    else:
        user_cfg = data_dir() / CONFIG_FILENAME
        if not user_cfg.exists():
            seeded = False
            for cand in _seed_candidates():
                try:
                    if cand.exists():
                        user_cfg.write_bytes(cand.read_bytes())
                        log.info("Copied default config from %s to %s", cand, user_cfg)
                        seeded = True
                        break
                except OSError:
                    continue
            if not seeded:
                _write_default_to(user_cfg)
        data = _load_from_path(user_cfg)

    # Project identifiers are plain strings; emptiness is checked at initialization
    fb = data.get("firebase", {})
    firebase = SimpleNamespace(**{key: str(fb.get(key, "")) for key in FIREBASE_KEYS})

    app = data.get("app", {})
    asset_root = str(app.get("asset_root", ""))
    theme = str(app.get("theme", "auto")).lower()
    if theme not in ("auto", "dark", "light"):
        log.warning("Unknown theme %r, using 'auto'", theme)
        theme = "auto"
    history_size = max(0, int(app.get("history_size", 50)))
    show_connected_notice = bool(app.get("show_connected_notice", True))
    log_level = str(app.get("log_level", "WARNING")).upper()

    ns = SimpleNamespace(
        firebase=firebase,
        app=SimpleNamespace(
            asset_root=asset_root,
            theme=theme,
            history_size=history_size,
            show_connected_notice=show_connected_notice,
            log_level=log_level,
        ),
    )
    log.debug(
        "Loaded config: project_id=%s, sender_id=%s, asset_root=%r, theme=%s, history_size=%s, log_level=%s",
        firebase.project_id, firebase.messaging_sender_id, asset_root, theme, history_size, log_level,
    )
    return ns
