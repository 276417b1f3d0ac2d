from pathlib import Path
import textwrap
import pytest

from pushrelay.config import load_config
import pushrelay.config as cfgmod


def write_tmp_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"

    class DummyPlatformDirs:
        def __init__(self, appname: str, appauthor: str, roaming: bool = False):
            self.user_data_dir = str(data_dir)

    monkeypatch.setattr(cfgmod, "PlatformDirs", DummyPlatformDirs)
    # Keep a developer's project-root config.toml out of the seeding path
    monkeypatch.setattr(cfgmod, "_seed_candidates", lambda: [])
    return data_dir


def test_load_config_from_custom_path(tmp_path: Path):
    cfg_path = write_tmp_config(
        tmp_path,
        """
        [firebase]
        api_key = "key"
        auth_domain = "demo.firebaseapp.com"
        project_id = "demo"
        storage_bucket = "demo.appspot.com"
        messaging_sender_id = "42"
        app_id = "1:42:web:abc"

        [app]
        asset_root = "https://example.com/static"
        theme = "dark"
        history_size = 10
        show_connected_notice = false
        log_level = "debug"
        """,
    )
    ns = load_config(cfg_path)
    assert ns.firebase.api_key == "key"
    assert ns.firebase.project_id == "demo"
    assert ns.firebase.messaging_sender_id == "42"
    assert ns.firebase.app_id == "1:42:web:abc"
    assert ns.app.asset_root == "https://example.com/static"
    assert ns.app.theme == "dark"
    assert ns.app.history_size == 10
    assert ns.app.show_connected_notice is False
    assert ns.app.log_level == "DEBUG"


def test_numeric_identifiers_are_read_as_strings(tmp_path: Path):
    cfg_path = write_tmp_config(
        tmp_path,
        """
        [firebase]
        messaging_sender_id = 123456789
        """,
    )
    ns = load_config(cfg_path)
    assert ns.firebase.messaging_sender_id == "123456789"
    assert ns.firebase.api_key == ""


def test_unknown_theme_falls_back_to_auto(tmp_path: Path):
    cfg_path = write_tmp_config(tmp_path, '[app]\ntheme = "purple"\n')
    assert load_config(cfg_path).app.theme == "auto"


def test_load_config_missing_file_raises(tmp_path: Path):
    missing = tmp_path / "does_not_exist.toml"
    with pytest.raises(FileNotFoundError):
        load_config(missing)


def test_load_config_creates_in_data_dir_when_missing(data_dir: Path):
    assert not (data_dir / "config.toml").exists()

    ns = load_config()
    assert (data_dir / "config.toml").exists()
    assert ns.firebase.project_id == "fastfoodgo-deliver"
    assert ns.firebase.messaging_sender_id == "123456789"
    assert ns.app.asset_root == ""
    assert ns.app.history_size == 50
    assert ns.app.log_level == "WARNING"


def test_load_config_uses_existing_in_data_dir(data_dir: Path):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "config.toml").write_text(
        textwrap.dedent(
            """
            [firebase]
            project_id = "from-data-dir"

            [app]
            history_size = 5
            """
        ),
        encoding="utf-8",
    )

    ns = load_config()
    assert ns.firebase.project_id == "from-data-dir"
    assert ns.app.history_size == 5
    assert ns.app.theme == "auto"
    assert ns.app.log_level == "WARNING"


def test_missing_log_level_defaults_to_warning(tmp_path: Path):
    cfg_path = write_tmp_config(tmp_path, "[app]\nhistory_size = 3\n")
    ns = load_config(cfg_path).app
    assert ns.history_size == 3
    assert ns.log_level == "WARNING"
