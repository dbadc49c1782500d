import json
import stat

import pytest

from ctxman.errors import ConfigError, NoPreviousContextError
from ctxman.models import ContextRef, LocalConfig
from ctxman.storage.config_storage import LocalConfigStorage, validate_local_config
from ctxman.storage.prev_context_storage import PreviousContextStorage
from conftest import SAMPLE_CONFIG


@pytest.fixture
def storage(config_path):
    return LocalConfigStorage(config_path)


def test_read_missing_returns_none(tmp_path):
    """Reading a config that was never written gives None"""
    assert LocalConfigStorage(tmp_path / "missing").read() is None


def test_read(storage):
    config = storage.read()
    assert config.current_context == "localhost:8080"
    assert [c.name for c in config.contexts] == [c["name"] for c in SAMPLE_CONFIG["contexts"]]


def test_read_corrupt(tmp_path):
    path = tmp_path / "config"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="corrupt"):
        LocalConfigStorage(path).read()

    path.write_text("[]")
    with pytest.raises(ConfigError, match="corrupt"):
        LocalConfigStorage(path).read()

    path.write_text('{"contexts": [{"server": "x"}]}')
    with pytest.raises(ConfigError, match="corrupt"):
        LocalConfigStorage(path).read()


def test_read_invalid_encoding(tmp_path):
    """Bytes that are not UTF-8 are reported as a corrupt config"""
    path = tmp_path / "config"
    path.write_bytes(b'{"contexts": "\xff\xfe"}')
    with pytest.raises(ConfigError, match="corrupt"):
        LocalConfigStorage(path).read()


def test_read_directory_raises_os_error(tmp_path):
    with pytest.raises(IsADirectoryError):
        LocalConfigStorage(tmp_path).read()


def test_write_round_trip_and_permissions(tmp_path):
    """Written config is private to the owner and reads back the same"""
    path = tmp_path / "nested" / "config"
    storage = LocalConfigStorage(path)
    config = LocalConfig.from_dict(SAMPLE_CONFIG)
    storage.write(config)

    assert stat.S_IMODE(path.stat().st_mode) == 0o600
    assert storage.read() == config
    assert json.loads(path.read_text())["current-context"] == "localhost:8080"


def test_delete(storage, config_path):
    storage.delete()
    assert not config_path.exists()
    with pytest.raises(FileNotFoundError):
        storage.delete()


def test_validate_ok():
    validate_local_config(LocalConfig.from_dict(SAMPLE_CONFIG))
    validate_local_config(LocalConfig())


def test_validate_current_must_resolve():
    config = LocalConfig.from_dict(SAMPLE_CONFIG)
    config.remove_user("localhost:8080")
    with pytest.raises(ConfigError, match="Local config invalid"):
        validate_local_config(config)

    config.current_context = ""
    validate_local_config(config)


def test_validate_duplicate_names():
    config = LocalConfig.from_dict(SAMPLE_CONFIG)
    config.contexts.append(ContextRef(name="localhost:8080", server="x", user="x"))
    with pytest.raises(ConfigError, match="duplicate context localhost:8080"):
        validate_local_config(config)


def test_previous_context_marker(tmp_path):
    marker = PreviousContextStorage(tmp_path / ".prev-ctx")
    with pytest.raises(NoPreviousContextError):
        marker.get()

    marker.set("a")
    assert marker.get() == "a"

    marker.set("")
    assert marker.get() == ""


def test_previous_context_marker_invalid_encoding(tmp_path):
    path = tmp_path / ".prev-ctx"
    path.write_bytes(b"\xff\xfe")
    with pytest.raises(NoPreviousContextError):
        PreviousContextStorage(path).get()
