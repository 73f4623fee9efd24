"""Tests for settings loading."""

from pathlib import Path

import pytest

from hims.infrastructure.settings import DEFAULT_DATA_DIR, Settings, load_settings


def test_defaults_without_file_or_env():
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.data_dir == DEFAULT_DATA_DIR


def test_toml_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        '[storage]\nbackend = "api"\ndata_dir = "/srv/hims"\n'
        '[api]\nbase_url = "https://kitchen.test/api/v1/"\ntimeout = 4\ntoken = "t0k"\n'
        '[logging]\nlevel = "debug"\n',
        encoding="utf-8",
    )
    settings = load_settings(path, environ={})
    assert settings.backend == "api"
    assert settings.data_dir == Path("/srv/hims")
    assert settings.api_base_url == "https://kitchen.test/api/v1"
    assert settings.api_timeout == 4.0
    assert settings.api_token == "t0k"
    assert settings.log_level == "DEBUG"


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text('[storage]\nbackend = "api"\n', encoding="utf-8")
    settings = load_settings(path, environ={
        "HIMS_BACKEND": "json",
        "HIMS_DATA_DIR": str(tmp_path),
        "HIMS_API_TIMEOUT": "2.5",
    })
    assert settings.backend == "json"
    assert settings.data_dir == tmp_path
    assert settings.api_timeout == 2.5


def test_settings_path_from_environment(tmp_path):
    path = tmp_path / "s.toml"
    path.write_text('[logging]\nfile = "kitchen.log"\n', encoding="utf-8")
    assert load_settings(environ={"HIMS_SETTINGS": str(path)}).log_file == "kitchen.log"


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="Unknown backend"):
        load_settings(environ={"HIMS_BACKEND": "postgres"})


def test_bad_timeout_rejected():
    with pytest.raises(ValueError, match="Invalid API timeout"):
        load_settings(environ={"HIMS_API_TIMEOUT": "soon"})
