from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from paysimple_sample.config import load_settings
from paysimple_sample.errors import ConfigurationError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "paysimple.env"
    path.write_text(text, encoding="utf-8")
    return path


def test_loads_all_three_settings(tmp_path: Path) -> None:
    path = _write(tmp_path, "Username=APIUser1\nApiKey=abc123\nApiUrl=https://sandbox.example/\n")

    settings = load_settings(path, environ={})

    assert settings.username == "APIUser1"
    assert settings.api_key == "abc123"
    assert settings.api_url == "https://sandbox.example"


@pytest.mark.parametrize(
    ("text", "missing"),
    [
        ("", "Username"),
        ("Username=u\nApiUrl=https://x\n", "ApiKey"),
        ("Username=u\nApiKey=   \nApiUrl=https://x\n", "ApiKey"),
        ("Username=u\nApiKey=k\n", "ApiUrl"),
    ],
)
def test_first_missing_key_is_named(tmp_path: Path, text: str, missing: str) -> None:
    path = _write(tmp_path, text)

    with pytest.raises(ConfigurationError) as excinfo:
        load_settings(path, environ={})

    assert excinfo.value.key == missing
    assert str(excinfo.value) == f"{missing} is missing from paysimple.env"


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = _write(tmp_path, "Username=file-user\nApiKey=file-key\nApiUrl=https://file.example\n")

    settings = load_settings(path, environ={"PAYSIMPLE_API_KEY": "env-key"})

    assert settings.username == "file-user"
    assert settings.api_key == "env-key"


def test_missing_file_falls_back_to_environment(tmp_path: Path) -> None:
    environ = {
        "PAYSIMPLE_USERNAME": "env-user",
        "PAYSIMPLE_API_KEY": "env-key",
        "PAYSIMPLE_API_URL": "https://env.example",
    }

    settings = load_settings(tmp_path / "absent.env", environ=environ)

    assert settings.api_url == "https://env.example"


def test_settings_are_immutable_and_hide_the_key(tmp_path: Path) -> None:
    path = _write(tmp_path, "Username=u\nApiKey=super-secret\nApiUrl=https://x\n")
    settings = load_settings(path, environ={})

    with pytest.raises(ValidationError):
        settings.api_key = "other"
    assert "super-secret" not in repr(settings)


def test_blank_environment_value_does_not_hide_file_value(tmp_path: Path) -> None:
    path = _write(tmp_path, "Username=u\nApiKey=k\nApiUrl=https://x\n")

    settings = load_settings(path, environ={"PAYSIMPLE_API_KEY": "  "})

    assert settings.api_key == "k"
