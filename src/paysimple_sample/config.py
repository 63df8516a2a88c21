"""
Settings loading.

Credentials live in a dotenv-style file (``KEY=value`` per line), by default
``paysimple.env`` in the working directory::

    Username=APIUser12345
    ApiKey=...
    ApiUrl=https://sandbox-api.paysimple.com

Environment variables ``PAYSIMPLE_USERNAME``, ``PAYSIMPLE_API_KEY`` and
``PAYSIMPLE_API_URL`` take precedence over the file. The result is a frozen
`SessionSettings` that is handed explicitly to every service.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field

from paysimple_sample.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "paysimple.env"

# Setting name in the file -> environment override. Checked in this order.
REQUIRED_KEYS: dict[str, str] = {
    "Username": "PAYSIMPLE_USERNAME",
    "ApiKey": "PAYSIMPLE_API_KEY",
    "ApiUrl": "PAYSIMPLE_API_URL",
}


class SessionSettings(BaseModel):
    """Credentials and endpoint for one process run. Never mutated."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1)
    # Kept out of repr so it never ends up in a log line or traceback.
    api_key: str = Field(..., min_length=1, repr=False)
    api_url: str = Field(..., min_length=1)


def load_settings(
    path: str | os.PathLike = DEFAULT_CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> SessionSettings:
    """Read the three required settings, failing on the first missing one.

    A missing file is not an error by itself: the environment may supply
    everything. Blank values count as missing.
    """
    path = Path(path)
    environ = os.environ if environ is None else environ

    file_values: dict[str, str | None] = {}
    if path.is_file():
        file_values = dotenv_values(path)
        logger.info("Loaded settings file %s", path)
    else:
        logger.info("Settings file %s not found; using environment only", path)

    values: dict[str, str] = {}
    for key, env_name in REQUIRED_KEYS.items():
        value = (environ.get(env_name) or "").strip() or file_values.get(key)
        if value is None or not value.strip():
            raise ConfigurationError(key, path.name)
        values[key] = value.strip()

    return SessionSettings(
        username=values["Username"],
        api_key=values["ApiKey"],
        api_url=values["ApiUrl"].rstrip("/"),
    )
