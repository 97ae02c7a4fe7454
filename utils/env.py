"""Environment lookups for the native driver.

Values normally come from the process environment. A ``.env`` file at the
project root is loaded at import time; when it sets
``NATIVE_DRIVER_FORCE_ENV_OVERRIDE=true`` only the ``.env`` values are used.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
OVERRIDE_VAR = "NATIVE_DRIVER_FORCE_ENV_OVERRIDE"

_dotenv: dict[str, str | None] = {}
_dotenv_only = False


def reload_env(dotenv_mapping: Mapping[str, str | None] | None = None) -> None:
    """Re-read the .env file, or take ``dotenv_mapping`` in its place (tests)."""

    global _dotenv, _dotenv_only

    from_file = dotenv_mapping is None and ENV_FILE.exists()
    if dotenv_mapping is not None:
        _dotenv = dict(dotenv_mapping)
    elif from_file:
        _dotenv = dict(dotenv_values(ENV_FILE))
    else:
        _dotenv = {}
    _dotenv_only = (_dotenv.get(OVERRIDE_VAR) or "").strip().lower() == "true"

    if from_file:
        load_dotenv(dotenv_path=ENV_FILE, override=_dotenv_only)


def get_env(key: str, default: str | None = None) -> str | None:
    if not _dotenv_only:
        return os.getenv(key, default)
    value = _dotenv.get(key)
    return default if value is None else value


reload_env()
