"""Application settings.

Settings are read from an optional TOML file and then overridden by
``HIMS_*`` environment variables. Example ``settings.toml``::

    [storage]
    backend = "api"
    data_dir = "/var/lib/hims"

    [api]
    base_url = "https://kitchen.example.com/api/v1"
    timeout = 15

    [logging]
    level = "DEBUG"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

BACKENDS = ("json", "api")

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_API_URL = "http://localhost:8000/api/v1"


@dataclass(frozen=True)
class Settings:
    backend: str = "json"
    data_dir: Path = DEFAULT_DATA_DIR
    api_base_url: str = DEFAULT_API_URL
    api_token: str | None = None
    api_timeout: float = 10.0
    log_level: str = "INFO"
    log_file: str = "hims.log"


def load_settings(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Build Settings from ``path`` (if given) and the environment."""
    env = os.environ if environ is None else environ
    raw: dict = {}
    if path is None and env.get("HIMS_SETTINGS"):
        path = env["HIMS_SETTINGS"]
    if path is not None:
        with open(path, "rb") as f:
            raw = tomllib.load(f)

    storage = raw.get("storage", {})
    api = raw.get("api", {})
    logging_section = raw.get("logging", {})

    backend = env.get("HIMS_BACKEND", storage.get("backend", "json")).strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}; expected one of {', '.join(BACKENDS)}")

    timeout_raw = env.get("HIMS_API_TIMEOUT", api.get("timeout", 10))
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid API timeout: {timeout_raw!r}") from exc

    return Settings(
        backend=backend,
        data_dir=Path(env.get("HIMS_DATA_DIR", storage.get("data_dir", DEFAULT_DATA_DIR))),
        api_base_url=env.get("HIMS_API_URL", api.get("base_url", DEFAULT_API_URL)).rstrip("/"),
        api_token=env.get("HIMS_API_TOKEN", api.get("token")) or None,
        api_timeout=timeout,
        log_level=env.get("HIMS_LOG_LEVEL", logging_section.get("level", "INFO")).upper(),
        log_file=env.get("HIMS_LOG_FILE", logging_section.get("file", "hims.log")),
    )
