from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_PORT = 8080
DEFAULT_JSON_BODY_LIMIT = 100 * 1024


def default_static_dirs() -> List[Path]:
    # Order matters: earlier roots shadow later ones.
    return [BASE_DIR / "build", BASE_DIR / "public"]


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    json_body_limit: int = DEFAULT_JSON_BODY_LIMIT
    static_dirs: List[Path] = field(default_factory=default_static_dirs)


def get_settings() -> Settings:
    """Read settings from the environment.

    ``PORT`` falls back to 8080 when unset or empty. A value that is not an
    integer raises ``ValueError``.
    """
    port = os.getenv("PORT") or str(DEFAULT_PORT)
    limit = os.getenv("JSON_BODY_LIMIT") or str(DEFAULT_JSON_BODY_LIMIT)
    return Settings(
        port=int(port),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        json_body_limit=int(limit),
    )
