from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    # Try CWD first
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    # Walk up from this file looking for .env as fallback
    current = Path(__file__).resolve()
    for parent in [current.parent, *current.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            load_dotenv(dotenv_path=candidate, override=False)
            break


_load_env()


DEFAULT_MARKER = "// +generate_interface"
INTERFACE_SUFFIX = "Interface"
OUTPUT_SUFFIX = ".interface.go"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default) in {"1", "true", "True", "yes"}


@dataclass
class Settings:
    MARKER: str = os.getenv("IFACE_MARKER", DEFAULT_MARKER)
    FORMATTER: str = os.getenv("IFACE_FORMATTER", "goimports")
    GOIMPORTS_BIN: str = os.getenv("IFACE_GOIMPORTS_BIN", "goimports")
    GOFMT_BIN: str = os.getenv("IFACE_GOFMT_BIN", "gofmt")
    FORMAT_TIMEOUT_S: int = int(os.getenv("IFACE_FORMAT_TIMEOUT_S", "30"))
    STRICT: bool = _env_flag("IFACE_STRICT")
    LOG_LEVEL: str = os.getenv("IFACE_LOG_LEVEL", "WARNING")


settings = Settings()
