from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .constants import ENV_NATIONAL_CHECK_DIGITS, ENV_RANDOM_SEED, ENV_STRUCTURES_FILE


def _env_bool(name: str, default: str = "0") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_str(name: str) -> Optional[str]:
    raw = (os.getenv(name, "") or "").strip()
    return raw or None


@dataclass(frozen=True)
class ValidationConfig:
    """Library defaults; read from the environment by ``load_config``."""
    national_check_digits: bool = False
    structures_file: Optional[str] = None
    random_seed: Optional[int] = None


def load_config() -> ValidationConfig:
    return ValidationConfig(
        national_check_digits=_env_bool(ENV_NATIONAL_CHECK_DIGITS),
        structures_file=_env_str(ENV_STRUCTURES_FILE),
        random_seed=_env_int(ENV_RANDOM_SEED),
    )


__all__ = ["ValidationConfig", "load_config"]
