"""Runtime configuration from environment variables."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from raginfo.chunkers import STRATEGIES, validate_parameters
from raginfo.constants import DEFAULT_OVERLAP, DEFAULT_TARGET_SIZE

APP_NAME = "raginfo"
BACKENDS = ("file", "sqlite")


def get_user_config_dir(app_name: str = APP_NAME) -> Path:
    """Return the per-user directory for application data.

    On Windows the directory is under ``%APPDATA%``; otherwise the XDG base
    directory or ``~/.config`` is used. The directory is not created here.
    """
    if sys.platform.startswith("win"):
        base_dir = Path(os.getenv("APPDATA", Path.home()))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base_dir / app_name


@dataclass(frozen=True)
class Config:
    """Where state lives and how new documents are chunked."""

    data_dir: Path = field(default_factory=get_user_config_dir)
    backend: str = "file"
    target_size: int = DEFAULT_TARGET_SIZE
    overlap: int = DEFAULT_OVERLAP
    strategy: str = "fixed"

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"strategy must be one of {sorted(STRATEGIES)}, got {self.strategy!r}"
            )
        validate_parameters(self.target_size, self.overlap)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from RAGINFO_* variables, defaults for the rest."""
        env = os.environ if environ is None else environ
        data_dir = env.get("RAGINFO_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else get_user_config_dir(),
            backend=env.get("RAGINFO_BACKEND", "file"),
            target_size=_int(env, "RAGINFO_CHUNK_SIZE", DEFAULT_TARGET_SIZE),
            overlap=_int(env, "RAGINFO_CHUNK_OVERLAP", DEFAULT_OVERLAP),
            strategy=env.get("RAGINFO_CHUNK_STRATEGY", "fixed"),
        )


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
