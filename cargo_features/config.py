"""Environment-driven settings for the cargo-features CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    val = environ.get(name)
    if val is None:
        return False
    return val.strip().lower() in _TRUTHY


@dataclass
class Settings:
    """
    Resolved runtime settings.

    Attributes:
        cargo: Cargo executable used for ``cargo metadata`` ($CARGO when run as a plugin)
        log_level: Level name for the ``cargo_features`` logger
        verbose: Show error context and tracebacks
        reraise: Re-raise exceptions instead of exiting (debugging aid)
        color: Emit ANSI colors
    """

    cargo: str = "cargo"
    log_level: str = "warning"
    verbose: bool = False
    reraise: bool = False
    color: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        environ = os.environ if environ is None else environ
        return cls(
            cargo=environ.get("CARGO") or "cargo",
            log_level=(environ.get("CARGO_FEATURES_LOG_LEVEL") or "warning").strip().lower(),
            verbose=env_flag("CARGO_FEATURES_VERBOSE", environ) or env_flag("CARGO_FEATURES_DEBUG", environ),
            reraise=env_flag("CARGO_FEATURES_RERAISE", environ) or env_flag("CARGO_FEATURES_DEBUG", environ),
            color="NO_COLOR" not in environ,
        )


__all__ = ["Settings", "env_flag"]
