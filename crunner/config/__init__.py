"""Configuration utilities for crunner."""

from .loader import (
    CHAINS,
    DEFAULTS,
    SETTER_SECRET_KEY_ENV,
    ChainConfig,
    ChainTarget,
    DefaultsConfig,
    load_setter_key,
    resolve_chain,
)

__all__ = [
    "CHAINS",
    "ChainConfig",
    "ChainTarget",
    "DEFAULTS",
    "DefaultsConfig",
    "SETTER_SECRET_KEY_ENV",
    "load_setter_key",
    "resolve_chain",
]
