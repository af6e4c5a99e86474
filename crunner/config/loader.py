"""Static chain and runtime configuration for crunner."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from crunner.exceptions import ConfigurationError

SETTER_SECRET_KEY_ENV = "CRUNNER_SETTER_SECRETKEY"


class ChainTarget(str, enum.Enum):
    """Chains crunner knows how to reach."""

    BSC = "bsc"
    ETHEREUM = "ethereum"
    POLYGON = "polygon"


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain network."""

    name: str
    chain_id: int
    rpc_url: str
    unit: str


@dataclass(frozen=True)
class DefaultsConfig:
    """Default operational parameters."""

    block_confirmations: int = 20
    native_decimals: int = 18
    confirmation_poll_interval: float = 3.0
    request_timeout: int = 30


CHAINS: Mapping[ChainTarget, ChainConfig] = {
    ChainTarget.BSC: ChainConfig(
        name="bsc",
        chain_id=56,
        rpc_url="https://bsc-dataseed.binance.org/",
        unit="BNB",
    ),
    ChainTarget.ETHEREUM: ChainConfig(
        name="ethereum",
        chain_id=1,
        rpc_url="https://rpc.ankr.com/eth",
        unit="ETH",
    ),
    ChainTarget.POLYGON: ChainConfig(
        name="polygon",
        chain_id=137,
        rpc_url="https://polygon-rpc.com/",
        unit="MATIC",
    ),
}

DEFAULTS = DefaultsConfig()


def resolve_chain(value: str) -> ChainConfig:
    """Return the chain configuration for ``value`` (case-insensitive)."""
    try:
        target = ChainTarget(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(chain.value for chain in ChainTarget)
        raise ConfigurationError(f"Unknown chain '{value}', expected one of: {choices}") from exc
    return CHAINS[target]


def load_setter_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the signing key used for state-changing calls."""
    env: Dict[str, str] = dict(os.environ if environ is None else environ)
    private_key = (env.get(SETTER_SECRET_KEY_ENV) or "").strip()
    if not private_key:
        raise ConfigurationError(f"'{SETTER_SECRET_KEY_ENV}' environment variable is required")
    return private_key


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
