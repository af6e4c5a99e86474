"""Execution mode selection from the CLI flags."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from crunner.exceptions import ConfigurationError

RAW_BALANCE_METHOD = "balance"


class ExecutionMode(enum.Enum):
    """The single execution path an invocation takes."""

    GAS_ESTIMATE = "gas-estimate"
    UNSUPPORTED_SETTER_RPC = "unsupported-setter-rpc"
    WRITE_TRANSACTION = "write-transaction"
    RAW_BALANCE_QUERY = "raw-balance-query"
    READ_QUERY = "read-query"


class ReturnType(enum.Enum):
    """Return shapes a read query can decode, keyed by their CLI spelling."""

    STRING = "String"
    U256 = "U256"

    @property
    def abi_type(self) -> str:
        return "string" if self is ReturnType.STRING else "uint256"


@dataclass(frozen=True)
class ModeFlags:
    """Flags that decide the execution mode."""

    is_setter: bool = False
    is_dry_run: bool = False
    is_raw_rpc: bool = False
    has_return_type: bool = False
    has_estimate_from: bool = False


def select_mode(flags: ModeFlags) -> ExecutionMode:
    """Pick the execution mode; the first matching rule wins.

    Raises ``ConfigurationError`` for combinations that cannot run, before any
    network access happens.
    """
    if flags.is_dry_run:
        if not flags.is_setter:
            raise ConfigurationError("--dry-run-estimate-gas requires --ensure-setter flag")
        if not flags.has_estimate_from:
            raise ConfigurationError("--dry-run-estimate-gas requires --estimate-gas-from-addr to be set")
        return ExecutionMode.GAS_ESTIMATE

    if flags.is_setter and flags.is_raw_rpc:
        return ExecutionMode.UNSUPPORTED_SETTER_RPC

    if flags.is_setter:
        return ExecutionMode.WRITE_TRANSACTION

    if flags.is_raw_rpc:
        return ExecutionMode.RAW_BALANCE_QUERY

    if not flags.has_return_type:
        raise ConfigurationError("--fn-ret-type is required for interacting with a getter method")
    return ExecutionMode.READ_QUERY


def ensure_raw_method_supported(fn_name: str) -> None:
    """Raw RPC mode only answers native balance queries."""
    if fn_name != RAW_BALANCE_METHOD:
        raise ConfigurationError(
            f"--rpc-eth only supports '{RAW_BALANCE_METHOD}', got '{fn_name}'"
        )


__all__ = [
    "ExecutionMode",
    "ModeFlags",
    "RAW_BALANCE_METHOD",
    "ReturnType",
    "ensure_raw_method_supported",
    "select_mode",
]
