"""Utility helpers shared across crunner core modules."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from web3 import Web3

from crunner.exceptions import ConversionError, EncodingError, TransportError, ValidationError

UINT256_MAX = 2**256 - 1
NATIVE_DECIMALS = 18

ADDRESS_PATTERN = re.compile(r"^(0x)?[0-9a-f]{40}$", re.IGNORECASE)

_WORD_HEX_LEN = 64
_SELECTOR_HEX_LEN = 10


def get_logger(name: str = "crunner") -> logging.Logger:
    """Return a configured logger that prints to stderr."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def set_log_level(level: int, prefix: str = "crunner") -> None:
    """Apply ``level`` to every logger created under ``prefix``."""
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == prefix or name.startswith(prefix + ".")):
            logger.setLevel(level)


def ensure_web3_connected(web3: Web3, *, expected_chain_id: Optional[int] = None) -> None:
    """Validate that ``web3`` is connected and optionally matches the expected chain id."""
    try:
        connected = web3.is_connected()
        chain_id = web3.eth.chain_id if expected_chain_id is not None else None
    except Exception as exc:
        raise TransportError(f"Failed to reach the RPC endpoint: {exc}", operation="connect") from exc
    if not connected:
        raise TransportError("Failed to connect to the configured RPC endpoint", operation="connect")
    if expected_chain_id is not None and chain_id != expected_chain_id:
        raise TransportError(
            f"RPC chain ID mismatch: expected {expected_chain_id}, got {chain_id}",
            operation="connect",
        )


def strip_hex_prefix(data: str) -> str:
    """Drop a leading ``0x`` (either case) from ``data``."""
    return data[2:] if data[:2].lower() == "0x" else data


def hex_to_bytes(data: str) -> bytes:
    """Convert a hex string (with or without ``0x``) to bytes."""
    return bytes.fromhex(strip_hex_prefix(data))


def parse_address(address: str) -> str:
    """Return the checksum form of ``address`` or raise ``ValidationError``."""
    if not ADDRESS_PATTERN.fullmatch(address):
        raise ValidationError(f"Address is not in the correct format; addr={address}", address=address)
    return Web3.to_checksum_address("0x" + strip_hex_prefix(address).lower())


def to_native_units(value: Any, decimals: int = NATIVE_DECIMALS) -> float:
    """Scale a 256-bit unsigned integer down by ``10**decimals`` for display.

    The result is a lossy float and must never feed back into encoding or
    transaction construction.
    """
    if isinstance(value, bool):
        raise ConversionError(f"Cannot scale boolean value {value!r}")
    try:
        integer = int(str(value), 10) if not isinstance(value, int) else value
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"Cannot interpret {value!r} as an unsigned 256-bit integer") from exc
    if integer < 0 or integer > UINT256_MAX:
        raise ConversionError(f"Value {integer} is outside the unsigned 256-bit range")
    return float(integer) / 10**decimals


def split_calldata_words(calldata: str) -> List[str]:
    """Split ``0x`` + selector + arguments into 64-char (256-bit) hex words.

    The 4-byte method selector is skipped. Trailing characters that do not fill
    a whole word are ignored.
    """
    if not calldata:
        return []

    arguments = calldata[_SELECTOR_HEX_LEN:]
    if len(arguments) < _WORD_HEX_LEN:
        raise EncodingError(
            "Calldata is not long enough to hold one 256-bit argument after the 0x-prefixed selector",
            param=calldata,
        )

    return [
        arguments[offset : offset + _WORD_HEX_LEN]
        for offset in range(0, len(arguments) - _WORD_HEX_LEN + 1, _WORD_HEX_LEN)
    ]


__all__ = [
    "ADDRESS_PATTERN",
    "NATIVE_DECIMALS",
    "UINT256_MAX",
    "ensure_web3_connected",
    "get_logger",
    "hex_to_bytes",
    "parse_address",
    "set_log_level",
    "split_calldata_words",
    "strip_hex_prefix",
    "to_native_units",
]
