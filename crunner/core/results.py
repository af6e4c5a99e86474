"""Result types produced by the dispatcher and their textual rendering."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from crunner.core.utils import to_native_units


def format_native(value: float) -> str:
    """Render a scaled amount in positional notation, never with an exponent."""
    return format(Decimal(repr(value)), "f")


@dataclass(frozen=True)
class DecodedText:
    """String returned by a read query."""

    value: str

    def render(self) -> str:
        return json.dumps(self.value, ensure_ascii=False)


@dataclass(frozen=True)
class DecodedInteger:
    """Unsigned 256-bit integer returned by a read query."""

    value: int

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TransactionReceipt:
    """Confirmed state-changing transaction."""

    tx_hash: str
    block_number: int
    confirmations: int
    gas_used: Optional[int] = None

    def render(self) -> str:
        return self.tx_hash


@dataclass(frozen=True)
class GasEstimate:
    """Gas units for a dry run plus the price needed to turn them into a cost."""

    gas: int
    gas_price: int
    unit: str

    @property
    def gas_price_native(self) -> float:
        return to_native_units(self.gas_price)

    @property
    def total_cost_native(self) -> float:
        return self.gas_price_native * self.gas

    def render(self) -> str:
        return f"{self.gas} {format_native(self.gas_price_native)} {format_native(self.total_cost_native)}"


@dataclass(frozen=True)
class NativeBalance:
    """Native currency balance of the target address."""

    raw: int
    unit: str

    @property
    def native(self) -> float:
        return to_native_units(self.raw)

    def render(self) -> str:
        return f"{self.raw} {format_native(self.native)}"


CallResult = Union[DecodedText, DecodedInteger, TransactionReceipt, GasEstimate, NativeBalance]


__all__ = [
    "CallResult",
    "DecodedInteger",
    "DecodedText",
    "GasEstimate",
    "NativeBalance",
    "TransactionReceipt",
    "format_native",
]
