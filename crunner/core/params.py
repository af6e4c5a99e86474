"""Parameter type inference and encoding for contract calls.

Every ``--params`` string is classified by shape alone, then converted to the
value web3 needs to ABI-encode it. The rules run in a fixed order because the
shapes overlap: a 40-hex-digit string is an address even though it would also
read as a hex integer.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Pattern, Sequence, Tuple, Union

from web3 import Web3

from crunner.core.utils import ADDRESS_PATTERN, UINT256_MAX, get_logger, hex_to_bytes, strip_hex_prefix
from crunner.exceptions import EncodingError

LOGGER = get_logger("crunner.params")

HEX_INTEGER_PATTERN = re.compile(r"^0x[0-9a-f]+$", re.IGNORECASE)
# "0" alone does not match and is classified as text.
DECIMAL_INTEGER_PATTERN = re.compile(r"^-?[1-9][0-9]*$")

ADDRESS_BYTES = 20


class ParamType(enum.Enum):
    """Shapes a raw parameter string can take."""

    ADDRESS = "Address"
    HEX_U256 = "U256"
    DECIMAL_U256 = "Decimal"
    STRING = "String"


_RULES: Tuple[Tuple[Pattern[str], ParamType], ...] = (
    (ADDRESS_PATTERN, ParamType.ADDRESS),
    (HEX_INTEGER_PATTERN, ParamType.HEX_U256),
    (DECIMAL_INTEGER_PATTERN, ParamType.DECIMAL_U256),
)


def classify_param(raw: str) -> ParamType:
    """Return the first matching type for ``raw``; text is the fallback."""
    for pattern, param_type in _RULES:
        if pattern.fullmatch(raw):
            return param_type
    return ParamType.STRING


@dataclass(frozen=True)
class ParameterValue:
    """A classified parameter holding its chain-ready payload."""

    raw: str
    param_type: ParamType
    value: Union[bytes, int, str]

    @property
    def is_integer(self) -> bool:
        return self.param_type in (ParamType.HEX_U256, ParamType.DECIMAL_U256)

    def as_abi_arg(self) -> Union[int, str]:
        """Return the value in the form web3 contract functions accept."""
        if self.param_type is ParamType.ADDRESS:
            return Web3.to_checksum_address("0x" + self.value.hex())
        return self.value


def _encode_address(raw: str) -> bytes:
    try:
        address = hex_to_bytes(raw)
    except ValueError as exc:
        raise EncodingError(
            f"Error parsing parameter '{raw}' for Address type; err={exc}",
            param=raw,
            param_type=ParamType.ADDRESS.value,
        ) from exc
    if len(address) != ADDRESS_BYTES:
        raise EncodingError(
            f"Error parsing parameter '{raw}' for Address type; expected {ADDRESS_BYTES} bytes, got {len(address)}",
            param=raw,
            param_type=ParamType.ADDRESS.value,
        )
    return address


def _encode_u256(raw: str, digits: str, base: int, param_type: ParamType) -> int:
    label = "hexadecimal" if base == 16 else "decimal"
    try:
        value = int(digits, base)
    except ValueError as exc:
        raise EncodingError(
            f"Error creating U256 from {label} string '{raw}'; err={exc}",
            param=raw,
            param_type=param_type.value,
        ) from exc
    if value < 0:
        raise EncodingError(
            f"Error creating U256 from {label} string '{raw}'; negative values cannot be encoded as unsigned",
            param=raw,
            param_type=param_type.value,
        )
    if value > UINT256_MAX:
        raise EncodingError(
            f"Error creating U256 from {label} string '{raw}'; value exceeds 256 bits",
            param=raw,
            param_type=param_type.value,
        )
    return value


def encode_param(raw: str) -> ParameterValue:
    """Classify ``raw`` and convert it to its chain-ready value."""
    param_type = classify_param(raw)
    if param_type is ParamType.ADDRESS:
        value: Union[bytes, int, str] = _encode_address(raw)
    elif param_type is ParamType.HEX_U256:
        value = _encode_u256(raw, strip_hex_prefix(raw), 16, param_type)
    elif param_type is ParamType.DECIMAL_U256:
        value = _encode_u256(raw, raw, 10, param_type)
    else:
        value = raw
    return ParameterValue(raw=raw, param_type=param_type, value=value)


def prepare_params(params: Sequence[str], *, show_types: bool = False) -> List[ParameterValue]:
    """Encode each raw parameter in order.

    With ``show_types`` the inferred type of every parameter is logged before
    any call is made so the user can check the inference.
    """
    prepared: List[ParameterValue] = []
    for index, raw in enumerate(params, start=1):
        try:
            value = encode_param(raw)
        except EncodingError as exc:
            exc.details.setdefault("position", index)
            raise
        if show_types:
            LOGGER.info("param = %s is %s", raw, value.param_type.value)
        prepared.append(value)
    return prepared


def abi_args(params: Sequence[ParameterValue]) -> List[Union[int, str]]:
    """Return web3-ready positional arguments."""
    return [param.as_abi_arg() for param in params]


__all__ = [
    "DECIMAL_INTEGER_PATTERN",
    "HEX_INTEGER_PATTERN",
    "ParamType",
    "ParameterValue",
    "abi_args",
    "classify_param",
    "encode_param",
    "prepare_params",
]
