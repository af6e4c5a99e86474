"""Tests for parameter classification and encoding."""

import pytest
from web3 import Web3

from crunner.core.params import ParamType, abi_args, classify_param, encode_param, prepare_params
from crunner.exceptions import EncodingError

ADDRESS = "0xAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"


class TestClassifyParam:
    """Priority-ordered shape matching."""

    @pytest.mark.parametrize(
        "raw",
        [
            ADDRESS,
            ADDRESS.lower(),
            "0x" + "0123456789abcdefABCDEF0123456789abcdefAB",
            "bb" * 20,
            "0X" + "1f" * 20,
        ],
    )
    def test_address(self, raw):
        assert classify_param(raw) is ParamType.ADDRESS

    @pytest.mark.parametrize("raw", ["0x0", "0x1", "0xde0b6b3a7640000", "0x" + "f" * 64, "0x" + "a" * 39])
    def test_hex_integer(self, raw):
        assert classify_param(raw) is ParamType.HEX_U256

    @pytest.mark.parametrize("raw", ["1", "42", "1000000000000000000", "-5"])
    def test_decimal_integer(self, raw):
        assert classify_param(raw) is ParamType.DECIMAL_U256

    def test_zero_literal_falls_through_to_text(self):
        assert classify_param("0") is ParamType.STRING

    @pytest.mark.parametrize("raw", ["", "hello", "007", "1.5", "0x", "0xzz", "12abc", "1 ", "a" * 40 + "\n"])
    def test_text_fallback(self, raw):
        assert classify_param(raw) is ParamType.STRING

    def test_unprefixed_40_hex_digits_is_address_not_text(self):
        raw = "1234567890" * 4
        assert classify_param(raw) is ParamType.ADDRESS


class TestEncodeParam:
    """Conversion to chain-ready values."""

    def test_address_bytes(self):
        encoded = encode_param(ADDRESS)
        assert encoded.value == bytes.fromhex("aa" * 20)
        assert encoded.as_abi_arg() == Web3.to_checksum_address("0x" + "aa" * 20)

    def test_unprefixed_address(self):
        encoded = encode_param("bb" * 20)
        assert encoded.value == bytes.fromhex("bb" * 20)

    def test_hex_integer(self):
        encoded = encode_param("0xde0b6b3a7640000")
        assert encoded.value == 10**18
        assert encoded.is_integer

    def test_decimal_round_trip(self):
        raw = "115792089237316195423570985008687907853269984665640564039457584007913129639935"
        encoded = encode_param(raw)
        assert encoded.value == 2**256 - 1
        assert str(encoded.value) == raw

    def test_hex_overflow(self):
        with pytest.raises(EncodingError) as excinfo:
            encode_param("0x1" + "0" * 64)
        assert excinfo.value.param_type == "U256"

    def test_decimal_overflow(self):
        with pytest.raises(EncodingError):
            encode_param(str(2**256))

    def test_negative_decimal_rejected(self):
        with pytest.raises(EncodingError) as excinfo:
            encode_param("-5")
        assert "negative" in str(excinfo.value)
        assert excinfo.value.param == "-5"

    def test_text_passes_through(self):
        encoded = encode_param("héllo wörld")
        assert encoded.param_type is ParamType.STRING
        assert encoded.as_abi_arg() == "héllo wörld"


class TestPrepareParams:
    def test_order_and_types(self):
        prepared = prepare_params([ADDRESS, "1000", "0x10", "memo"])
        assert [p.param_type for p in prepared] == [
            ParamType.ADDRESS,
            ParamType.DECIMAL_U256,
            ParamType.HEX_U256,
            ParamType.STRING,
        ]
        assert abi_args(prepared)[1:] == [1000, 16, "memo"]

    def test_empty(self):
        assert prepare_params([]) == []

    def test_error_records_position(self):
        with pytest.raises(EncodingError) as excinfo:
            prepare_params(["1", "-2"])
        assert excinfo.value.details["position"] == 2

    def test_show_types_logs_each_param(self, caplog):
        caplog.set_level("INFO", logger="crunner.params")
        prepare_params([ADDRESS, "7", "0"], show_types=True)
        messages = [record.getMessage() for record in caplog.records if record.name == "crunner.params"]
        assert messages == [
            f"param = {ADDRESS} is Address",
            "param = 7 is Decimal",
            "param = 0 is String",
        ]
