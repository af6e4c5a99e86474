"""Tests for scaling, address parsing and calldata helpers."""

import pytest
from web3 import Web3

from crunner.core.utils import (
    UINT256_MAX,
    ensure_web3_connected,
    hex_to_bytes,
    parse_address,
    split_calldata_words,
    to_native_units,
)
from crunner.exceptions import ConversionError, EncodingError, TransportError, ValidationError

from ._fakes import FakeWeb3


class TestToNativeUnits:
    def test_one_ether(self):
        assert to_native_units(10**18) == pytest.approx(1.0)

    def test_zero(self):
        assert to_native_units(0) == 0.0

    def test_custom_decimals(self):
        assert to_native_units(1_500_000, 6) == pytest.approx(1.5)

    def test_max_value_is_finite(self):
        assert to_native_units(UINT256_MAX) == pytest.approx(1.157920892373162e59)

    def test_decimal_string_is_accepted(self):
        assert to_native_units("2500000000000000000") == pytest.approx(2.5)

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, "1.5", None, True])
    def test_invalid_values(self, value):
        with pytest.raises(ConversionError):
            to_native_units(value)


class TestParseAddress:
    def test_checksums(self):
        assert parse_address("0x" + "aa" * 20) == Web3.to_checksum_address("0x" + "aa" * 20)

    def test_accepts_unprefixed(self):
        assert parse_address("aa" * 20) == parse_address("0x" + "AA" * 20)

    @pytest.mark.parametrize("value", ["0x1234", "not-an-address", "0x" + "g" * 40])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError) as excinfo:
            parse_address(value)
        assert excinfo.value.address == value


def test_hex_to_bytes():
    assert hex_to_bytes("0x0a0B") == b"\x0a\x0b"
    assert hex_to_bytes("ff") == b"\xff"


class TestSplitCalldataWords:
    def test_empty(self):
        assert split_calldata_words("") == []

    def test_splits_after_selector(self):
        word_a = "00" * 12 + "bb" * 20
        word_b = f"{10**18:064x}"
        words = split_calldata_words("0x095ea7b3" + word_a + word_b)
        assert words == [word_a, word_b]

    def test_ignores_partial_trailing_word(self):
        word = "11" * 32
        assert split_calldata_words("0x095ea7b3" + word + "22") == [word]

    def test_too_short(self):
        with pytest.raises(EncodingError):
            split_calldata_words("0x095ea7b3" + "00" * 31)


class TestEnsureWeb3Connected:
    def test_ok(self):
        ensure_web3_connected(FakeWeb3(chain_id=56), expected_chain_id=56)

    def test_not_connected(self):
        with pytest.raises(TransportError):
            ensure_web3_connected(FakeWeb3(connected=False))

    def test_chain_mismatch(self):
        with pytest.raises(TransportError) as excinfo:
            ensure_web3_connected(FakeWeb3(chain_id=1), expected_chain_id=56)
        assert "expected 56, got 1" in str(excinfo.value)

    def test_transport_failure_is_wrapped(self):
        with pytest.raises(TransportError):
            ensure_web3_connected(FakeWeb3(fail_on="chain_id"), expected_chain_id=56)
