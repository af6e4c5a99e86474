"""Encoded parameters must be accepted by a real web3 contract binding."""

from eth_abi import decode as abi_decode
from web3 import Web3

from crunner.contracts import load_contract_abi, merge_abis
from crunner.core.params import abi_args, prepare_params
from crunner.core.utils import hex_to_bytes

TARGET = "0x" + "aa" * 20


def _contract():
    return Web3().eth.contract(address=Web3.to_checksum_address(TARGET), abi=load_contract_abi())


def test_approve_calldata():
    params = prepare_params(["bb" * 20, "1000000000000000000"])
    data = hex_to_bytes(_contract().encode_abi("approve", args=abi_args(params)))

    assert data[:4].hex() == "095ea7b3"
    spender, amount = abi_decode(["address", "uint256"], data[4:])
    assert spender == Web3.to_checksum_address("0x" + "bb" * 20)
    assert amount == 10**18


def test_allowance_calldata():
    params = prepare_params(["0x" + "11" * 20, "0x" + "22" * 20])
    data = hex_to_bytes(_contract().encode_abi("allowance", args=abi_args(params)))

    assert data[:4].hex() == "dd62ed3e"
    assert len(data) == 4 + 2 * 32


def test_overloads_from_user_abi_are_callable():
    transfer_inputs = [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "tokenId", "type": "uint256"},
    ]
    user_abi = [
        {"type": "function", "name": "safeTransferFrom", "inputs": transfer_inputs, "outputs": [], "stateMutability": "nonpayable"},
        {
            "type": "function",
            "name": "safeTransferFrom",
            "inputs": transfer_inputs + [{"name": "data", "type": "bytes"}],
            "outputs": [],
            "stateMutability": "nonpayable",
        },
    ]
    contract = Web3().eth.contract(
        address=Web3.to_checksum_address(TARGET), abi=merge_abis(load_contract_abi(), user_abi)
    )
    args = abi_args(prepare_params(["11" * 20, "22" * 20, "7"]))

    short = hex_to_bytes(contract.encode_abi("safeTransferFrom", args=args))
    long = hex_to_bytes(contract.encode_abi("safeTransferFrom", args=args + [b"\x01"]))

    assert short[:4].hex() == "42842e0e"
    assert long[:4].hex() == "b88d4fde"
