"""Contract call dispatching over web3."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from eth_abi import decode as abi_decode
from eth_account import Account
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError

from crunner.config import DEFAULTS, ChainConfig
from crunner.core.modes import ExecutionMode, ReturnType, ensure_raw_method_supported
from crunner.core.params import ParameterValue, abi_args, prepare_params
from crunner.core.results import (
    CallResult,
    DecodedInteger,
    DecodedText,
    GasEstimate,
    NativeBalance,
    TransactionReceipt,
)
from crunner.core.utils import get_logger, parse_address
from crunner.exceptions import (
    ConfigurationError,
    ContractError,
    CrunnerError,
    TransportError,
    ValidationError,
)

LOGGER = get_logger("crunner.dispatch")


@dataclass(frozen=True)
class CallRequest:
    """Everything a single invocation needs once the mode is known."""

    fn_name: str
    params: Sequence[str] = field(default_factory=tuple)
    return_type: Optional[ReturnType] = None
    estimate_from: Optional[str] = None
    confirmations: int = DEFAULTS.block_confirmations
    private_key: Optional[str] = None
    show_param_types: bool = False


class CallDispatcher:
    """Validate the target contract and run one execution path against it."""

    def __init__(
        self,
        *,
        web3: Web3,
        chain: ChainConfig,
        contract_address: str,
        abi: Optional[List[Dict[str, Any]]] = None,
        poll_interval: float = DEFAULTS.confirmation_poll_interval,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.web3 = web3
        self.chain = chain
        self.address = parse_address(contract_address)
        self.abi = abi
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._contract: Optional[Contract] = None

    @property
    def contract(self) -> Contract:
        if self._contract is None:
            if self.abi is None:
                raise ConfigurationError("An ABI is required to call contract methods")
            self._contract = self.web3.eth.contract(address=self.address, abi=self.abi)
        return self._contract

    @contextmanager
    def _wrap_rpc(self, operation: str, method: Optional[str] = None) -> Iterator[None]:
        try:
            yield
        except CrunnerError:
            raise
        except ContractLogicError as exc:
            raise ContractError(
                f"Error {operation} of method '{method}'; err={exc}",
                operation=operation,
                method=method,
            ) from exc
        except Exception as exc:
            target = f"method '{method}'" if method else self.address
            raise TransportError(
                f"Error {operation} for {target}; err={exc}",
                operation=operation,
                endpoint=self.chain.rpc_url,
                details={"method": method, "address": self.address},
            ) from exc

    def _bind(self, fn_name: str, params: Sequence[ParameterValue], operation: str) -> Any:
        args = abi_args(params)
        try:
            return getattr(self.contract.functions, fn_name)(*args)
        except CrunnerError:
            raise
        except Exception as exc:  # web3 raises ABIFunctionNotFound / MismatchedABI here
            raise ContractError(
                f"Error {operation} of method '{fn_name}'; cannot bind arguments {args}: {exc}",
                operation=operation,
                method=fn_name,
            ) from exc

    def ensure_contract_account(self) -> None:
        """Fail unless the target address holds contract code."""
        with self._wrap_rpc("validating input contract address"):
            code = self.web3.eth.get_code(self.address)
        if len(code) == 0:
            raise ValidationError(f"Input contract address {self.address} is an EOA", address=self.address)
        LOGGER.debug("Target %s holds %s bytes of code", self.address, len(code))

    def estimate_gas(self, fn_name: str, params: Sequence[ParameterValue], from_address: str) -> GasEstimate:
        """Estimate gas for a setter call and price it at the current gas price."""
        sender = parse_address(from_address)
        function = self._bind(fn_name, params, "estimating gas")
        with self._wrap_rpc("estimating gas by calling a setter method", fn_name):
            gas = int(function.estimate_gas({"from": sender}))
        with self._wrap_rpc("querying gas price"):
            gas_price = int(self.web3.eth.gas_price)

        estimate = GasEstimate(gas=gas, gas_price=gas_price, unit=self.chain.unit)
        LOGGER.info(
            "Estimate gas=%s gasPrice=%s %s estimatedCost=%s %s",
            gas,
            estimate.gas_price_native,
            self.chain.unit,
            estimate.total_cost_native,
            self.chain.unit,
        )
        return estimate

    def send(
        self,
        fn_name: str,
        params: Sequence[ParameterValue],
        *,
        private_key: str,
        confirmations: int,
    ) -> TransactionReceipt:
        """Sign, broadcast and wait for ``confirmations`` blocks on top of the receipt."""
        try:
            account = Account.from_key(private_key)
        except Exception as exc:
            raise ConfigurationError(f"Invalid setter secret key; err={exc}") from exc

        function = self._bind(fn_name, params, "calling setter")
        with self._wrap_rpc("building transaction", fn_name):
            nonce = self.web3.eth.get_transaction_count(account.address)
            tx = function.build_transaction(
                {
                    "from": account.address,
                    "nonce": nonce,
                    "chainId": self.chain.chain_id,
                    "gasPrice": self.web3.eth.gas_price,
                }
            )

        LOGGER.info("Signing transaction from %s", account.address)
        signed = account.sign_transaction(tx)

        with self._wrap_rpc("calling setter method", fn_name):
            LOGGER.info("Broadcasting transaction")
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)
            tx_hex = Web3.to_hex(tx_hash)
            LOGGER.info("Transaction hash: %s", tx_hex)
            receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash)

        if receipt["status"] != 1:
            raise ContractError(
                f"Error calling setter method '{fn_name}'; transaction {tx_hex} reverted",
                operation="calling setter method",
                method=fn_name,
                details={"tx_hash": tx_hex, "block_number": receipt["blockNumber"]},
            )

        block_number = int(receipt["blockNumber"])
        confirmed = self._wait_for_confirmations(block_number, confirmations)
        LOGGER.info("Transaction confirmed in block %s (confirmations=%s)", block_number, confirmed)
        return TransactionReceipt(
            tx_hash=tx_hex,
            block_number=block_number,
            confirmations=confirmed,
            gas_used=receipt.get("gasUsed"),
        )

    def _wait_for_confirmations(self, block_number: int, confirmations: int) -> int:
        target = block_number + confirmations
        while True:
            with self._wrap_rpc("waiting for confirmations"):
                current = int(self.web3.eth.block_number)
            if current >= target:
                return current - block_number
            LOGGER.info("Awaiting confirmations %s/%s", max(current - block_number, 0), confirmations)
            self._sleep(self.poll_interval)

    def query_native_balance(self) -> NativeBalance:
        """Fetch the native balance of the target address."""
        with self._wrap_rpc("querying balance"):
            balance = int(self.web3.eth.get_balance(self.address))
        return NativeBalance(raw=balance, unit=self.chain.unit)

    def query(
        self,
        fn_name: str,
        params: Sequence[ParameterValue],
        return_type: ReturnType,
    ) -> CallResult:
        """Call a read-only method and decode its output as ``return_type``."""
        args = abi_args(params)
        try:
            data = self.contract.encode_abi(fn_name, args=args)
        except CrunnerError:
            raise
        except Exception as exc:  # unknown method or arguments that do not fit its inputs
            raise ContractError(
                f"Error querying of method '{fn_name}'; cannot encode arguments {args}: {exc}",
                operation="querying",
                method=fn_name,
            ) from exc

        with self._wrap_rpc("querying via RPC", fn_name):
            raw = bytes(self.web3.eth.call({"to": self.address, "data": data}))

        try:
            (value,) = abi_decode([return_type.abi_type], raw)
        except Exception as exc:  # eth_abi raises DecodingError / InsufficientDataBytes
            raise ContractError(
                f"Error querying of method '{fn_name}'; cannot decode {len(raw)} returned bytes as {return_type.value}: {exc}",
                operation="querying",
                method=fn_name,
            ) from exc

        if return_type is ReturnType.STRING:
            return DecodedText(value=value)
        return DecodedInteger(value=int(value))

    def dispatch(self, mode: ExecutionMode, request: CallRequest) -> CallResult:
        """Run the single execution path selected by ``mode``."""
        LOGGER.info("Dispatching %s for '%s' on %s (%s)", mode.value, request.fn_name, self.address, self.chain.name)

        if mode is ExecutionMode.RAW_BALANCE_QUERY:
            ensure_raw_method_supported(request.fn_name)
            return self.query_native_balance()

        params = prepare_params(request.params, show_types=request.show_param_types)

        if mode is ExecutionMode.GAS_ESTIMATE:
            if request.estimate_from is None:
                raise ConfigurationError("--dry-run-estimate-gas requires --estimate-gas-from-addr to be set")
            return self.estimate_gas(request.fn_name, params, request.estimate_from)

        if mode is ExecutionMode.WRITE_TRANSACTION:
            if request.private_key is None:
                raise ConfigurationError("A setter secret key is required to send a transaction")
            return self.send(
                request.fn_name,
                params,
                private_key=request.private_key,
                confirmations=request.confirmations,
            )

        if mode is ExecutionMode.READ_QUERY:
            if request.return_type is None:
                raise ConfigurationError("--fn-ret-type is required for interacting with a getter method")
            return self.query(request.fn_name, params, request.return_type)

        raise ConfigurationError(f"Execution mode '{mode.value}' is not supported right now")


__all__ = ["CallDispatcher", "CallRequest"]
