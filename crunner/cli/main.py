"""CLI entrypoint for calling smart contract methods on EVM chains."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from dotenv import load_dotenv
from web3 import Web3

from crunner.config import DEFAULTS, ChainTarget, load_setter_key, resolve_chain
from crunner.contracts import load_abi_file, load_contract_abi, merge_abis
from crunner.core.dispatch import CallDispatcher, CallRequest
from crunner.core.modes import (
    ExecutionMode,
    ModeFlags,
    ReturnType,
    ensure_raw_method_supported,
    select_mode,
)
from crunner.core.results import CallResult
from crunner.core.utils import ensure_web3_connected, get_logger, parse_address, set_log_level
from crunner.exceptions import ConfigurationError, CrunnerError

LOGGER = get_logger("crunner.cli")

load_dotenv()

UNSUPPORTED_MESSAGE = "Not supported right now"


def _default_web3_factory(url: str) -> Web3:
    return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": DEFAULTS.request_timeout}))


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="crunner",
        description="Runner/Executor of target smart contract on EVM-based chain at command line",
    )
    parser.add_argument("-a", "--address", required=True, dest="contract_address", help="Target contract address to interact with")
    parser.add_argument(
        "-c",
        "--chain",
        required=True,
        type=str.lower,
        choices=[chain.value for chain in ChainTarget],
        help="Which chain to work with",
    )
    parser.add_argument(
        "-f",
        "--fn-name",
        required=True,
        help="Function name of target smart contract to make a call to. Use 'balance' with --rpc-eth",
    )
    parser.add_argument(
        "-r",
        "--fn-ret-type",
        choices=[ret.value for ret in ReturnType],
        help="Function's returning type; required unless --ensure-setter, --dry-run-estimate-gas or --rpc-eth",
    )
    parser.add_argument("--ensure-setter", action="store_true", help="The function to call is a setter function")
    parser.add_argument("-p", "--params", nargs="*", default=[], help="Parameters to be supplied to the function")
    parser.add_argument(
        "--dry-run-estimate-gas",
        action="store_true",
        help="Dry run to estimate gas used for a setter method (needs --ensure-setter)",
    )
    parser.add_argument("--estimate-gas-from-addr", help="From address used only for the gas estimation dry run")
    parser.add_argument(
        "--block-confirmations",
        type=int,
        default=DEFAULTS.block_confirmations,
        help="Number of blocks to wait for after a setter transaction is mined",
    )
    parser.add_argument("--abi-filepath", type=Path, help="ABI file to combine with the default one")
    parser.add_argument("--show-param-types", action="store_true", help="Log the inferred type of each parameter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--rpc-eth", action="store_true", help="Make a basic RPC-ETH query instead of a contract call")
    return parser


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.rpc_eth and (args.ensure_setter or args.dry_run_estimate_gas):
        parser.error("argument --rpc-eth: not allowed with --ensure-setter or --dry-run-estimate-gas")
    return args


def run(
    args: argparse.Namespace,
    *,
    web3_factory: Callable[[str], Web3] = _default_web3_factory,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[CallResult]:
    """Validate options, then execute the selected mode. Returns ``None`` for an unsupported mode."""
    mode = select_mode(
        ModeFlags(
            is_setter=args.ensure_setter,
            is_dry_run=args.dry_run_estimate_gas,
            is_raw_rpc=args.rpc_eth,
            has_return_type=args.fn_ret_type is not None,
            has_estimate_from=args.estimate_gas_from_addr is not None,
        )
    )
    LOGGER.debug("Selected mode %s", mode.value)
    if mode is ExecutionMode.UNSUPPORTED_SETTER_RPC:
        return None

    chain = resolve_chain(args.chain)
    parse_address(args.contract_address)
    if mode is ExecutionMode.GAS_ESTIMATE:
        parse_address(args.estimate_gas_from_addr)

    abi = None
    if mode is ExecutionMode.RAW_BALANCE_QUERY:
        ensure_raw_method_supported(args.fn_name)
    else:
        if args.abi_filepath is None:
            raise ConfigurationError("--abi-filepath is required unless --rpc-eth is set")
        abi = merge_abis(load_contract_abi(), load_abi_file(args.abi_filepath))

    if args.block_confirmations < 0:
        raise ConfigurationError("--block-confirmations must not be negative")

    private_key = load_setter_key(environ) if mode is ExecutionMode.WRITE_TRANSACTION else None

    request = CallRequest(
        fn_name=args.fn_name,
        params=tuple(args.params),
        return_type=ReturnType(args.fn_ret_type) if args.fn_ret_type else None,
        estimate_from=args.estimate_gas_from_addr,
        confirmations=args.block_confirmations,
        private_key=private_key,
        show_param_types=args.show_param_types,
    )

    web3 = web3_factory(chain.rpc_url)
    ensure_web3_connected(web3, expected_chain_id=chain.chain_id)
    LOGGER.info("Connected to %s (chain %s)", chain.name, chain.chain_id)

    dispatcher = CallDispatcher(web3=web3, chain=chain, contract_address=args.contract_address, abi=abi)
    dispatcher.ensure_contract_account()
    return dispatcher.dispatch(mode, request)


def main(
    argv: Optional[List[str]] = None,
    *,
    web3_factory: Callable[[str], Web3] = _default_web3_factory,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    args = _parse_args(argv)
    if args.verbose:
        set_log_level(logging.DEBUG)

    start = time.perf_counter()
    try:
        result = run(args, web3_factory=web3_factory, environ=environ)
    except CrunnerError as exc:
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        LOGGER.debug("Unexpected failure", exc_info=True)
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1

    if result is None:
        print(UNSUPPORTED_MESSAGE)
        return 1

    print(result.render())
    LOGGER.info("(elapsed = %.2f secs)", time.perf_counter() - start)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
