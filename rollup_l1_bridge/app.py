# app.py
"""
rollup-l1-bridge: inspect a zkEVM rollup's L1 state and prepare verify txs.

This script:
  - Connects to an EVM-compatible L1 via web3.py
  - Reads the verified batch frontier and L2 chain id from the rollup manager,
    falling back to the legacy zkEVM contract
  - Builds verifyBatchesTrustedAggregator calldata from a final proof (never sent)
  - Records submitted batch ranges in a local sqlite ledger
"""

import argparse
import json
import logging
import sqlite3
import sys
import time
from typing import Any, Dict

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

from .calldata import VerifyCalldataBuilder
from .config import BridgeConfig
from .contracts import connect, load_contracts, network_name
from .errors import BridgeError
from .ledger import SequenceLedger
from .state import RollupStateReader
from .types import FinalProofInputs, Sequence


def emit(payload: Dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(json.dumps(payload, separators=(",", ":"), sort_keys=True))


def load_proof_inputs(path: str) -> FinalProofInputs:
    with open(path, "r") as f:
        raw = json.load(f)
    return FinalProofInputs(
        proof=raw["proof"],
        new_local_exit_root=raw["newLocalExitRoot"],
        new_state_root=raw["newStateRoot"],
    )


def cmd_state(args: argparse.Namespace, cfg: BridgeConfig) -> None:
    w3 = connect(cfg.rpc_url)
    manager, legacy = load_contracts(w3, cfg.rollup_manager_address, cfg.legacy_rollup_address)
    reader = RollupStateReader(w3, manager, legacy, cfg.rollup_id)

    t0 = time.time()
    header = reader.latest_block_header()
    payload: Dict[str, Any] = {
        "mode": "rollup_state",
        "network": network_name(int(w3.eth.chain_id)),
        "rollupId": reader.rollup_id,
        "lastVerifiedBatch": reader.latest_verified_batch(),
        "l2ChainId": reader.l2_chain_id(),
        "l1Block": int(header["number"]) if header is not None else None,
        "generatedAtUtc": time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime()),
    }
    if args.batch is not None:
        payload["accInputHash"] = Web3.to_hex(reader.acc_input_hash(args.batch))

    print(
        f"📦 Rollup {payload['rollupId']} verified up to batch {payload['lastVerifiedBatch']} "
        f"(L2 chainId {payload['l2ChainId']}) in {time.time() - t0:.2f}s",
        file=sys.stderr,
    )
    emit(payload, args.pretty)


def cmd_build_verify(args: argparse.Namespace, cfg: BridgeConfig) -> None:
    inputs = load_proof_inputs(args.inputs)
    w3 = connect(cfg.rpc_url)
    manager, _ = load_contracts(w3, cfg.rollup_manager_address, cfg.legacy_rollup_address)
    builder = VerifyCalldataBuilder(manager, cfg.rollup_id, cfg.l1_chain_id)

    call = builder.build(args.last, args.new, inputs, args.beneficiary)
    print(
        f"🧾 verifyBatchesTrustedAggregator [{args.last}, {args.new}] -> {call.to} "
        f"({len(call.data)} bytes calldata, not sent)",
        file=sys.stderr,
    )
    emit({"to": call.to, "data": Web3.to_hex(call.data)}, args.pretty)


def cmd_record_sequence(args: argparse.Namespace, cfg: BridgeConfig) -> None:
    ledger = SequenceLedger()
    conn = sqlite3.connect(args.db or cfg.sequence_db)
    try:
        with conn:
            ledger.create_schema(conn)
            ledger.add_sequence(Sequence(args.from_batch, args.to_batch), conn)
    finally:
        conn.close()
    print(f"📚 Recorded sequence [{args.from_batch}, {args.to_batch}]", file=sys.stderr)
    emit({"fromBatchNumber": args.from_batch, "toBatchNumber": args.to_batch}, args.pretty)


def parse_args() -> argparse.Namespace:
    defaults = BridgeConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Read zkEVM rollup state from L1 and prepare verify-batches calldata.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--rpc", default=defaults.rpc_url, help="L1 RPC URL (default from RPC_URL env).")
    parser.add_argument(
        "--manager",
        default=defaults.rollup_manager_address,
        help="Rollup manager contract address (ROLLUP_MANAGER_ADDRESS env).",
    )
    parser.add_argument(
        "--legacy",
        default=defaults.legacy_rollup_address,
        help="Legacy zkEVM contract address (LEGACY_ROLLUP_ADDRESS env).",
    )
    parser.add_argument("--rollup-id", type=int, default=defaults.rollup_id, help="Rollup id in the manager.")
    parser.add_argument("--l1-chain-id", type=int, default=defaults.l1_chain_id, help="L1 chain id.")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON instead of compact JSON.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    state = sub.add_parser("state", help="Show the rollup's L1-confirmed state.")
    state.add_argument("--batch", type=int, help="Also show the accumulated input hash of this batch.")
    state.set_defaults(func=cmd_state)

    verify = sub.add_parser("build-verify", help="Build verifyBatchesTrustedAggregator calldata.")
    verify.add_argument("inputs", help="JSON file with proof, newLocalExitRoot and newStateRoot.")
    verify.add_argument("--last", type=int, required=True, help="Last verified batch.")
    verify.add_argument("--new", type=int, required=True, help="New verified batch.")
    verify.add_argument("--beneficiary", required=True, help="Address receiving the verification reward.")
    verify.set_defaults(func=cmd_build_verify)

    record = sub.add_parser("record-sequence", help="Record a submitted batch range.")
    record.add_argument("from_batch", type=int, help="First batch of the range.")
    record.add_argument("to_batch", type=int, help="Last batch of the range.")
    record.add_argument("--db", help="sqlite ledger path (default from SEQUENCE_DB env).")
    record.set_defaults(func=cmd_record_sequence)

    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    cfg = BridgeConfig(
        rpc_url=args.rpc,
        l1_chain_id=args.l1_chain_id,
        rollup_id=args.rollup_id,
        rollup_manager_address=args.manager,
        legacy_rollup_address=args.legacy,
    )

    if args.command != "record-sequence":
        if "your_api_key" in cfg.rpc_url:
            print(
                "⚠️  RPC_URL is not set and DEFAULT_RPC still uses a placeholder key. "
                "Set RPC_URL or pass --rpc.",
                file=sys.stderr,
            )
        try:
            cfg.validate()
        except ValueError as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)

    try:
        args.func(args, cfg)
    except (BridgeError, Web3Exception, requests.RequestException, sqlite3.Error, OSError, KeyError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
