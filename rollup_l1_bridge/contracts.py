"""
Connection and contract facades for the L1 rollup contracts.

Two generations are supported side by side:
  - the legacy single-rollup zkEVM contract
  - the rollup manager, which tracks many rollups by id
"""

from __future__ import annotations

import sys
import time
from typing import Any, Dict, List, Tuple

from web3 import Web3
from web3.contract import Contract

NETWORKS: Dict[int, str] = {
    1: "Ethereum Mainnet",
    11155111: "Sepolia Testnet",
    17000: "Holesky Testnet",
    137: "Polygon",
}

LEGACY_ROLLUP_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "lastVerifiedBatch",
        "outputs": [{"internalType": "uint64", "name": "", "type": "uint64"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "chainID",
        "outputs": [{"internalType": "uint64", "name": "", "type": "uint64"}],
        "stateMutability": "view",
        "type": "function",
    },
]

# Output order of rollupIDToRollupData; web3 returns the fields as a plain tuple.
ROLLUP_DATA_FIELDS: Tuple[str, ...] = (
    "rollupContract",
    "chainID",
    "verifier",
    "forkID",
    "lastLocalExitRoot",
    "lastBatchSequenced",
    "lastVerifiedBatch",
    "lastPendingState",
    "lastPendingStateConsolidated",
    "lastVerifiedBatchBeforeUpgrade",
    "rollupTypeID",
    "rollupCompatibilityID",
)

_ROLLUP_DATA_TYPES = {
    "rollupContract": "address",
    "chainID": "uint64",
    "verifier": "address",
    "forkID": "uint64",
    "lastLocalExitRoot": "bytes32",
    "lastBatchSequenced": "uint64",
    "lastVerifiedBatch": "uint64",
    "lastPendingState": "uint64",
    "lastPendingStateConsolidated": "uint64",
    "lastVerifiedBatchBeforeUpgrade": "uint64",
    "rollupTypeID": "uint64",
    "rollupCompatibilityID": "uint8",
}

ROLLUP_MANAGER_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "uint32", "name": "rollupID", "type": "uint32"}],
        "name": "rollupIDToRollupData",
        "outputs": [
            {"internalType": _ROLLUP_DATA_TYPES[name], "name": name, "type": _ROLLUP_DATA_TYPES[name]}
            for name in ROLLUP_DATA_FIELDS
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint32", "name": "rollupID", "type": "uint32"},
            {"internalType": "uint64", "name": "batchNum", "type": "uint64"},
        ],
        "name": "getRollupSequencedBatches",
        "outputs": [
            {
                "components": [
                    {"internalType": "bytes32", "name": "accInputHash", "type": "bytes32"},
                    {"internalType": "uint64", "name": "sequencedTimestamp", "type": "uint64"},
                    {"internalType": "uint64", "name": "previousLastBatchSequenced", "type": "uint64"},
                ],
                "internalType": "struct LegacyZKEVMStateVariables.SequencedBatchData",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint32", "name": "rollupID", "type": "uint32"},
            {"internalType": "uint64", "name": "pendingStateNum", "type": "uint64"},
            {"internalType": "uint64", "name": "initNumBatch", "type": "uint64"},
            {"internalType": "uint64", "name": "finalNewBatch", "type": "uint64"},
            {"internalType": "bytes32", "name": "newLocalExitRoot", "type": "bytes32"},
            {"internalType": "bytes32", "name": "newStateRoot", "type": "bytes32"},
            {"internalType": "address", "name": "beneficiary", "type": "address"},
            {"internalType": "bytes32[24]", "name": "proof", "type": "bytes32[24]"},
        ],
        "name": "verifyBatchesTrustedAggregator",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


def network_name(cid: int) -> str:
    return NETWORKS.get(cid, f"Unknown (chain ID {cid})")


def normalize_address(addr: str) -> str:
    try:
        return Web3.to_checksum_address(addr.strip())
    except Exception:
        raise ValueError(f"Invalid address: {addr!r}")


def connect(rpc: str, timeout: int = 25) -> Web3:
    start = time.time()
    w3 = Web3(Web3.HTTPProvider(rpc, request_kwargs={"timeout": timeout}))

    if not w3.is_connected():
        raise ConnectionError(f"Failed to connect to RPC endpoint: {rpc}")

    latency = time.time() - start
    try:
        cid = int(w3.eth.chain_id)
        tip = int(w3.eth.block_number)
        print(
            f"🌐 Connected to {network_name(cid)} (chainId {cid}, tip={tip}) in {latency:.2f}s",
            file=sys.stderr,
        )
    except Exception:
        print(f"🌐 Connected to RPC (chain info unavailable) in {latency:.2f}s", file=sys.stderr)

    return w3


def rollup_data_field(rollup_data: Any, name: str) -> Any:
    """Pick a named field out of a rollupIDToRollupData result (tuple or mapping)."""
    if isinstance(rollup_data, dict):
        return rollup_data[name]
    return rollup_data[ROLLUP_DATA_FIELDS.index(name)]


def load_contracts(w3: Web3, manager_address: str, legacy_address: str) -> Tuple[Contract, Contract]:
    manager = w3.eth.contract(address=normalize_address(manager_address), abi=ROLLUP_MANAGER_ABI)
    legacy = w3.eth.contract(address=normalize_address(legacy_address), abi=LEGACY_ROLLUP_ABI)
    return manager, legacy
