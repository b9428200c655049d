"""
Bridge configuration, read from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_RPC = os.getenv("RPC_URL", "https://mainnet.infura.io/v3/your_api_key")
DEFAULT_L1_CHAIN_ID = int(os.getenv("L1_CHAIN_ID", "1"))
DEFAULT_ROLLUP_ID = int(os.getenv("ROLLUP_ID", "1"))
DEFAULT_SEQUENCE_DB = os.getenv("SEQUENCE_DB", "sequences.db")


@dataclass
class BridgeConfig:
    rpc_url: str = DEFAULT_RPC
    l1_chain_id: int = DEFAULT_L1_CHAIN_ID
    rollup_id: int = DEFAULT_ROLLUP_ID
    rollup_manager_address: Optional[str] = None
    legacy_rollup_address: Optional[str] = None
    sequence_db: str = DEFAULT_SEQUENCE_DB

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        return cls(
            rpc_url=os.getenv("RPC_URL", DEFAULT_RPC),
            l1_chain_id=int(os.getenv("L1_CHAIN_ID", str(DEFAULT_L1_CHAIN_ID))),
            rollup_id=int(os.getenv("ROLLUP_ID", str(DEFAULT_ROLLUP_ID))),
            rollup_manager_address=os.getenv("ROLLUP_MANAGER_ADDRESS"),
            legacy_rollup_address=os.getenv("LEGACY_ROLLUP_ADDRESS"),
            sequence_db=os.getenv("SEQUENCE_DB", DEFAULT_SEQUENCE_DB),
        )

    def validate(self) -> None:
        if not self.rollup_manager_address:
            raise ValueError("rollup manager address is not set (ROLLUP_MANAGER_ADDRESS or --manager)")
        if not self.legacy_rollup_address:
            raise ValueError("legacy rollup address is not set (LEGACY_ROLLUP_ADDRESS or --legacy)")
        if self.l1_chain_id <= 0:
            raise ValueError(f"L1 chain id must be > 0, got {self.l1_chain_id}")
        if self.rollup_id <= 0:
            raise ValueError(f"rollup id must be > 0, got {self.rollup_id}")
