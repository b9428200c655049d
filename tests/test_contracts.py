"""
Tests for rollup_l1_bridge/contracts.py
"""
import pytest
from web3 import Web3

from helpers import make_rollup_data
from rollup_l1_bridge.contracts import (
    load_contracts,
    network_name,
    normalize_address,
    rollup_data_field,
)

MANAGER = "0x5132a183e9f3cb7c848b0aac5ae0c4f0491b7ab2"
LEGACY = "0x519e42c24163192dca44cd3fbdcebf6be9130987"


class TestHelpers:

    def test_network_name(self):
        assert network_name(1) == "Ethereum Mainnet"
        assert network_name(424242) == "Unknown (chain ID 424242)"

    def test_normalize_address(self):
        assert normalize_address(f"  {MANAGER} ") == Web3.to_checksum_address(MANAGER)

    def test_normalize_invalid(self):
        with pytest.raises(ValueError, match="Invalid address"):
            normalize_address("0x1234")

    def test_rollup_data_field(self):
        data = make_rollup_data(chainID=1101, lastVerifiedBatch=88)

        assert rollup_data_field(data, "chainID") == 1101
        assert rollup_data_field(data, "lastVerifiedBatch") == 88


class TestLoadContracts:

    def test_facades(self):
        manager, legacy = load_contracts(Web3(), MANAGER, LEGACY)

        assert manager.address == Web3.to_checksum_address(MANAGER)
        assert legacy.address == Web3.to_checksum_address(LEGACY)
        assert hasattr(manager.functions, "rollupIDToRollupData")
        assert hasattr(manager.functions, "getRollupSequencedBatches")
        assert hasattr(legacy.functions, "chainID")
        assert hasattr(legacy.functions, "lastVerifiedBatch")
