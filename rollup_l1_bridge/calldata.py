"""
Build (but never send) the rollup manager's verifyBatchesTrustedAggregator call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from eth_utils import remove_0x_prefix
from hexbytes import HexBytes

from .auth import create_ephemeral_auth
from .contracts import normalize_address
from .errors import InvalidRootError, KeyGenerationError, try_parse_error
from .proof import encode_proof
from .types import FinalProofInputs, RootLike

logger = logging.getLogger(__name__)

ROOT_SIZE = 32

_HEX = re.compile(r"[0-9a-fA-F]*")

# TODO: pass the real pending state number once pending state consolidation is supported.
PENDING_STATE_NUM = 0


@dataclass(frozen=True)
class UnsignedCall:
    to: str
    data: bytes


def to_root(name: str, value: RootLike) -> bytes:
    if isinstance(value, str):
        digits = remove_0x_prefix(value)
        if len(digits) % 2 or not _HEX.fullmatch(digits):
            raise InvalidRootError(f"{name} is not an even-length hex string: {value!r}")
    raw = bytes(HexBytes(value))
    if len(raw) < ROOT_SIZE:
        raise InvalidRootError(f"{name} must be {ROOT_SIZE} bytes, got {len(raw)}")
    if len(raw) > ROOT_SIZE:
        logger.warning("%s is %d bytes, truncating to %d", name, len(raw), ROOT_SIZE)
    return raw[:ROOT_SIZE]


class VerifyCalldataBuilder:
    def __init__(self, rollup_manager: Any, rollup_id: int, l1_chain_id: int):
        self.rollup_manager = rollup_manager
        self.rollup_id = rollup_id
        self.l1_chain_id = l1_chain_id

    def build(
        self,
        last_verified_batch: int,
        new_verified_batch: int,
        inputs: FinalProofInputs,
        beneficiary: str,
    ) -> UnsignedCall:
        """
        Return the destination and calldata of a trusted verify-batches tx.

        The transaction is shaped with a throwaway key and placeholder
        nonce/gas values; only `to` and `data` are meaningful and only those
        are returned.
        """
        try:
            auth = create_ephemeral_auth(self.l1_chain_id)
        except KeyGenerationError as e:
            raise KeyGenerationError(f"failed to build trusted verify batches, err: {e}") from e

        new_local_exit_root = to_root("newLocalExitRoot", inputs.new_local_exit_root)
        new_state_root = to_root("newStateRoot", inputs.new_state_root)

        try:
            proof = encode_proof(inputs.proof)
        except ValueError as e:
            logger.error("error converting proof. Error: %s, Proof: %s", e, inputs.proof)
            raise

        try:
            tx = self.rollup_manager.functions.verifyBatchesTrustedAggregator(
                self.rollup_id,
                PENDING_STATE_NUM,
                last_verified_batch,
                new_verified_batch,
                new_local_exit_root,
                new_state_root,
                normalize_address(beneficiary),
                list(proof),
            ).build_transaction(auth.tx_params())
        except Exception as e:
            parsed = try_parse_error(e)
            if parsed is not None:
                raise parsed from e
            raise

        return UnsignedCall(to=tx["to"], data=bytes(HexBytes(tx["data"])))
