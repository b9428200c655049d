"""
rollup_l1_bridge: L1 state reads and verify-batches calldata for a zkEVM rollup.

  - Reads the verified frontier, L2 chain id and accumulated input hashes from
    the rollup manager, falling back to the legacy zkEVM contract
  - Encodes final proofs into the bytes32[24] verifier argument
  - Builds verifyBatchesTrustedAggregator calldata with a throwaway key
  - Records submitted batch ranges in a SQL ledger
"""

from .auth import EphemeralAuth, create_ephemeral_auth
from .calldata import PENDING_STATE_NUM, UnsignedCall, VerifyCalldataBuilder
from .errors import (
    BridgeError,
    ContractRevertError,
    EmptyStateError,
    InvalidRootError,
    KeyGenerationError,
    ProofDecodeError,
    ProofFormatError,
)
from .ledger import SequenceLedger
from .proof import encode_proof
from .state import RollupStateReader
from .types import FinalProofInputs, Sequence

__all__ = [
    "BridgeError",
    "ContractRevertError",
    "EmptyStateError",
    "EphemeralAuth",
    "FinalProofInputs",
    "InvalidRootError",
    "KeyGenerationError",
    "PENDING_STATE_NUM",
    "ProofDecodeError",
    "ProofFormatError",
    "RollupStateReader",
    "Sequence",
    "SequenceLedger",
    "UnsignedCall",
    "VerifyCalldataBuilder",
    "create_ephemeral_auth",
    "encode_proof",
]
