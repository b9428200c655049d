"""
Error kinds raised by the rollup L1 bridge.

Transport failures (web3 / requests) and storage failures (DB-API) are not
wrapped here; they reach the caller unchanged.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from eth_abi import decode as abi_decode
from web3 import Web3
from web3.exceptions import ContractCustomError, ContractLogicError


class BridgeError(Exception):
    """Base class for every error raised by this package."""


class ProofFormatError(BridgeError, ValueError):
    def __init__(self, length: int):
        super().__init__(f"invalid proof length. Length: {length}")
        self.length = length


class ProofDecodeError(BridgeError, ValueError):
    def __init__(self, index: int, chunk: str):
        super().__init__(f"failed to decode proof word {index}: {chunk!r} is not 32 bytes of hex")
        self.index = index


class InvalidRootError(BridgeError, ValueError):
    pass


class EmptyStateError(BridgeError):
    pass


class KeyGenerationError(BridgeError):
    pass


class ContractRevertError(BridgeError):
    def __init__(self, reason: str):
        super().__init__(f"execution reverted: {reason}")
        self.reason = reason


# Custom errors the rollup manager reverts with on the verify path.
ROLLUP_MANAGER_ERRORS = [
    "OnlyTrustedAggregator()",
    "RollupMustExist()",
    "InitNumBatchAboveLastVerifiedBatch()",
    "InitNumBatchDoesNotMatchPendingState()",
    "FinalNumBatchBelowLastVerifiedBatch()",
    "FinalNumBatchDoesNotMatchPendingState()",
    "FinalPendingStateNumInvalid()",
    "OldAccInputHashDoesNotExist()",
    "NewAccInputHashDoesNotExist()",
    "NewStateRootNotInsidePrime()",
    "InvalidProof()",
    "PendingStateNotConsolidable()",
    "TrustedAggregatorTimeoutNotExpired()",
    "ExceedMaxVerifyBatches()",
]

ERROR_SELECTORS: Dict[str, str] = {
    Web3.keccak(text=signature)[:4].hex().removeprefix("0x"): signature[: signature.index("(")]
    for signature in ROLLUP_MANAGER_ERRORS
}

# Error(string)
REVERT_STRING_SELECTOR = "08c379a0"

_REVERT_MESSAGE = re.compile(r"execution reverted:\s*(?P<reason>[^'\"\n}]+)")


def _reason_from_payload(payload: str) -> Optional[str]:
    data = payload.lower().removeprefix("0x")
    selector = data[:8]
    if selector in ERROR_SELECTORS:
        return ERROR_SELECTORS[selector]
    if selector == REVERT_STRING_SELECTOR:
        try:
            (reason,) = abi_decode(["string"], bytes.fromhex(data[8:]))
        except Exception:
            return None
        return reason
    return None


def try_parse_error(error: Exception) -> Optional[ContractRevertError]:
    """
    Recognise known revert formats and turn them into a ContractRevertError.

    Returns None when the error does not look like an on-chain revert, in
    which case the caller should raise the original error.
    """
    if isinstance(error, ContractCustomError):
        payload = error.data if isinstance(error.data, str) else str(error)
        reason = _reason_from_payload(payload)
        if reason is not None:
            return ContractRevertError(reason)
    if isinstance(error, ContractLogicError) and isinstance(error.data, str):
        reason = _reason_from_payload(error.data)
        if reason is not None:
            return ContractRevertError(reason)

    message = getattr(error, "message", None)
    if not isinstance(message, str):
        message = str(error)
    match = _REVERT_MESSAGE.search(message)
    if match:
        return ContractRevertError(match.group("reason").strip())
    return None
