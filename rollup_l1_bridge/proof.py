"""
Conversion of a final proof hex string into the bytes32[24] argument the
rollup manager's verifier expects.
"""

from __future__ import annotations

import re
from typing import Tuple

from eth_utils import remove_0x_prefix

from .errors import ProofDecodeError, ProofFormatError

PROOF_WORDS = 24
WORD_SIZE = 32
PROOF_HEX_LENGTH = PROOF_WORDS * WORD_SIZE * 2

_WORD_HEX = re.compile(r"[0-9a-fA-F]{%d}" % (WORD_SIZE * 2))


def encode_proof(proof_hex: str) -> Tuple[bytes, ...]:
    p = remove_0x_prefix(proof_hex)
    if len(p) != PROOF_HEX_LENGTH:
        raise ProofFormatError(len(proof_hex))

    words = []
    for i in range(PROOF_WORDS):
        chunk = p[i * WORD_SIZE * 2 : (i + 1) * WORD_SIZE * 2]
        if not _WORD_HEX.fullmatch(chunk):
            raise ProofDecodeError(i, chunk)
        words.append(bytes.fromhex(chunk))
    return tuple(words)
