from __future__ import annotations

from dataclasses import dataclass
from typing import Union

RootLike = Union[bytes, str]


@dataclass(frozen=True)
class FinalProofInputs:
    """A finalized proof plus the roots it commits to, as handed over by the prover."""
    proof: str
    new_local_exit_root: RootLike
    new_state_root: RootLike


@dataclass(frozen=True)
class Sequence:
    """A contiguous [from, to] range of batches submitted together for verification."""
    from_batch_number: int
    to_batch_number: int
