"""
Read the rollup's L1-confirmed state across both contract generations.

Each read names its providers in priority order. The rollup manager is
authoritative for the verified batch; the legacy contract is authoritative
for the L2 chain id. The two orders differ on purpose and must stay that way
while deployments migrate between contracts.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from web3 import Web3
from web3.exceptions import BlockNotFound

from .contracts import rollup_data_field
from .errors import EmptyStateError

logger = logging.getLogger(__name__)

Provider = Tuple[str, Callable[[], Any]]


class RollupStateReader:
    """
    Stateless reader over the rollup manager and legacy rollup contracts.

    Nothing is cached: every call goes to L1, so callers always see the
    chain's current view. No retries are done here.
    """

    def __init__(self, w3: Web3, rollup_manager: Any, legacy_rollup: Any, rollup_id: int):
        self.w3 = w3
        self.rollup_manager = rollup_manager
        self.legacy_rollup = legacy_rollup
        self._rollup_id = rollup_id

    @property
    def rollup_id(self) -> int:
        return self._rollup_id

    def _rollup_data(self) -> Any:
        return self.rollup_manager.functions.rollupIDToRollupData(self._rollup_id).call()

    def _resolve(
        self,
        what: str,
        providers: List[Provider],
        accept: Optional[Callable[[Any], Optional[Exception]]] = None,
    ) -> Any:
        """
        Try providers in order and return the first accepted value.

        `accept` returns an exception for values that must not be used; that
        exception stands in for the provider's failure. When every provider
        fails, the last failure is raised.
        """
        last_error: Optional[Exception] = None
        for source, read in providers:
            try:
                value = read()
            except Exception as e:
                logger.debug("error getting %s from %s: %s", what, source, e)
                last_error = e
                continue
            logger.debug("%s read from %s: %s", what, source, value)
            rejection = accept(value) if accept else None
            if rejection is None:
                return value
            logger.debug("%s from %s rejected: %s", what, source, rejection)
            last_error = rejection
        if last_error is None:
            raise ValueError(f"no providers configured for {what}")
        raise last_error

    def latest_verified_batch(self) -> int:
        return int(
            self._resolve(
                "lastVerifiedBatch",
                [
                    ("rollupManager", lambda: rollup_data_field(self._rollup_data(), "lastVerifiedBatch")),
                    ("legacyRollup", lambda: self.legacy_rollup.functions.lastVerifiedBatch().call()),
                ],
            )
        )

    def l2_chain_id(self) -> int:
        def non_zero(chain_id: int) -> Optional[Exception]:
            if chain_id == 0:
                return EmptyStateError(f"chainID received is 0 (rollupID {self._rollup_id})")
            return None

        return int(
            self._resolve(
                "chainID",
                [
                    ("legacyRollup", lambda: self.legacy_rollup.functions.chainID().call()),
                    ("rollupManager", lambda: rollup_data_field(self._rollup_data(), "chainID")),
                ],
                accept=non_zero,
            )
        )

    def acc_input_hash(self, batch_number: int) -> bytes:
        sequenced = self.rollup_manager.functions.getRollupSequencedBatches(
            self._rollup_id, batch_number
        ).call()
        if isinstance(sequenced, dict):
            return bytes(sequenced["accInputHash"])
        return bytes(sequenced[0])

    def latest_block_header(self) -> Optional[Any]:
        try:
            return self.w3.eth.get_block("latest")
        except BlockNotFound:
            return None
