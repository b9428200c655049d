"""
Throwaway signing identities for shaping L1 transactions.

Every call mints a new random key. The resulting EphemeralAuth is only good
for building calldata (gas estimation, ABI encoding); it is marked no_send and
carries placeholder nonce/gas values so nothing is fetched from the chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .errors import KeyGenerationError

PLACEHOLDER_NONCE = 1
PLACEHOLDER_GAS = 1
PLACEHOLDER_GAS_PRICE = 1


@dataclass(frozen=True)
class EphemeralAuth:
    account: LocalAccount
    chain_id: int
    nonce: int = PLACEHOLDER_NONCE
    gas: int = PLACEHOLDER_GAS
    gas_price: int = PLACEHOLDER_GAS_PRICE
    no_send: bool = True

    @property
    def address(self) -> str:
        return self.account.address

    def tx_params(self) -> Dict[str, Any]:
        return {
            "from": self.account.address,
            "chainId": self.chain_id,
            "nonce": self.nonce,
            "gas": self.gas,
            "gasPrice": self.gas_price,
        }

    def __repr__(self) -> str:
        return f"EphemeralAuth(address={self.address}, chain_id={self.chain_id}, no_send={self.no_send})"


def create_ephemeral_auth(chain_id: int) -> EphemeralAuth:
    if chain_id <= 0:
        raise KeyGenerationError(
            f"failed to generate a fake authorization to estimate L1 txs: invalid chain id {chain_id}"
        )
    try:
        account = Account.create()
    except Exception as e:
        raise KeyGenerationError("failed to generate a private key to estimate L1 txs") from e
    return EphemeralAuth(account=account, chain_id=chain_id)
