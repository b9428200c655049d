"""
Test doubles for web3 contract facades.

FakeContract mimics the `contract.functions.<name>(*args).call()` and
`.build_transaction(params)` surface so state reads and calldata building can
run without an L1 node.
"""

from typing import Any, Callable, Dict, List, Tuple

from rollup_l1_bridge.contracts import ROLLUP_DATA_FIELDS


class _BoundCall:
    def __init__(self, contract: "FakeContract", name: str, args: Tuple[Any, ...]):
        self._contract = contract
        self._name = name
        self._args = args

    def call(self) -> Any:
        self._contract.calls.append((self._name, self._args))
        handler = self._contract.handlers[self._name]
        if isinstance(handler, Exception):
            raise handler
        if callable(handler):
            return handler(*self._args)
        return handler

    def build_transaction(self, params: Dict[str, Any]) -> Any:
        self._contract.calls.append((self._name, self._args))
        self._contract.built.append(params)
        handler = self._contract.handlers[self._name]
        if isinstance(handler, Exception):
            raise handler
        return handler(*self._args)


class _Functions:
    def __init__(self, contract: "FakeContract"):
        self._contract = contract

    def __getattr__(self, name: str) -> Callable[..., _BoundCall]:
        if name not in self._contract.handlers:
            raise AttributeError(name)
        return lambda *args: _BoundCall(self._contract, name, args)


class FakeContract:
    """
    Contract double. Each handler is either a value, an exception to raise,
    or a callable receiving the call arguments.
    """

    def __init__(self, **handlers: Any):
        self.handlers = handlers
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.built: List[Dict[str, Any]] = []
        self.functions = _Functions(self)

    def called(self, name: str) -> bool:
        return any(call_name == name for call_name, _ in self.calls)


def make_rollup_data(**overrides: Any) -> Tuple[Any, ...]:
    """rollupIDToRollupData tuple with zeroed fields except the overrides."""
    values: Dict[str, Any] = {name: 0 for name in ROLLUP_DATA_FIELDS}
    values["rollupContract"] = "0x" + "00" * 20
    values["verifier"] = "0x" + "00" * 20
    values["lastLocalExitRoot"] = b"\x00" * 32
    values.update(overrides)
    return tuple(values[name] for name in ROLLUP_DATA_FIELDS)


def make_proof_hex(prefix: bool = True) -> str:
    """Proof whose word i is 32 bytes all equal to i."""
    body = "".join(bytes([i]).hex() * 32 for i in range(24))
    return ("0x" + body) if prefix else body
