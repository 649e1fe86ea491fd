"""An in-memory chain: deployed contracts, the current caller and emitted events."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from .errors import IbcError


@dataclass(frozen=True)
class Event:
    name: str
    args: tuple[Any, ...]


class Blockchain:
    """Shared state that contracts consult for block data, callers and peers."""

    def __init__(self, block_nonce: int = 0, block_timestamp: int = 0) -> None:
        self.block_nonce = block_nonce
        self.block_timestamp = block_timestamp
        self.events: list[Event] = []
        self._contracts: dict[bytes, Any] = {}
        self._callers: list[bytes] = []

    def deploy(self, address: bytes, contract: Any) -> Any:
        """Place a contract at an address and return it."""
        if address in self._contracts:
            raise IbcError("Address already in use")
        self._contracts[address] = contract
        return contract

    def contract(self, address: bytes) -> Any:
        try:
            return self._contracts[address]
        except KeyError:
            raise IbcError("No contract at address") from None

    def is_smart_contract(self, address: bytes) -> bool:
        return address in self._contracts

    def emit(self, name: str, *args: Any) -> Event:
        event = Event(name, args)
        self.events.append(event)
        return event

    @property
    def caller(self) -> bytes:
        """The address making the current call."""
        if not self._callers:
            raise IbcError("No active caller")
        return self._callers[-1]

    @contextmanager
    def call_as(self, caller: bytes) -> Iterator[bytes]:
        """Run the enclosed calls with ``caller`` as the calling address."""
        self._callers.append(caller)
        try:
            yield caller
        finally:
            self._callers.pop()