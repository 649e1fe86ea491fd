"""The interface a light client contract offers to the IBC core."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import (
    ClientId,
    Height,
    LatestInfo,
    UnixTimestamp,
    VerifyMembershipArgs,
    VerifyNonMembershipArgs,
)


@runtime_checkable
class ClientContract(Protocol):
    """Calls the core makes on a registered light client."""

    def initialize_client(
        self, encoded_client_state: bytes, encoded_consensus_state: bytes
    ) -> Height:
        """Store the initial states and return the height they belong to."""
        ...

    def update_client(self, client_id: ClientId, encoded_client_message: bytes) -> list[Height]:
        """Apply a client message and return the heights that were updated."""
        ...

    def get_client_state(self, client_id: ClientId) -> bytes:
        """The encoded client state."""
        ...

    def get_consensus_state(self, client_id: ClientId, height: Height) -> bytes:
        """The encoded consensus state at a height."""
        ...

    def get_timestamp_at_height(self, client_id: ClientId, height: Height) -> UnixTimestamp:
        """The timestamp, in nanoseconds since the epoch, of a height."""
        ...

    def get_latest_info(self, client_id: ClientId) -> LatestInfo:
        """The latest height, its timestamp and the client status."""
        ...

    def verify_membership(self, args: VerifyMembershipArgs) -> bool:
        """Whether the value is proven to be stored at the path."""
        ...

    def verify_non_membership(self, args: VerifyNonMembershipArgs) -> bool:
        """Whether nothing is proven to be stored at the path."""
        ...