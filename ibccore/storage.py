"""Host contract state: commitments, registries, capabilities and sequences."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import IbcError
from .types import (
    HASH_LENGTH,
    Address,
    ChannelData,
    ChannelId,
    ClientId,
    ClientType,
    ConnectionEnd,
    ConnectionId,
    Hash,
    PortId,
    Sequence,
    UnixTimestamp,
    Upgrade,
)


@dataclass
class ClientInfo:
    client_type: ClientType
    client_impl: Address


@dataclass
class HostInfo:
    next_client_seq: Sequence = 0
    next_connection_seq: Sequence = 0
    next_channel_seq: Sequence = 0
    expected_time_per_block: UnixTimestamp = 0


@dataclass(frozen=True)
class RecvStartSequence:
    seq: Sequence = 0
    prev_seq: Sequence = 0


@dataclass
class ChannelInfo:
    channel: ChannelData
    next_seq_send: Sequence = 0
    next_seq_recv: Sequence = 0
    next_seq_ack: Sequence = 0
    upgrade: Upgrade | None = None
    latest_error_rec_seq: Sequence = 0
    recv_start_seq: RecvStartSequence = field(default_factory=RecvStartSequence)
    ack_start_seq: Sequence = 0


class HostStorage:
    """State kept by the host; missing commitments read as the all-zero hash."""

    def __init__(self) -> None:
        self.commitments: dict[Hash, Hash] = {}
        self.client_registry: dict[ClientType, Address] = {}
        self.clients: dict[ClientId, ClientInfo] = {}
        self.port_capabilities: dict[PortId, Address] = {}
        self.channel_capabilities: dict[tuple[PortId, ChannelId], Address] = {}
        self.host_info = HostInfo()
        self.connections: dict[ConnectionId, ConnectionEnd] = {}
        self.channels: dict[tuple[PortId, ChannelId], ChannelInfo] = {}

    def get_commitment(self, commitment_hash: Hash) -> Hash:
        return self.commitments.get(commitment_hash, bytes(HASH_LENGTH))

    def calculate_block_delay(self, time_delay: UnixTimestamp) -> int:
        """The number of blocks covering ``time_delay``, rounded up."""
        per_block = self.host_info.expected_time_per_block
        if time_delay == 0 or per_block == 0:
            return 0
        return (time_delay + per_block - 1) // per_block

    def next_client_seq(self) -> Sequence:
        seq = self.host_info.next_client_seq
        self.host_info.next_client_seq += 1
        return seq

    def next_connection_seq(self) -> Sequence:
        seq = self.host_info.next_connection_seq
        self.host_info.next_connection_seq += 1
        return seq

    def next_channel_seq(self) -> Sequence:
        seq = self.host_info.next_channel_seq
        self.host_info.next_channel_seq += 1
        return seq

    def try_get_client_info(self, client_id: ClientId) -> ClientInfo:
        try:
            return self.clients[client_id]
        except KeyError:
            raise IbcError("Client not found") from None

    def try_get_connection_info(self, connection_id: ConnectionId) -> ConnectionEnd:
        try:
            return self.connections[connection_id]
        except KeyError:
            raise IbcError("Connection not found") from None

    def try_get_channel_info(self, port_id: PortId, channel_id: ChannelId) -> ChannelInfo:
        try:
            return self.channels[(port_id, channel_id)]
        except KeyError:
            raise IbcError("Channel not found") from None