"""Core IBC data types: heights, channels, connections and client results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import UNKNOWN_CHANNEL_ORDER, IbcError

HASH_LENGTH = 32

Hash = bytes
Address = bytes
UnixTimestamp = int
Sequence = int
ClientId = str
ClientType = str
ConnectionId = str
ChannelId = str
PortId = str
Path = str
Feature = str
FeatureId = str

ORDERED = "ORDER_ORDERED"
UNORDERED = "ORDER_UNORDERED"

_U64_SPAN = 1 << 64


@dataclass(frozen=True, order=True)
class Height:
    """A revision number and height; ordered lexicographically."""

    revision_number: int = 0
    revision_height: int = 0

    def is_zero(self) -> bool:
        return self.revision_number == 0 and self.revision_height == 0

    def to_int_concat(self) -> int:
        """Both fields as 8-byte big-endian words, read as one integer."""
        return self.revision_number * _U64_SPAN + self.revision_height


class ChannelState(Enum):
    UNINITIALIZED_UNSPECIFIED = 0
    INIT = 1
    TRY_OPEN = 2
    OPEN = 3
    CLOSED = 4
    FLUSHING = 5
    FLUSH_COMPLETE = 6


class ChannelOrder(Enum):
    NONE_UNSPECIFIED = 0
    UNORDERED = 1
    ORDERED = 2

    def feature_name(self) -> str:
        """The connection feature string naming this ordering."""
        if self is ChannelOrder.ORDERED:
            return ORDERED
        if self is ChannelOrder.UNORDERED:
            return UNORDERED
        raise IbcError(UNKNOWN_CHANNEL_ORDER)


@dataclass
class ChannelCounterparty:
    port_id: PortId
    channel_id: ChannelId


@dataclass
class ChannelData:
    state: ChannelState
    ordering: ChannelOrder
    counterparty: ChannelCounterparty
    connection_hops: list[ConnectionId]
    version: str
    upgrade_sequence: Sequence = 0


@dataclass
class Timeout:
    height: Height
    timestamp: UnixTimestamp


@dataclass
class UpgradeFields:
    ordering: ChannelOrder
    connection_hops: list[ConnectionId]
    version: str


@dataclass
class Upgrade:
    fields: UpgradeFields
    timeout: Timeout
    next_sequence_send: Sequence


@dataclass
class ErrorReceipt:
    sequence: Sequence
    message: bytes


@dataclass
class MerklePrefix:
    key_prefix: bytes


class ConnectionState(Enum):
    UNINITIALIZED_UNSPECIFIED = 0
    INIT = 1
    TRY_OPEN = 2
    OPEN = 3


@dataclass
class ConnectionCounterparty:
    client_id: ClientId
    connection_id: ConnectionId
    prefix: MerklePrefix


@dataclass
class Version:
    identifier: FeatureId
    features: list[Feature] = field(default_factory=list)


@dataclass
class ConnectionEnd:
    client_id: ClientId
    versions: list[Version]
    state: ConnectionState
    counterparty: ConnectionCounterparty
    delay_period: UnixTimestamp


class ClientStatus(Enum):
    NONE = 0
    ACTIVE = 1
    EXPIRED = 2
    FROZEN = 3


@dataclass
class LatestInfo:
    latest_height: Height
    latest_timestamp: UnixTimestamp
    client_status: ClientStatus


@dataclass
class VerifyMembershipArgs:
    client_id: ClientId
    height: Height
    delay_time_period: UnixTimestamp
    delay_block_period: int
    proof: Hash
    prefix: bytes
    path: Path
    value: bytes


@dataclass
class VerifyNonMembershipArgs:
    client_id: ClientId
    height: Height
    delay_time_period: UnixTimestamp
    delay_block_period: int
    proof: Hash
    prefix: bytes
    path: Path


@dataclass
class ConsensusStateUpdate:
    consensus_state_commitment: Hash
    height: Height