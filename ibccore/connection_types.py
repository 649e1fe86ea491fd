"""Connection handshake message types."""

from __future__ import annotations

from dataclasses import dataclass, field

from .types import (
    ClientId,
    ConnectionCounterparty,
    ConnectionId,
    Hash,
    Height,
    UnixTimestamp,
    Version,
)

GENERATED_CONNECTION_ID_EVENT = "generatedConnectionIdEvent"


@dataclass
class MsgConnectionOpenInit:
    client_id: ClientId
    counterparty: ConnectionCounterparty
    version: Version
    delay_period: UnixTimestamp


@dataclass
class MsgConnectionOpenTry:
    """Notice on chain B of a connection attempt started on chain A."""

    counterparty: ConnectionCounterparty
    delay_period: UnixTimestamp
    client_id: ClientId
    client_state_bytes: bytes
    counterparty_versions: list[Version] = field(default_factory=list)
    proof_init: Hash = b""
    proof_client: Hash = b""
    proof_consensus: Hash = b""
    proof_height: Height = field(default_factory=Height)
    consensus_height: Height = field(default_factory=Height)
    host_consensus_state_proof: Hash = b""


@dataclass
class MsgConnectionOpenAck:
    """Acceptance on chain A of the attempt chain B answered."""

    connection_id: ConnectionId
    client_state_bytes: bytes
    version: Version
    counterparty_connection_id: ConnectionId
    proof_try: Hash = b""
    proof_client: Hash = b""
    proof_consensus: Hash = b""
    proof_height: Height = field(default_factory=Height)
    consensus_height: Height = field(default_factory=Height)
    host_consensus_state_proof: Hash = b""


@dataclass
class MsgConnectionOpenConfirm:
    connection_id: ConnectionId
    proof_ack: Hash
    proof_height: Height