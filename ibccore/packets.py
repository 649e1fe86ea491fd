"""Packet and channel handshake message types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .types import (
    ChannelData,
    ChannelId,
    Hash,
    Height,
    PortId,
    Sequence,
    UnixTimestamp,
)


class PacketReceipt(Enum):
    NONE = 0
    SUCCESSFUL = 1


@dataclass
class Packet:
    """Data carried between chains over a channel.

    ``seq`` orders sends and receives; the ports and channels name both
    ends; ``data`` is opaque to the core; a non-zero ``timeout_height`` or
    ``timeout_timestamp`` on the destination chain ends the packet's life.
    """

    seq: Sequence
    src_port: PortId
    src_channel: ChannelId
    dest_port: PortId
    dest_channel: ChannelId
    data: bytes
    timeout_height: Height
    timeout_timestamp: UnixTimestamp


@dataclass
class MsgPacketRecv:
    packet: Packet
    proof: Hash
    proof_height: Height


@dataclass
class MsgPacketAcknowledgement:
    packet: Packet
    ack: bytes
    proof: Hash
    proof_height: Height


@dataclass
class MsgTimeoutPacket:
    packet: Packet
    proof: Hash
    proof_height: Height
    next_seq_recv: Sequence


@dataclass
class MsgTimeoutOnClose:
    packet: Packet
    proof_unreceived: Hash
    proof_close: Hash
    proof_height: Height
    next_seq_recv: Sequence
    counterparty_upgrade_seq: Sequence

    @property
    def proof(self) -> Hash:
        """The proof that the packet was not received."""
        return self.proof_unreceived


@dataclass
class MsgChannelOpenInit:
    port_id: PortId
    channel: ChannelData


@dataclass
class MsgChannelOpenTry:
    port_id: PortId
    channel: ChannelData
    counterparty_version: str
    proof_init: Hash
    proof_height: Height


@dataclass
class MsgChannelOpenAck:
    port_id: PortId
    channel_id: ChannelId
    counterparty_version: str
    counterparty_channel_id: ChannelId
    proof_try: Hash
    proof_height: Height


@dataclass
class MsgChannelOpenConfirm:
    port_id: PortId
    channel_id: ChannelId
    proof_ack: Hash
    proof_height: Height


@dataclass
class MsgChannelCloseInit:
    port_id: PortId
    channel_id: ChannelId


@dataclass
class MsgChannelCloseConfirm:
    port_id: PortId
    channel_id: ChannelId
    proof_init: Hash
    proof_height: Height