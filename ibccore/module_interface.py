"""Callbacks that an application bound to a port receives from the channel handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .packets import Packet
from .types import (
    Address,
    ChannelCounterparty,
    ChannelId,
    ChannelOrder,
    ConnectionId,
    PortId,
)


@dataclass
class MsgOnChanOpenInit:
    order: ChannelOrder
    connection_hops: list[ConnectionId]
    port_id: PortId
    channel_id: ChannelId
    counterparty: ChannelCounterparty
    version: str


@dataclass
class MsgOnChanOpenTry:
    order: ChannelOrder
    connection_hops: list[ConnectionId]
    port_id: PortId
    channel_id: ChannelId
    counterparty: ChannelCounterparty
    counterparty_version: str


@dataclass
class MsgOnChanOpenAck:
    port_id: PortId
    channel_id: ChannelId
    counterparty_version: str


@dataclass
class MsgOnChanOpenConfirm:
    port_id: PortId
    channel_id: ChannelId


MsgOnChanCloseInit = MsgOnChanOpenConfirm
MsgOnChanCloseConfirm = MsgOnChanOpenConfirm


@runtime_checkable
class IbcModule(Protocol):
    """Callbacks made on the application that owns a port or channel.

    Any callback may raise to abort the handshake or the packet flow.
    """

    def on_chan_open_init(self, args: MsgOnChanOpenInit) -> str:
        """Check the relayer-chosen parameters and return the version to use.

        A non-empty proposed version is returned if valid; an empty one is
        replaced by the module's default version.
        """
        ...

    def on_chan_open_try(self, args: MsgOnChanOpenTry) -> str:
        """Check the parameters and the counterparty version; return the final version."""
        ...

    def on_chan_open_ack(self, args: MsgOnChanOpenAck) -> None:
        """Check the version chosen by the counterparty."""
        ...

    def on_chan_open_confirm(self, args: MsgOnChanOpenConfirm) -> None:
        """Run custom logic when the channel is confirmed open."""
        ...

    def on_chan_close_init(self, args: MsgOnChanOpenConfirm) -> None:
        """Run custom logic when closing starts; raise to forbid closing."""
        ...

    def on_chan_close_confirm(self, args: MsgOnChanOpenConfirm) -> None:
        """Run custom logic when closing is confirmed."""
        ...

    def on_recv_packet(self, packet: Packet, relayer: Address) -> bytes:
        """Process a received packet and return its acknowledgement.

        An empty acknowledgement means it will be written asynchronously.
        """
        ...

    def on_ack_packet(self, packet: Packet, ack: bytes, relayer: Address) -> None:
        """Handle the acknowledgement of a packet this module sent."""
        ...

    def on_timeout_packet(self, packet: Packet, relayer: Address) -> None:
        """Handle a packet this module sent that timed out."""
        ...