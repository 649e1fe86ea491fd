"""Sending packets over an open channel."""

from __future__ import annotations

from .channel_lib import SEND_PACKET_EVENT, SendPacketEvent, encode_and_hash_twice
from .client_interface import ClientContract
from .errors import IbcError
from .host import Host
from .paths import packet_commitment_key
from .types import (
    ChannelId,
    ClientStatus,
    ConnectionId,
    Height,
    PortId,
    Sequence,
    UnixTimestamp,
)
from .validation import require_state_open


class PacketSender(Host):
    """Host state extended with the packet sending endpoint."""

    def send_packet(
        self,
        src_port: PortId,
        src_channel: ChannelId,
        timeout_height: Height,
        timeout_timestamp: UnixTimestamp,
        data: bytes,
    ) -> Sequence:
        """Commit a packet for sending and return its sequence.

        ``timeout_timestamp`` is in nanoseconds since the epoch; at least
        one of the timeouts must be set.
        """
        self.authenticate_channel_capability(src_port, src_channel, self.chain.caller)

        channel_info = self.try_get_channel_info(src_port, src_channel)
        channel = channel_info.channel
        require_state_open(channel.state)
        if timeout_height.is_zero() and timeout_timestamp == 0:
            raise IbcError("Zero packet timeout")

        if not channel.connection_hops:
            raise IbcError("Channel has no connection hops")
        self.check_latest_info(channel.connection_hops[0], timeout_height, timeout_timestamp)

        packet_seq = channel_info.next_seq_send
        channel_info.next_seq_send += 1

        key = packet_commitment_key(src_port, src_channel, packet_seq)
        self.commitments[key] = encode_and_hash_twice(timeout_height, timeout_timestamp, data)

        self.chain.emit(
            SEND_PACKET_EVENT,
            SendPacketEvent(
                seq=packet_seq,
                source_port=src_port,
                source_channel=src_channel,
                timeout_height=timeout_height,
                timeout_timestamp=timeout_timestamp,
                data=bytes(data),
            ),
        )
        return packet_seq

    def check_latest_info(
        self,
        connection_id: ConnectionId,
        timeout_height: Height,
        timeout_timestamp: UnixTimestamp,
    ) -> None:
        """The client must be active and neither timeout already passed."""
        connection_info = self.try_get_connection_info(connection_id)
        client_info = self.try_get_client_info(connection_info.client_id)
        client: ClientContract = self.chain.contract(client_info.client_impl)
        with self.chain.call_as(self.address):
            latest = client.get_latest_info(connection_info.client_id)

        if latest.client_status is not ClientStatus.ACTIVE:
            raise IbcError("Client not active")
        if not (timeout_height.is_zero() or latest.latest_height < timeout_height):
            raise IbcError("Past packet timeout height")
        if not (timeout_timestamp == 0 or latest.latest_timestamp < timeout_timestamp):
            raise IbcError("Past packet timeout timestamp")