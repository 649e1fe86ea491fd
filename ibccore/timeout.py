"""Timing out packets: proof that a packet was never received on the counterparty."""

from __future__ import annotations

from typing import Union

from .channel_lib import TIMEOUT_PACKET_EVENT, encode_and_hash_twice
from .client_interface import ClientContract
from .codec import top_encode
from .errors import (
    PACKET_COMM_MISMATCH,
    UNEXPECTED_PACKET_DEST,
    UNKNOWN_CHANNEL_ORDER,
    IbcError,
)
from .host import Host
from .module_interface import IbcModule
from .packets import MsgTimeoutOnClose, MsgTimeoutPacket, Packet
from .paths import (
    next_seq_recv_commitment_path,
    packet_commitment_key,
    packet_receipt_commitment_path,
)
from .types import (
    Address,
    ChannelCounterparty,
    ChannelData,
    ChannelId,
    ChannelOrder,
    ChannelState,
    ClientId,
    ConnectionEnd,
    ConnectionId,
    Hash,
    Height,
    PortId,
    Sequence,
    VerifyMembershipArgs,
    VerifyNonMembershipArgs,
)
from .validation import require_state_open

TimeoutArgs = Union[MsgTimeoutPacket, MsgTimeoutOnClose]


def _first_hop(channel: ChannelData) -> ConnectionId:
    if not channel.connection_hops:
        raise IbcError("Channel has no connection hops")
    return channel.connection_hops[0]


class PacketTimeouts(Host):
    """Host state extended with the packet timeout endpoints."""

    def _client(self, address: Address) -> ClientContract:
        return self.chain.contract(address)

    def check_channel_membership(
        self,
        ordering: ChannelOrder,
        client_impl: Address,
        connection_info: ConnectionEnd,
        timeout_args: TimeoutArgs,
    ) -> None:
        """Verify, according to the channel order, that the packet was not received."""
        if ordering is ChannelOrder.ORDERED:
            self.check_channel_ordered_membership(client_impl, connection_info, timeout_args)
        elif ordering is ChannelOrder.UNORDERED:
            self.check_channel_unordered_membership(client_impl, connection_info, timeout_args)
        else:
            raise IbcError(UNKNOWN_CHANNEL_ORDER)

    def check_channel_ordered_membership(
        self,
        client_impl: Address,
        connection_info: ConnectionEnd,
        timeout_args: TimeoutArgs,
    ) -> None:
        """Prove the counterparty's next receive sequence and close the channel."""
        packet = timeout_args.packet
        if packet.seq < timeout_args.next_seq_recv:
            raise IbcError("Packet may already be received")

        args = VerifyMembershipArgs(
            client_id=connection_info.client_id,
            height=timeout_args.proof_height,
            delay_time_period=connection_info.delay_period,
            delay_block_period=self.calculate_block_delay(connection_info.delay_period),
            proof=timeout_args.proof,
            prefix=connection_info.counterparty.prefix.key_prefix,
            path=next_seq_recv_commitment_path(packet.dest_port, packet.dest_channel),
            value=top_encode(timeout_args.next_seq_recv),
        )
        with self.chain.call_as(self.address):
            verified = self._client(client_impl).verify_membership(args)
        if not verified:
            raise IbcError("Failed to verify next seq receive")

        channel_info = self.try_get_channel_info(packet.src_port, packet.src_channel)
        channel_info.channel.state = ChannelState.CLOSED

    def check_channel_unordered_membership(
        self,
        client_impl: Address,
        connection_info: ConnectionEnd,
        timeout_args: TimeoutArgs,
    ) -> None:
        """Prove that no receipt for the packet exists on the counterparty."""
        packet = timeout_args.packet
        args = VerifyNonMembershipArgs(
            client_id=connection_info.client_id,
            height=timeout_args.proof_height,
            delay_time_period=connection_info.delay_period,
            delay_block_period=self.calculate_block_delay(connection_info.delay_period),
            proof=timeout_args.proof,
            prefix=connection_info.counterparty.prefix.key_prefix,
            path=packet_receipt_commitment_path(packet.dest_port, packet.dest_channel, packet.seq),
        )
        with self.chain.call_as(self.address):
            verified = self._client(client_impl).verify_non_membership(args)
        if not verified:
            raise IbcError("Failed to verify packet receipt absence")

    def check_expected_channel_membership(
        self,
        client_impl: Address,
        channel: ChannelData,
        connection_info: ConnectionEnd,
        args: MsgTimeoutOnClose,
    ) -> None:
        """Prove that the counterparty channel end is closed."""
        expected_channel = ChannelData(
            state=ChannelState.CLOSED,
            ordering=channel.ordering,
            counterparty=ChannelCounterparty(
                port_id=args.packet.src_port, channel_id=args.packet.src_channel
            ),
            connection_hops=[connection_info.counterparty.connection_id],
            version=channel.version,
            upgrade_sequence=args.counterparty_upgrade_seq,
        )
        membership_args = VerifyMembershipArgs(
            client_id=connection_info.client_id,
            height=args.proof_height,
            delay_time_period=connection_info.delay_period,
            delay_block_period=self.calculate_block_delay(connection_info.delay_period),
            proof=args.proof_close,
            prefix=connection_info.counterparty.prefix.key_prefix,
            path=next_seq_recv_commitment_path(args.packet.dest_port, args.packet.dest_channel),
            value=top_encode(expected_channel),
        )
        with self.chain.call_as(self.address):
            verified = self._client(client_impl).verify_membership(membership_args)
        if not verified:
            raise IbcError("Failed to verify channel state")

    def timeout_packet(self, args: MsgTimeoutPacket) -> None:
        """Time out a sent packet whose timeout has passed on the counterparty."""
        packet = args.packet
        channel = self.try_get_channel_info(packet.src_port, packet.src_channel).channel
        self.check_expected_args(packet, channel)

        connection_info = self.try_get_connection_info(_first_hop(channel))
        client_info = self.try_get_client_info(connection_info.client_id)
        self.check_timeout_reached(
            packet, args.proof_height, client_info.client_impl, connection_info.client_id
        )

        self._require_matching_commitment(packet)
        self.check_channel_membership(
            channel.ordering, client_info.client_impl, connection_info, args
        )

        del self.commitments[packet_commitment_key(packet.src_port, packet.src_channel, packet.seq)]
        self.timeout_packet_final(packet)

    def timeout_on_close(self, args: MsgTimeoutOnClose) -> None:
        """Time out a sent packet because the counterparty channel end was closed."""
        packet = args.packet
        channel = self.try_get_channel_info(packet.src_port, packet.src_channel).channel
        self.check_expected_args(packet, channel)

        connection_info = self.try_get_connection_info(_first_hop(channel))
        client_info = self.try_get_client_info(connection_info.client_id)

        self._require_matching_commitment(packet)
        self.check_expected_channel_membership(
            client_info.client_impl, channel, connection_info, args
        )
        self.check_channel_membership(
            channel.ordering, client_info.client_impl, connection_info, args
        )

        self.timeout_packet_final(packet)

    def check_expected_args(self, packet: Packet, channel: ChannelData) -> None:
        """The channel must be open and the packet addressed to its counterparty."""
        require_state_open(channel.state)
        if packet.dest_port != channel.counterparty.port_id:
            raise IbcError(UNEXPECTED_PACKET_DEST)
        if packet.dest_channel != channel.counterparty.channel_id:
            raise IbcError(UNEXPECTED_PACKET_DEST)

    def check_timeout_reached(
        self,
        packet: Packet,
        proof_height: Height,
        client_impl: Address,
        client_id: ClientId,
    ) -> None:
        """The proof height or its timestamp must be past the packet's timeout."""
        if not packet.timeout_height.is_zero() and proof_height >= packet.timeout_height:
            return

        with self.chain.call_as(self.address):
            timestamp = self._client(client_impl).get_timestamp_at_height(client_id, proof_height)
        if packet.timeout_timestamp == 0 or timestamp < packet.timeout_timestamp:
            raise IbcError("Channel timeout not reached")

    def check_and_get_commitment(
        self, src_port: PortId, src_channel: ChannelId, seq: Sequence
    ) -> Hash:
        """The stored commitment of a sent packet, which must exist."""
        try:
            return self.commitments[packet_commitment_key(src_port, src_channel, seq)]
        except KeyError:
            raise IbcError("Packet commitment not found") from None

    def _require_matching_commitment(self, packet: Packet) -> None:
        stored = self.check_and_get_commitment(packet.src_port, packet.src_channel, packet.seq)
        expected = encode_and_hash_twice(
            packet.timeout_height, packet.timeout_timestamp, packet.data
        )
        if stored != expected:
            raise IbcError(PACKET_COMM_MISMATCH)

    def timeout_packet_final(self, packet: Packet) -> None:
        """Notify the owning module of the timeout and emit the event."""
        relayer = self.chain.caller
        module_address = self.lookup_module_by_channel(packet.src_port, packet.src_channel)
        module: IbcModule = self.chain.contract(module_address)
        with self.chain.call_as(self.address):
            module.on_timeout_packet(packet, relayer)

        self.chain.emit(TIMEOUT_PACKET_EVENT, packet)