"""Packet commitment encoding, receipt commitments and channel event data."""

from __future__ import annotations

from dataclasses import dataclass

from .codec import keccak256, sha256, top_encode
from .errors import IbcError
from .packets import PacketReceipt
from .types import ChannelId, Hash, Height, PortId, Sequence, UnixTimestamp
from .validation import is_empty_hash

GENERATED_CHANNEL_ID_EVENT = "generatedChannelIdEvent"
WRITE_ACK_EVENT = "writeAckEvent"
SEND_PACKET_EVENT = "sendPacketEvent"
RECEIVE_PACKET_EVENT = "receivePacketEvent"
ACK_PACKET_EVENT = "ackPacketEvent"
TIMEOUT_PACKET_EVENT = "timeoutPacketEvent"


@dataclass(frozen=True)
class SendPacketEvent:
    seq: Sequence
    source_port: PortId
    source_channel: ChannelId
    timeout_height: Height
    timeout_timestamp: UnixTimestamp
    data: bytes


def encode_and_hash(timeout_height: Height, timeout_timestamp: UnixTimestamp, data: bytes) -> Hash:
    """SHA-256 over the encoded timeouts followed by the SHA-256 of the data."""
    encoded = b"".join(
        (
            top_encode(timeout_timestamp),
            top_encode(timeout_height.revision_number),
            top_encode(timeout_height.revision_height),
            top_encode(sha256(data)),
        )
    )
    return sha256(encoded)


def encode_and_hash_twice(
    timeout_height: Height, timeout_timestamp: UnixTimestamp, data: bytes
) -> Hash:
    """Keccak-256 of :func:`encode_and_hash`; the stored packet commitment."""
    return keccak256(encode_and_hash(timeout_height, timeout_timestamp, data))


def successful_receipt_hash() -> Hash:
    """The commitment stored for a successfully received packet."""
    return keccak256(top_encode(PacketReceipt.SUCCESSFUL))


def receipt_commitment_to_receipt(commitment: Hash) -> PacketReceipt:
    if is_empty_hash(commitment):
        return PacketReceipt.NONE
    if commitment == successful_receipt_hash():
        return PacketReceipt.SUCCESSFUL
    raise IbcError("Unknown channel packet receipt commitment")