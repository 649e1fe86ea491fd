from dataclasses import replace

from ibccore.codec import nested_encode, top_encode
from ibccore.packets import (
    MsgChannelOpenAck,
    MsgTimeoutOnClose,
    MsgTimeoutPacket,
    Packet,
    PacketReceipt,
)
from ibccore.types import Height


def _packet(seq=1):
    return Packet(
        seq=seq,
        src_port="transfer",
        src_channel="channel-0",
        dest_port="transfer",
        dest_channel="channel-1",
        data=b"payload",
        timeout_height=Height(0, 100),
        timeout_timestamp=0,
    )


def test_receipt_encoding():
    assert top_encode(PacketReceipt.SUCCESSFUL) == b"\x01"
    assert top_encode(PacketReceipt.NONE) == b""


def test_timeout_on_close_proof_is_unreceived_proof():
    msg = MsgTimeoutOnClose(
        packet=_packet(),
        proof_unreceived=b"\x11" * 32,
        proof_close=b"\x22" * 32,
        proof_height=Height(0, 5),
        next_seq_recv=1,
        counterparty_upgrade_seq=0,
    )
    assert msg.proof == b"\x11" * 32
    assert msg.proof != msg.proof_close


def test_timeout_packet_shares_timeout_shape():
    msg = MsgTimeoutPacket(_packet(3), b"\x33" * 32, Height(0, 7), 2)
    assert msg.proof == b"\x33" * 32
    assert msg.packet.seq == 3
    assert msg.next_seq_recv == 2


def test_packet_encoding_follows_field_order():
    packet = _packet(4)
    encoded = top_encode(packet)
    assert encoded.startswith(nested_encode(4) + nested_encode("transfer"))
    assert encoded.endswith(nested_encode(Height(0, 100)) + nested_encode(0))
    assert nested_encode(b"payload") in encoded


def test_packets_compare_by_value():
    assert _packet(1) == _packet(1)
    changed = replace(_packet(1), data=b"other")
    assert changed != _packet(1)
    assert top_encode(changed) != top_encode(_packet(1))


def test_channel_open_ack_fields():
    msg = MsgChannelOpenAck(
        port_id="transfer",
        channel_id="channel-0",
        counterparty_version="ics20-1",
        counterparty_channel_id="channel-9",
        proof_try=b"\x01" * 32,
        proof_height=Height(1, 2),
    )
    assert msg.counterparty_channel_id == "channel-9"
    assert msg.proof_height > Height(1, 1)