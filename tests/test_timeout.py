import pytest

from ibccore.chain import Blockchain, Event
from ibccore.channel_lib import TIMEOUT_PACKET_EVENT, encode_and_hash_twice
from ibccore.codec import top_encode
from ibccore.errors import (
    PACKET_COMM_MISMATCH,
    UNEXPECTED_CHANNEL_STATE,
    UNEXPECTED_PACKET_DEST,
    UNKNOWN_CHANNEL_ORDER,
    IbcError,
)
from ibccore.packets import MsgTimeoutOnClose, MsgTimeoutPacket, Packet
from ibccore.paths import packet_commitment_key
from ibccore.storage import ChannelInfo, ClientInfo
from ibccore.timeout import PacketTimeouts
from ibccore.types import (
    ChannelCounterparty,
    ChannelData,
    ChannelOrder,
    ChannelState,
    ConnectionCounterparty,
    ConnectionEnd,
    ConnectionState,
    Height,
    MerklePrefix,
    Version,
)

OWNER = b"owner"
HOST = b"host"
CLIENT = b"client-contract"
MODULE = b"app-module"
RELAYER = b"relayer"
PORT = "transfer"
CHANNEL = "channel-0"
DEST_CHANNEL = "channel-1"


class FakeClient:
    def __init__(self):
        self.membership = True
        self.non_membership = True
        self.timestamp = 0
        self.membership_calls = []
        self.non_membership_calls = []

    def verify_membership(self, args):
        self.membership_calls.append(args)
        return self.membership

    def verify_non_membership(self, args):
        self.non_membership_calls.append(args)
        return self.non_membership

    def get_timestamp_at_height(self, client_id, height):
        return self.timestamp


class FakeModule:
    def __init__(self):
        self.timeouts = []

    def on_timeout_packet(self, packet, relayer):
        self.timeouts.append((packet, relayer))


def _packet(seq=1, timeout_height=Height(0, 100), timeout_timestamp=0, dest_port=PORT):
    return Packet(
        seq=seq,
        src_port=PORT,
        src_channel=CHANNEL,
        dest_port=dest_port,
        dest_channel=DEST_CHANNEL,
        data=b"hello",
        timeout_height=timeout_height,
        timeout_timestamp=timeout_timestamp,
    )


def _commit(handler, packet):
    key = packet_commitment_key(packet.src_port, packet.src_channel, packet.seq)
    handler.commitments[key] = encode_and_hash_twice(
        packet.timeout_height, packet.timeout_timestamp, packet.data
    )
    return key


@pytest.fixture
def env():
    chain = Blockchain()
    handler = PacketTimeouts(chain, HOST, OWNER)
    client = chain.deploy(CLIENT, FakeClient())
    module = chain.deploy(MODULE, FakeModule())
    handler.clients["mock-0"] = ClientInfo("mock", CLIENT)
    handler.connections["connection-0"] = ConnectionEnd(
        client_id="mock-0",
        versions=[Version("1", ["ORDER_ORDERED"])],
        state=ConnectionState.OPEN,
        counterparty=ConnectionCounterparty("mock-9", "connection-3", MerklePrefix(b"ibc")),
        delay_period=7,
    )
    handler.channels[(PORT, CHANNEL)] = ChannelInfo(
        ChannelData(
            state=ChannelState.OPEN,
            ordering=ChannelOrder.UNORDERED,
            counterparty=ChannelCounterparty(PORT, DEST_CHANNEL),
            connection_hops=["connection-0"],
            version="ics20-1",
        )
    )
    handler.channel_capabilities[(PORT, CHANNEL)] = MODULE
    return chain, handler, client, module


def _timeout(chain, handler, msg):
    with chain.call_as(RELAYER):
        handler.timeout_packet(msg)


def _set_order(handler, order):
    handler.channels[(PORT, CHANNEL)].channel.ordering = order


def test_unordered_timeout_by_height(env):
    chain, handler, client, module = env
    packet = _packet()
    key = _commit(handler, packet)
    _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))

    assert key not in handler.commitments
    assert module.timeouts == [(packet, RELAYER)]
    assert chain.events[-1] == Event(TIMEOUT_PACKET_EVENT, (packet,))
    call = client.non_membership_calls[0]
    assert call.path == "receipts/ports/transfer/channels/channel-1/sequences/1"
    assert call.prefix == b"ibc"
    assert call.proof == b"proof"
    assert call.delay_time_period == 7


def test_timeout_by_timestamp(env):
    chain, handler, client, module = env
    client.timestamp = 5_000
    packet = _packet(timeout_height=Height(), timeout_timestamp=5_000)
    _commit(handler, packet)
    _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 10), 0))
    assert module.timeouts == [(packet, RELAYER)]


def test_timeout_not_reached(env):
    chain, handler, client, module = env
    client.timestamp = 4_999
    packet = _packet(timeout_height=Height(), timeout_timestamp=5_000)
    _commit(handler, packet)
    with pytest.raises(IbcError, match="Channel timeout not reached"):
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 10), 0))
    assert module.timeouts == []


def test_height_below_timeout_without_timestamp(env):
    chain, handler, client, _ = env
    client.timestamp = 10**9
    packet = _packet()
    _commit(handler, packet)
    with pytest.raises(IbcError, match="Channel timeout not reached"):
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 99), 0))


def test_missing_commitment(env):
    chain, handler, _, _ = env
    with pytest.raises(IbcError, match="Packet commitment not found"):
        _timeout(chain, handler, MsgTimeoutPacket(_packet(), b"proof", Height(0, 100), 0))


def test_commitment_mismatch(env):
    chain, handler, _, _ = env
    packet = _packet()
    key = _commit(handler, packet)
    handler.commitments[key] = bytes(32)
    with pytest.raises(IbcError) as excinfo:
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert excinfo.value.message == PACKET_COMM_MISMATCH


def test_wrong_destination(env):
    chain, handler, _, _ = env
    packet = _packet(dest_port="other")
    _commit(handler, packet)
    with pytest.raises(IbcError) as excinfo:
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert excinfo.value.message == UNEXPECTED_PACKET_DEST


def test_channel_not_open(env):
    chain, handler, _, _ = env
    handler.channels[(PORT, CHANNEL)].channel.state = ChannelState.FLUSHING
    packet = _packet()
    _commit(handler, packet)
    with pytest.raises(IbcError) as excinfo:
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert excinfo.value.message == UNEXPECTED_CHANNEL_STATE


def test_unordered_receipt_present(env):
    chain, handler, client, _ = env
    client.non_membership = False
    packet = _packet()
    key = _commit(handler, packet)
    with pytest.raises(IbcError, match="Failed to verify packet receipt absence"):
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert key in handler.commitments


def test_ordered_timeout_closes_channel(env):
    chain, handler, client, _ = env
    _set_order(handler, ChannelOrder.ORDERED)
    packet = _packet(seq=3)
    _commit(handler, packet)
    _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 3))

    assert handler.channels[(PORT, CHANNEL)].channel.state is ChannelState.CLOSED
    call = client.membership_calls[0]
    assert call.value == top_encode(3)
    assert call.path == "nextSequenceRecv/ports/transfer/channels/channel-1"


def test_ordered_packet_already_received(env):
    chain, handler, _, _ = env
    _set_order(handler, ChannelOrder.ORDERED)
    packet = _packet(seq=2)
    _commit(handler, packet)
    with pytest.raises(IbcError, match="Packet may already be received"):
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 3))


def test_ordered_membership_fails(env):
    chain, handler, client, _ = env
    _set_order(handler, ChannelOrder.ORDERED)
    client.membership = False
    packet = _packet(seq=3)
    _commit(handler, packet)
    with pytest.raises(IbcError, match="Failed to verify next seq receive"):
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 3))
    assert handler.channels[(PORT, CHANNEL)].channel.state is ChannelState.OPEN


def test_unspecified_order(env):
    chain, handler, _, _ = env
    _set_order(handler, ChannelOrder.NONE_UNSPECIFIED)
    packet = _packet()
    _commit(handler, packet)
    with pytest.raises(IbcError) as excinfo:
        _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert excinfo.value.message == UNKNOWN_CHANNEL_ORDER


def test_timeout_on_close(env):
    chain, handler, client, module = env
    packet = _packet()
    key = _commit(handler, packet)
    msg = MsgTimeoutOnClose(packet, b"unreceived", b"closed", Height(0, 20), 0, 4)
    with chain.call_as(RELAYER):
        handler.timeout_on_close(msg)

    expected_channel = ChannelData(
        state=ChannelState.CLOSED,
        ordering=ChannelOrder.UNORDERED,
        counterparty=ChannelCounterparty(PORT, CHANNEL),
        connection_hops=["connection-3"],
        version="ics20-1",
        upgrade_sequence=4,
    )
    close_call = client.membership_calls[0]
    assert close_call.value == top_encode(expected_channel)
    assert close_call.proof == b"closed"
    assert client.non_membership_calls[0].proof == b"unreceived"
    assert module.timeouts == [(packet, RELAYER)]
    assert key in handler.commitments


def test_timeout_on_close_channel_not_proven_closed(env):
    chain, handler, client, module = env
    client.membership = False
    packet = _packet()
    _commit(handler, packet)
    msg = MsgTimeoutOnClose(packet, b"unreceived", b"closed", Height(0, 20), 0, 0)
    with pytest.raises(IbcError, match="Failed to verify channel state"):
        with chain.call_as(RELAYER):
            handler.timeout_on_close(msg)
    assert module.timeouts == []


def test_check_and_get_commitment_returns_stored(env):
    _, handler, _, _ = env
    packet = _packet()
    key = _commit(handler, packet)
    assert handler.check_and_get_commitment(PORT, CHANNEL, 1) == handler.commitments[key]
    with pytest.raises(IbcError, match="Packet commitment not found"):
        handler.check_and_get_commitment(PORT, CHANNEL, 2)


def test_block_delay_passed_to_client(env):
    chain, handler, client, _ = env
    handler.host_info.expected_time_per_block = 7
    packet = _packet()
    _commit(handler, packet)
    _timeout(chain, handler, MsgTimeoutPacket(packet, b"proof", Height(0, 100), 0))
    assert client.non_membership_calls[0].delay_block_period == 1