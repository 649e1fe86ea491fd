import pytest

from ibccore import paths
from ibccore.codec import keccak256


def test_client_state_path():
    assert paths.client_state_path("10") == "clients/10/clientState"


def test_consensus_state_path():
    assert paths.consensus_state_path("10", 20, 30) == "clients/10/consensusStates/20-30"


def test_connection_path():
    assert paths.connection_path("10") == "connections/10"


def test_channel_path():
    assert paths.channel_path("10", "20") == "channelEnds/ports/10/channels/20"


def test_packet_commitment_path():
    assert (
        paths.packet_commitment_path("10", "20", 30)
        == "commitments/ports/10/channels/20/sequences/30"
    )


def test_packet_acknowledgement_commitment_path():
    assert (
        paths.packet_acknowledgement_commitment_path("10", "20", 30)
        == "acks/ports/10/channels/20/sequences/30"
    )


def test_packet_receipt_commitment_path():
    assert (
        paths.packet_receipt_commitment_path("10", "20", 30)
        == "receipts/ports/10/channels/20/sequences/30"
    )


def test_next_seq_send_commitment_path():
    assert (
        paths.next_seq_send_commitment_path("10", "20")
        == "nextSequenceSend/ports/10/channels/20"
    )


def test_next_seq_recv_commitment_path():
    assert (
        paths.next_seq_recv_commitment_path("10", "20")
        == "nextSequenceRecv/ports/10/channels/20"
    )


def test_next_seq_ack_commitment_path():
    assert (
        paths.next_seq_ack_commitment_path("10", "20")
        == "nextSequenceAck/ports/10/channels/20"
    )


def test_channel_upgrade_path():
    assert (
        paths.channel_upgrade_path("10", "20")
        == "channelUpgrades/upgrades/ports/10/channels/20"
    )


def test_channel_upgrade_error_path():
    assert (
        paths.channel_upgrade_error_path("10", "20")
        == "channelUpgrades/upgradeError/ports/10/channels/20"
    )


@pytest.mark.parametrize(
    "key_fn, path_fn, args",
    [
        (paths.client_state_commitment_key, paths.client_state_path, ("10",)),
        (paths.consensus_state_commitment_key, paths.consensus_state_path, ("10", 20, 30)),
        (paths.connection_commitment_key, paths.connection_path, ("10",)),
        (paths.channel_commitment_key, paths.channel_path, ("10", "20")),
        (paths.next_seq_recv_commitment_key, paths.next_seq_recv_commitment_path, ("10", "20")),
        (paths.packet_commitment_key, paths.packet_commitment_path, ("10", "20", 30)),
        (
            paths.packet_acknowledgement_commitment_key,
            paths.packet_acknowledgement_commitment_path,
            ("10", "20", 30),
        ),
        (
            paths.packet_receipt_commitment_key,
            paths.packet_receipt_commitment_path,
            ("10", "20", 30),
        ),
        (paths.channel_upgrade_commitment_key, paths.channel_upgrade_path, ("10", "20")),
        (
            paths.channel_upgrade_error_commitment_key,
            paths.channel_upgrade_error_path,
            ("10", "20"),
        ),
    ],
)
def test_keys_are_keccak_of_paths(key_fn, path_fn, args):
    key = key_fn(*args)
    assert len(key) == 32
    assert key == keccak256(path_fn(*args))


def test_distinct_paths_give_distinct_keys():
    assert paths.packet_commitment_key("p", "c", 1) != paths.packet_commitment_key("p", "c", 2)
    assert paths.packet_commitment_key("p", "c", 1) != paths.packet_receipt_commitment_key(
        "p", "c", 1
    )