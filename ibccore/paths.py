"""Commitment paths of the IBC host path space and their storage keys.

Each key is the Keccak-256 digest of the corresponding path.
"""

from __future__ import annotations

from .codec import keccak256
from .types import ChannelId, ClientId, ConnectionId, Hash, Path, PortId


def client_state_path(client_id: ClientId) -> Path:
    """``clients/{client_id}/clientState``"""
    return f"clients/{client_id}/clientState"


def consensus_state_path(
    client_id: ClientId, revision_number: int, revision_height: int
) -> Path:
    """``clients/{client_id}/consensusStates/{revision_number}-{revision_height}``"""
    return f"clients/{client_id}/consensusStates/{revision_number}-{revision_height}"


def connection_path(connection_id: ConnectionId) -> Path:
    """``connections/{connection_id}``"""
    return f"connections/{connection_id}"


def channel_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``channelEnds/ports/{port_id}/channels/{channel_id}``"""
    return f"channelEnds/ports/{port_id}/channels/{channel_id}"


def packet_commitment_path(port_id: PortId, channel_id: ChannelId, sequence: int) -> Path:
    """``commitments/ports/{port_id}/channels/{channel_id}/sequences/{sequence}``"""
    return f"commitments/ports/{port_id}/channels/{channel_id}/sequences/{sequence}"


def packet_acknowledgement_commitment_path(
    port_id: PortId, channel_id: ChannelId, sequence: int
) -> Path:
    """``acks/ports/{port_id}/channels/{channel_id}/sequences/{sequence}``"""
    return f"acks/ports/{port_id}/channels/{channel_id}/sequences/{sequence}"


def packet_receipt_commitment_path(
    port_id: PortId, channel_id: ChannelId, sequence: int
) -> Path:
    """``receipts/ports/{port_id}/channels/{channel_id}/sequences/{sequence}``"""
    return f"receipts/ports/{port_id}/channels/{channel_id}/sequences/{sequence}"


def next_seq_send_commitment_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``nextSequenceSend/ports/{port_id}/channels/{channel_id}``"""
    return f"nextSequenceSend/ports/{port_id}/channels/{channel_id}"


def next_seq_recv_commitment_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``nextSequenceRecv/ports/{port_id}/channels/{channel_id}``"""
    return f"nextSequenceRecv/ports/{port_id}/channels/{channel_id}"


def next_seq_ack_commitment_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``nextSequenceAck/ports/{port_id}/channels/{channel_id}``"""
    return f"nextSequenceAck/ports/{port_id}/channels/{channel_id}"


def channel_upgrade_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``channelUpgrades/upgrades/ports/{port_id}/channels/{channel_id}``"""
    return f"channelUpgrades/upgrades/ports/{port_id}/channels/{channel_id}"


def channel_upgrade_error_path(port_id: PortId, channel_id: ChannelId) -> Path:
    """``channelUpgrades/upgradeError/ports/{port_id}/channels/{channel_id}``"""
    return f"channelUpgrades/upgradeError/ports/{port_id}/channels/{channel_id}"


def client_state_commitment_key(client_id: ClientId) -> Hash:
    return keccak256(client_state_path(client_id))


def consensus_state_commitment_key(
    client_id: ClientId, revision_number: int, revision_height: int
) -> Hash:
    return keccak256(consensus_state_path(client_id, revision_number, revision_height))


def connection_commitment_key(connection_id: ConnectionId) -> Hash:
    return keccak256(connection_path(connection_id))


def channel_commitment_key(port_id: PortId, channel_id: ChannelId) -> Hash:
    return keccak256(channel_path(port_id, channel_id))


def next_seq_recv_commitment_key(port_id: PortId, channel_id: ChannelId) -> Hash:
    return keccak256(next_seq_recv_commitment_path(port_id, channel_id))


def packet_commitment_key(port_id: PortId, channel_id: ChannelId, sequence: int) -> Hash:
    return keccak256(packet_commitment_path(port_id, channel_id, sequence))


def packet_acknowledgement_commitment_key(
    port_id: PortId, channel_id: ChannelId, sequence: int
) -> Hash:
    return keccak256(packet_acknowledgement_commitment_path(port_id, channel_id, sequence))


def packet_receipt_commitment_key(
    port_id: PortId, channel_id: ChannelId, sequence: int
) -> Hash:
    return keccak256(packet_receipt_commitment_path(port_id, channel_id, sequence))


def channel_upgrade_commitment_key(port_id: PortId, channel_id: ChannelId) -> Hash:
    return keccak256(channel_upgrade_path(port_id, channel_id))


def channel_upgrade_error_commitment_key(port_id: PortId, channel_id: ChannelId) -> Hash:
    return keccak256(channel_upgrade_error_path(port_id, channel_id))