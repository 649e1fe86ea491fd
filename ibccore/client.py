"""The client contract: creating and updating light clients and their commitments."""

from __future__ import annotations

from dataclasses import dataclass

from .client_interface import ClientContract
from .codec import keccak256
from .errors import IbcError
from .host import Host
from .paths import client_state_commitment_key, consensus_state_commitment_key
from .storage import ClientInfo
from .types import Address, ClientId, ClientType, Height

GENERATED_CLIENT_ID_EVENT = "generatedClientIdEvent"


@dataclass
class MsgCreateClient:
    client_type: ClientType
    encoded_client_state: bytes
    encoded_consensus_state: bytes


@dataclass
class MsgUpdateClient:
    client_id: ClientId
    encoded_client_message: bytes


class ClientHandler(Host):
    """Host state extended with the client creation and update endpoints."""

    def _client(self, address: Address) -> ClientContract:
        return self.chain.contract(address)

    def create_client(self, args: MsgCreateClient) -> ClientId:
        """Create a client of a registered type and commit its initial states."""
        client_impl = self.client_registry.get(args.client_type)
        if client_impl is None:
            raise IbcError("Client not registered")

        client_id = self.generate_client_identifier(args.client_type)
        self.clients[client_id] = ClientInfo(args.client_type, client_impl)

        self._commit_created_client(args, client_impl, client_id)
        self.chain.emit(GENERATED_CLIENT_ID_EVENT, client_id)
        return client_id

    def update_client(self, args: MsgUpdateClient) -> None:
        """Pass a client message to the client and commit the updated states."""
        client_impl = self.check_and_get_client(args.client_id)
        with self.chain.call_as(self.address):
            heights = self._client(client_impl).update_client(
                args.client_id, args.encoded_client_message
            )
        if heights:
            self.update_client_commitments(args.client_id, heights)

    def update_client_commitments(self, client_id: ClientId, heights: list[Height]) -> None:
        """Recommit the client state and commit consensus states not yet committed."""
        client_impl = self.check_and_get_client(client_id)
        client = self._client(client_impl)
        with self.chain.call_as(self.address):
            encoded_client_state = client.get_client_state(client_id)
        self.commitments[client_state_commitment_key(client_id)] = keccak256(
            encoded_client_state
        )

        for height in heights:
            self._commit_consensus_state(client, client_id, height)

    def generate_client_identifier(self, client_type: ClientType) -> ClientId:
        """``{client_type}-{sequence}`` with the next client sequence."""
        return f"{client_type}-{self.next_client_seq()}"

    def _commit_created_client(
        self, args: MsgCreateClient, client_impl: Address, client_id: ClientId
    ) -> None:
        client_state_hash = keccak256(args.encoded_client_state)
        consensus_state_hash = keccak256(args.encoded_consensus_state)
        with self.chain.call_as(self.address):
            height = self._client(client_impl).initialize_client(
                args.encoded_client_state, args.encoded_consensus_state
            )

        self.commitments[client_state_commitment_key(client_id)] = client_state_hash
        consensus_key = consensus_state_commitment_key(
            client_id, height.revision_number, height.revision_height
        )
        self.commitments[consensus_key] = consensus_state_hash

    def _commit_consensus_state(
        self, client: ClientContract, client_id: ClientId, height: Height
    ) -> None:
        with self.chain.call_as(self.address):
            encoded_consensus_state = client.get_consensus_state(client_id, height)
        key = consensus_state_commitment_key(
            client_id, height.revision_number, height.revision_height
        )
        if key not in self.commitments:
            self.commitments[key] = keccak256(encoded_consensus_state)