"""The host contract: configuration endpoints, views and capability management."""

from __future__ import annotations

from .chain import Blockchain
from .errors import IbcError
from .storage import HostStorage
from .types import Address, ChannelId, ClientId, ClientType, PortId, UnixTimestamp
from .validation import (
    checked_timestamp_to_unix,
    is_valid_client_type,
    is_valid_port_id,
    require_valid_address,
)

DEFAULT_COMMITMENT_PREFIX = b"ibc"


class Host(HostStorage):
    """IBC host state deployed at an address on a chain and owned by one account."""

    def __init__(self, chain: Blockchain, address: Address, owner: Address) -> None:
        super().__init__()
        self.chain = chain
        self.address = address
        self.owner = owner
        chain.deploy(address, self)

    def _require_owner(self) -> None:
        if self.chain.caller != self.owner:
            raise IbcError("Endpoint can only be called by owner")

    def set_expected_time_per_block(self, exp_time_per_block: UnixTimestamp) -> None:
        self._require_owner()
        self.host_info.expected_time_per_block = exp_time_per_block

    def register_client(self, client_type: ClientType, client: Address) -> None:
        self._require_owner()
        if not is_valid_client_type(client_type):
            raise IbcError("Invalid client ID")
        if client_type in self.client_registry:
            raise IbcError("Client already exists")
        require_valid_address(client, self.address)
        self.client_registry[client_type] = client

    def bind_port(self, port_id: PortId, module: Address) -> None:
        self._require_owner()
        if not is_valid_port_id(port_id):
            raise IbcError("Invalid Port ID")
        require_valid_address(module, self.address)
        self.claim_port_capability(port_id, module)

    def get_host_timestamp(self) -> UnixTimestamp:
        """The current block time in nanoseconds since the epoch."""
        return checked_timestamp_to_unix(self.chain.block_timestamp)

    def get_commitment_prefix(self) -> bytes:
        return DEFAULT_COMMITMENT_PREFIX

    def check_and_get_client(self, client_id: ClientId) -> Address:
        return self.try_get_client_info(client_id).client_impl

    def get_commitment(self, commitment_hash: bytes) -> bytes:
        """The commitment stored under a key; empty hash if none is stored."""
        return super().get_commitment(commitment_hash)

    def claim_port_capability(self, port_id: PortId, address: Address) -> None:
        if port_id in self.port_capabilities:
            raise IbcError("Port already claimed")
        self.port_capabilities[port_id] = address

    def claim_channel_capability(
        self, port_id: PortId, channel_id: ChannelId, address: Address
    ) -> None:
        key = (port_id, channel_id)
        if key in self.channel_capabilities:
            raise IbcError("Channel already claimed")
        self.channel_capabilities[key] = address

    def authenticate_channel_capability(
        self, port_id: PortId, channel_id: ChannelId, user: Address
    ) -> None:
        stored = self.channel_capabilities.get((port_id, channel_id))
        if stored is None:
            raise IbcError("Channel not claimed")
        if user != stored:
            raise IbcError("Not allowed to use this port")

    def lookup_module_by_port(self, port_id: PortId) -> Address:
        try:
            return self.port_capabilities[port_id]
        except KeyError:
            raise IbcError("Port not found") from None

    def lookup_module_by_channel(self, port_id: PortId, channel_id: ChannelId) -> Address:
        try:
            return self.channel_capabilities[(port_id, channel_id)]
        except KeyError:
            raise IbcError("Channel not found") from None