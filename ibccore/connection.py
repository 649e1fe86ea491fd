"""The connection contract: the four-step connection opening handshake."""

from __future__ import annotations

import copy

from .client_interface import ClientContract
from .codec import keccak256, top_encode
from .connection_lib import (
    default_ibc_version,
    is_supported_version,
    pick_version,
    set_supported_versions,
)
from .connection_types import (
    GENERATED_CONNECTION_ID_EVENT,
    MsgConnectionOpenAck,
    MsgConnectionOpenConfirm,
    MsgConnectionOpenInit,
    MsgConnectionOpenTry,
)
from .errors import IbcError
from .host import Host
from .paths import (
    client_state_path,
    connection_commitment_key,
    connection_path,
    consensus_state_path,
)
from .types import (
    ConnectionCounterparty,
    ConnectionEnd,
    ConnectionId,
    ConnectionState,
    Hash,
    Height,
    MerklePrefix,
    Path,
    VerifyMembershipArgs,
    Version,
)

CONNECTION_ALREADY_EXISTS = "Connection already exists"
CONNECTION_DOES_NOT_EXIST = "Connection does not exist"
INVALID_CONNECTION_STATE = "Invalid connection state"


class ConnectionHandler(Host):
    """Host state extended with the connection handshake endpoints."""

    def get_compatible_versions(self) -> list[Version]:
        return [default_ibc_version()]

    def set_versions_after_init(self, args_version: Version) -> list[Version]:
        """The versions a new connection starts with.

        A proposed version with features must be supported and is used
        alone; otherwise every compatible version is offered.
        """
        compatible = self.get_compatible_versions()
        if args_version.features:
            if not is_supported_version(compatible, args_version):
                raise IbcError("Version not supported")
            return [args_version]
        return set_supported_versions(compatible, [])

    def update_connection_commitment(
        self, connection_id: ConnectionId, connection_info: ConnectionEnd
    ) -> None:
        key = connection_commitment_key(connection_id)
        self.commitments[key] = keccak256(top_encode(connection_info))

    def generate_connection_id(self) -> ConnectionId:
        """``connection-{sequence}`` with the next connection sequence."""
        return f"connection-{self.next_connection_seq()}"

    def _verify(self, connection_info: ConnectionEnd, args: VerifyMembershipArgs, message: str) -> None:
        client_impl = self.check_and_get_client(connection_info.client_id)
        client: ClientContract = self.chain.contract(client_impl)
        with self.chain.call_as(self.address):
            verified = client.verify_membership(args)
        if not verified:
            raise IbcError(message)

    def _membership_args(
        self, connection_info: ConnectionEnd, height: Height, proof: Hash, path: Path, value: bytes
    ) -> VerifyMembershipArgs:
        return VerifyMembershipArgs(
            client_id=connection_info.client_id,
            height=height,
            delay_time_period=0,
            delay_block_period=0,
            proof=proof,
            prefix=connection_info.counterparty.prefix.key_prefix,
            path=path,
            value=value,
        )

    def verify_client_state(
        self,
        connection_info: ConnectionEnd,
        height: Height,
        path: Path,
        proof: Hash,
        client_state_bytes: bytes,
    ) -> None:
        args = self._membership_args(connection_info, height, proof, path, client_state_bytes)
        self._verify(connection_info, args, "Failed to verify client state")

    def verify_consensus_state(
        self,
        connection_info: ConnectionEnd,
        height: Height,
        consensus_height: Height,
        proof: Hash,
        consensus_state_bytes: bytes,
    ) -> None:
        path = consensus_state_path(
            connection_info.counterparty.client_id,
            consensus_height.revision_number,
            consensus_height.revision_height,
        )
        args = self._membership_args(connection_info, height, proof, path, consensus_state_bytes)
        self._verify(connection_info, args, "Failed to verify consensus state")

    def verify_connection_state(
        self,
        connection_info: ConnectionEnd,
        height: Height,
        proof: Hash,
        counterparty_connection_id: ConnectionId,
        counterparty_connection_info: ConnectionEnd,
    ) -> None:
        args = self._membership_args(
            connection_info,
            height,
            proof,
            connection_path(counterparty_connection_id),
            top_encode(counterparty_connection_info),
        )
        self._verify(connection_info, args, "Failed to verify connection state")

    def _own_prefix(self) -> MerklePrefix:
        return MerklePrefix(self.get_commitment_prefix())

    def verify_all_states_open_try(
        self,
        connection_info: ConnectionEnd,
        self_consensus_state: Hash,
        args: MsgConnectionOpenTry,
    ) -> None:
        expected_counterparty = ConnectionCounterparty(
            client_id=args.client_id, connection_id="", prefix=self._own_prefix()
        )
        expected_connection = ConnectionEnd(
            client_id=args.counterparty.client_id,
            versions=list(args.counterparty_versions),
            state=ConnectionState.INIT,
            counterparty=expected_counterparty,
            delay_period=args.delay_period,
        )
        self.verify_connection_state(
            connection_info,
            args.proof_height,
            args.proof_init,
            args.counterparty.connection_id,
            expected_connection,
        )
        self.verify_client_state(
            connection_info,
            args.proof_height,
            client_state_path(connection_info.counterparty.client_id),
            args.proof_client,
            args.client_state_bytes,
        )
        self.verify_consensus_state(
            connection_info,
            args.proof_height,
            args.consensus_height,
            args.proof_consensus,
            bytes(self_consensus_state),
        )

    def verify_all_states_open_ack(
        self,
        connection_info: ConnectionEnd,
        self_consensus_state: Hash,
        args: MsgConnectionOpenAck,
    ) -> None:
        expected_counterparty = ConnectionCounterparty(
            client_id=connection_info.client_id,
            connection_id=args.connection_id,
            prefix=self._own_prefix(),
        )
        expected_connection = ConnectionEnd(
            client_id=connection_info.counterparty.client_id,
            versions=[args.version],
            state=ConnectionState.TRY_OPEN,
            counterparty=expected_counterparty,
            delay_period=connection_info.delay_period,
        )
        self.verify_connection_state(
            connection_info,
            args.proof_height,
            args.proof_try,
            args.counterparty_connection_id,
            expected_connection,
        )
        self.verify_client_state(
            connection_info,
            args.proof_height,
            client_state_path(connection_info.counterparty.client_id),
            args.proof_client,
            args.client_state_bytes,
        )
        self.verify_consensus_state(
            connection_info,
            args.proof_height,
            args.consensus_height,
            args.proof_consensus,
            bytes(self_consensus_state),
        )

    def verify_all_states_open_confirm(
        self, connection_info: ConnectionEnd, args: MsgConnectionOpenConfirm
    ) -> None:
        expected_counterparty = ConnectionCounterparty(
            client_id=connection_info.client_id,
            connection_id=args.connection_id,
            prefix=self._own_prefix(),
        )
        expected_connection = ConnectionEnd(
            client_id=connection_info.counterparty.client_id,
            versions=copy.deepcopy(connection_info.versions),
            state=ConnectionState.OPEN,
            counterparty=expected_counterparty,
            delay_period=connection_info.delay_period,
        )
        self.verify_connection_state(
            connection_info,
            args.proof_height,
            args.proof_ack,
            connection_info.counterparty.connection_id,
            expected_connection,
        )

    def _new_connection_id(self) -> ConnectionId:
        connection_id = self.generate_connection_id()
        if connection_id in self.connections:
            raise IbcError(CONNECTION_ALREADY_EXISTS)
        return connection_id

    def _existing_connection(
        self, connection_id: ConnectionId, expected_state: ConnectionState
    ) -> ConnectionEnd:
        stored = self.connections.get(connection_id)
        if stored is None:
            raise IbcError(CONNECTION_DOES_NOT_EXIST)
        if stored.state is not expected_state:
            raise IbcError(INVALID_CONNECTION_STATE)
        return copy.deepcopy(stored)

    def connection_open_init(self, args: MsgConnectionOpenInit) -> ConnectionId:
        """Start a connection attempt on this chain and return its identifier."""
        connection_id = self._new_connection_id()
        self.check_and_get_client(args.client_id)
        if not args.counterparty.connection_id:
            raise IbcError("Invalid counterparty connection ID")

        connection_info = ConnectionEnd(
            client_id=args.client_id,
            versions=self.set_versions_after_init(args.version),
            state=ConnectionState.INIT,
            counterparty=copy.deepcopy(args.counterparty),
            delay_period=args.delay_period,
        )
        self.update_connection_commitment(connection_id, connection_info)
        self.connections[connection_id] = connection_info
        self.chain.emit(GENERATED_CONNECTION_ID_EVENT, connection_id)
        return connection_id

    def connection_open_try(self, args: MsgConnectionOpenTry) -> ConnectionId:
        """Answer a counterparty's connection attempt and return the new identifier."""
        if not args.counterparty_versions:
            raise IbcError("Empty counterparty versions")

        self_consensus_state = args.host_consensus_state_proof
        connection_id = self._new_connection_id()
        self.check_and_get_client(args.client_id)

        picked = pick_version(self.get_compatible_versions(), args.counterparty_versions)
        connection_info = ConnectionEnd(
            client_id=args.client_id,
            versions=[picked],
            state=ConnectionState.TRY_OPEN,
            counterparty=copy.deepcopy(args.counterparty),
            delay_period=args.delay_period,
        )

        self.verify_all_states_open_try(
            copy.deepcopy(connection_info), self_consensus_state, args
        )
        self.connections[connection_id] = connection_info
        self.update_connection_commitment(connection_id, connection_info)
        self.chain.emit(GENERATED_CONNECTION_ID_EVENT, connection_id)
        return connection_id

    def connection_open_ack(self, args: MsgConnectionOpenAck) -> None:
        """Open a connection in INIT once the counterparty has answered it."""
        connection_info = self._existing_connection(args.connection_id, ConnectionState.INIT)
        self.verify_all_states_open_ack(
            copy.deepcopy(connection_info), args.host_consensus_state_proof, args
        )

        connection_info.state = ConnectionState.OPEN
        connection_info.counterparty.connection_id = args.counterparty_connection_id
        connection_info.versions = [args.version]
        self.connections[args.connection_id] = connection_info
        self.update_connection_commitment(args.connection_id, connection_info)

    def connection_open_confirm(self, args: MsgConnectionOpenConfirm) -> None:
        """Open a connection in TRY_OPEN once the counterparty has opened its end."""
        connection_info = self._existing_connection(args.connection_id, ConnectionState.TRY_OPEN)
        self.verify_all_states_open_confirm(copy.deepcopy(connection_info), args)

        connection_info.state = ConnectionState.OPEN
        self.connections[args.connection_id] = connection_info
        self.update_connection_commitment(args.connection_id, connection_info)