import pytest

from ibccore.chain import Blockchain, Event
from ibccore.client import ClientHandler, MsgCreateClient, MsgUpdateClient
from ibccore.codec import keccak256
from ibccore.errors import IbcError
from ibccore.paths import client_state_commitment_key, consensus_state_commitment_key
from ibccore.storage import ClientInfo
from ibccore.types import Height

OWNER = b"\x01" * 32
HANDLER = b"\x02" * 32
CLIENT = b"\x03" * 32


class FakeClient:
    def __init__(self, chain):
        self.chain = chain
        self.client_state = b""
        self.consensus = {}
        self.callers = []

    def initialize_client(self, encoded_client_state, encoded_consensus_state):
        self.callers.append(self.chain.caller)
        self.client_state = encoded_client_state
        self.consensus[Height(0, 5)] = encoded_consensus_state
        return Height(0, 5)

    def update_client(self, client_id, encoded_client_message):
        self.callers.append(self.chain.caller)
        if not encoded_client_message:
            return []
        height = Height(0, 6)
        self.consensus[height] = encoded_client_message
        self.client_state = b"state-" + encoded_client_message
        return [height]

    def get_client_state(self, client_id):
        return self.client_state

    def get_consensus_state(self, client_id, height):
        return self.consensus[height]


@pytest.fixture
def setup():
    chain = Blockchain()
    handler = ClientHandler(chain, HANDLER, OWNER)
    client = FakeClient(chain)
    chain.deploy(CLIENT, client)
    with chain.call_as(OWNER):
        handler.register_client("my-client", CLIENT)
    return chain, handler, client


def _create(handler):
    return handler.create_client(MsgCreateClient("my-client", b"client-state", b"consensus"))


def test_create_client_generates_sequential_ids(setup):
    _, handler, _ = setup
    assert _create(handler) == "my-client-0"
    assert _create(handler) == "my-client-1"


def test_create_client_stores_info_and_commitments(setup):
    _, handler, _ = setup
    client_id = _create(handler)
    assert handler.clients[client_id] == ClientInfo("my-client", CLIENT)
    assert handler.commitments[client_state_commitment_key(client_id)] == keccak256(
        b"client-state"
    )
    assert handler.commitments[consensus_state_commitment_key(client_id, 0, 5)] == keccak256(
        b"consensus"
    )


def test_create_client_emits_event_and_calls_as_handler(setup):
    chain, handler, client = setup
    client_id = _create(handler)
    assert chain.events[-1] == Event("generatedClientIdEvent", (client_id,))
    assert client.callers == [HANDLER]


def test_create_unregistered_client_fails(setup):
    _, handler, _ = setup
    with pytest.raises(IbcError, match="Client not registered"):
        handler.create_client(MsgCreateClient("other", b"a", b"b"))


def test_update_client_commits_new_states(setup):
    _, handler, _ = setup
    client_id = _create(handler)
    handler.update_client(MsgUpdateClient(client_id, b"header"))
    assert handler.commitments[client_state_commitment_key(client_id)] == keccak256(
        b"state-header"
    )
    assert handler.commitments[consensus_state_commitment_key(client_id, 0, 6)] == keccak256(
        b"header"
    )


def test_update_client_without_heights_changes_nothing(setup):
    _, handler, _ = setup
    client_id = _create(handler)
    before = dict(handler.commitments)
    handler.update_client(MsgUpdateClient(client_id, b""))
    assert handler.commitments == before


def test_existing_consensus_commitment_is_kept(setup):
    _, handler, client = setup
    client_id = _create(handler)
    client.consensus[Height(0, 5)] = b"changed"
    handler.update_client_commitments(client_id, [Height(0, 5)])
    assert handler.commitments[consensus_state_commitment_key(client_id, 0, 5)] == keccak256(
        b"consensus"
    )


def test_update_unknown_client_fails(setup):
    _, handler, _ = setup
    with pytest.raises(IbcError, match="Client not found"):
        handler.update_client(MsgUpdateClient("missing-0", b"header"))


def test_generate_client_identifier_uses_type(setup):
    _, handler, _ = setup
    assert handler.generate_client_identifier("abc") == "abc-0"
    assert handler.host_info.next_client_seq == 1