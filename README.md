# ibccore

`ibccore` is an in-memory model of the core handlers of the Inter-Blockchain
Communication (IBC) protocol. It covers the host (client registry, port
binding, channel capabilities), client creation and updates, the connection
opening handshake, sending packets and timing packets out. Stored values are
committed under ICS-24 paths whose storage keys are Keccak-256 digests.

Everything runs in memory on a simulated chain. It is meant for simulations,
tests and tools that need to reproduce the commitments and validation rules of
an IBC core.

## Installation

```
pip install ibccore
```

## Modules

- `ibccore.types`: protocol data such as `Height`, `ChannelData`,
  `ChannelState`, `ChannelOrder`, `ConnectionEnd`, `Version`, `ClientStatus`,
  `LatestInfo`, `VerifyMembershipArgs` and `VerifyNonMembershipArgs`.
- `ibccore.errors`: `IbcError`, raised whenever a check fails, and the shared
  error messages.
- `ibccore.codec`: binary encoding (`top_encode`, `nested_encode`) and the
  `keccak256` and `sha256` hashes.
- `ibccore.validation`: identifier rules (`is_valid_client_type`,
  `is_valid_port_id`) and shared checks (`require_valid_address`,
  `require_state_open`, `checked_timestamp_to_unix`, `is_empty_hash`).
- `ibccore.chain`: `Blockchain`, a simulated chain holding deployed contracts,
  the block nonce and timestamp, the current caller (`call_as`, `caller`) and
  the emitted `Event`s.
- `ibccore.packets`: `Packet`, `PacketReceipt` and the packet and channel
  handshake messages.
- `ibccore.paths`: ICS-24 commitment paths and their Keccak-256 keys.
- `ibccore.storage`: `HostStorage` and the records it keeps (`ClientInfo`,
  `HostInfo`, `ChannelInfo`, `RecvStartSequence`).
- `ibccore.host`: `Host`, the owner-only configuration endpoints
  (`set_expected_time_per_block`, `register_client`, `bind_port`), views and
  capability management.
- `ibccore.client`: `ClientHandler` with `create_client`, `update_client` and
  `update_client_commitments`.
- `ibccore.merkle`: `verify_merkle_proof` and `append_and_hash`.
- `ibccore.connection_lib`: version negotiation (`default_ibc_version`,
  `pick_version`, `is_supported_version` and helpers).
- `ibccore.connection_types` and `ibccore.connection`: the handshake messages
  and `ConnectionHandler` with `connection_open_init`, `connection_open_try`,
  `connection_open_ack` and `connection_open_confirm`.
- `ibccore.channel_lib`: packet commitment hashing (`encode_and_hash`,
  `encode_and_hash_twice`), receipt commitments and `SendPacketEvent`.
- `ibccore.send`: `PacketSender.send_packet`.
- `ibccore.timeout`: `PacketTimeouts` with `timeout_packet` and
  `timeout_on_close`.
- `ibccore.client_interface` and `ibccore.module_interface`: the protocols
  `ClientContract` and `IbcModule` that light clients and applications deployed
  on the chain are expected to satisfy.

## Examples

Paths and keys:

```python
from ibccore import paths

paths.packet_commitment_path("transfer", "channel-0", 1)
# "commitments/ports/transfer/channels/channel-0/sequences/1"

key = paths.packet_commitment_key("transfer", "channel-0", 1)  # 32-byte Keccak-256
```

A host on a simulated chain:

```python
from ibccore.chain import Blockchain
from ibccore.host import Host

chain = Blockchain()
owner = b"\x01" * 32
host = Host(chain, b"\x02" * 32, owner)

with chain.call_as(owner):
    host.set_expected_time_per_block(6)
    host.bind_port("transfer", b"\x03" * 32)
```

Version negotiation:

```python
from ibccore.connection_lib import default_ibc_version, pick_version
from ibccore.types import Version

pick_version([default_ibc_version()], [Version("1", ["ORDER_UNORDERED"])])
# Version(identifier="1", features=["ORDER_UNORDERED"])
```

A failed check raises `ibccore.errors.IbcError`; its `message` is the text the
protocol uses for that case, for example `"Port already claimed"`.

## What it does not do

- It does not receive packets or write and process acknowledgements; there is
  no handler for incoming packets or acknowledgements.
- It has message types for the channel opening and closing handshake but no
  handler that carries that handshake out.
- It ships no light client; clients are objects you deploy on the `Blockchain`
  that satisfy `ClientContract`.
- It keeps all state in memory: nothing is persisted, there is no network
  access and no command-line tool.