"""Identifier validation and small checks shared by the contracts."""

from __future__ import annotations

import string

from .errors import UNEXPECTED_CHANNEL_STATE, IbcError
from .types import HASH_LENGTH, ChannelState

MAX_CLIENT_TYPE_LEN = 128
MIN_PORT_LEN = 2
MAX_PORT_LEN = 128
NANO_SECONDS_MULT = 1_000_000_000

_U64_MAX = (1 << 64) - 1
_EMPTY_HASH = bytes(HASH_LENGTH)

_LOWER = frozenset(string.ascii_lowercase.encode())
_LOWER_OR_DIGIT = _LOWER | frozenset(string.digits.encode())
_CLIENT_TYPE_BODY = _LOWER_OR_DIGIT | frozenset(b"-")
_PORT_CHARS = frozenset((string.ascii_letters + string.digits + "._+-#[]<>").encode())


def _as_bytes(value: bytes | str) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def is_valid_client_type(client_type: bytes | str) -> bool:
    """True for 1 to 128 bytes matching ``^[a-z][a-z0-9-]*[a-z0-9]$`` (or one a-z)."""
    raw = _as_bytes(client_type)
    if not 0 < len(raw) <= MAX_CLIENT_TYPE_LEN:
        return False
    if raw[0] not in _LOWER:
        return False
    if raw[-1] not in _LOWER_OR_DIGIT:
        return False
    return all(char in _CLIENT_TYPE_BODY for char in raw[1:-1])


def is_valid_port_id(port_id: bytes | str) -> bool:
    """True for 2 to 128 bytes of ASCII letters, digits or ``._+-#[]<>``."""
    raw = _as_bytes(port_id)
    if not MIN_PORT_LEN <= len(raw) <= MAX_PORT_LEN:
        return False
    return all(char in _PORT_CHARS for char in raw)


def require_valid_address(address: bytes, own_address: bytes) -> None:
    """Reject the zero address and the contract's own address."""
    if address == own_address or not any(address):
        raise IbcError("Invalid address")


def require_state_open(state: ChannelState) -> None:
    if state is not ChannelState.OPEN:
        raise IbcError(UNEXPECTED_CHANNEL_STATE)


def checked_timestamp_to_unix(timestamp: int) -> int:
    """Seconds to nanoseconds, failing if the result leaves 64 bits."""
    result = timestamp * NANO_SECONDS_MULT
    if result > _U64_MAX:
        raise IbcError("Overlow!!!")
    return result


def is_empty_hash(value: bytes) -> bool:
    return value == _EMPTY_HASH