"""Binary encoding of contract values and the hash functions used on them.

Nested encoding: unsigned integers are 8-byte big-endian, buffers and lists
carry a 4-byte big-endian length, enums are one discriminant byte and
records are their fields' nested encodings in order. Top-level encoding
drops the length of a buffer or list and trims integers and enum
discriminants to their minimal big-endian form.
"""

from __future__ import annotations

import hashlib
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from Crypto.Hash import keccak

_U64_MAX = (1 << 64) - 1


def _check_u64(value: int) -> int:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{value} does not fit in an unsigned 64-bit integer")
    return value


def _is_record(value: Any) -> bool:
    return is_dataclass(value) and not isinstance(value, type)


def _length_prefix(count: int) -> bytes:
    return count.to_bytes(4, "big")


def _minimal(value: int) -> bytes:
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def nested_encode(value: Any) -> bytes:
    """Encode a value as it appears inside another value."""
    if isinstance(value, bool):
        return b"\x01" if value else b"\x00"
    if isinstance(value, Enum):
        return bytes([value.value])
    if isinstance(value, int):
        return _check_u64(value).to_bytes(8, "big")
    if isinstance(value, str):
        value = value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return _length_prefix(len(value)) + bytes(value)
    if _is_record(value):
        return b"".join(nested_encode(getattr(value, f.name)) for f in fields(value))
    if isinstance(value, (list, tuple)):
        return _length_prefix(len(value)) + b"".join(nested_encode(item) for item in value)
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def top_encode(value: Any) -> bytes:
    """Encode a value as a whole storage entry or argument."""
    if isinstance(value, bool):
        return b"\x01" if value else b""
    if isinstance(value, Enum):
        return _minimal(value.value)
    if isinstance(value, int):
        return _minimal(_check_u64(value))
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if _is_record(value):
        return b"".join(nested_encode(getattr(value, f.name)) for f in fields(value))
    if isinstance(value, (list, tuple)):
        return b"".join(nested_encode(item) for item in value)
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def keccak256(data: bytes | str) -> bytes:
    """Keccak-256 digest of the data (text is hashed as UTF-8)."""
    return keccak.new(digest_bits=256, data=_as_bytes(data)).digest()


def sha256(data: bytes | str) -> bytes:
    """SHA-256 digest of the data (text is hashed as UTF-8)."""
    return hashlib.sha256(_as_bytes(data)).digest()