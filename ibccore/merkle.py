"""Merkle proof verification with sorted sibling pairs and SHA-256."""

from __future__ import annotations

from collections.abc import Iterable

from .codec import sha256
from .types import Address, Hash


def append_and_hash(first: bytes, second: bytes) -> Hash:
    """SHA-256 of ``first`` followed by ``second``."""
    return sha256(bytes(first) + bytes(second))


def verify_merkle_proof(
    caller: Address, item_to_prove: bytes, proof: Iterable[Hash], root_hash: Hash
) -> bool:
    """Check that ``caller + item_to_prove`` is a leaf of the tree with ``root_hash``.

    At each level the smaller of the two hashes, read as a big-endian
    number, comes first.
    """
    current = sha256(bytes(caller) + bytes(item_to_prove))
    for proof_item in proof:
        if int.from_bytes(current, "big") < int.from_bytes(proof_item, "big"):
            current = append_and_hash(current, proof_item)
        else:
            current = append_and_hash(proof_item, current)
    return current == root_hash