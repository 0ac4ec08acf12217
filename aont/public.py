from __future__ import annotations

import binascii

from argon2.low_level import Type as _ArgonType, hash_secret_raw as _argon_hash

from .constants import ARGON_MEMORY_COST_KIB, ARGON_PARALLELISM, ARGON_TIME_COST, PUBLIC_SALT
from .errors import InvalidParameterLength


def _check(public: bytes, block_size: int) -> bytes:
    if len(public) != block_size:
        raise InvalidParameterLength(block_size, len(public))
    return public


def public_from_text(text: str, block_size: int) -> bytes:
    return _check(text.encode("utf-8"), block_size)


def parse_public_hex(text: str, block_size: int) -> bytes:
    try:
        raw = binascii.unhexlify("".join(text.split()))
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"public parameter is not valid hex: {exc}") from exc
    return _check(raw, block_size)


def derive_public(passphrase: str, block_size: int) -> bytes:
    """Derive a ``block_size``-byte public parameter from a shareable passphrase.

    Argon2id with a fixed salt, so the same passphrase always yields the same
    parameter. The result is not a secret.
    """
    if not passphrase:
        raise ValueError("passphrase must not be empty")
    return _argon_hash(
        passphrase.encode("utf-8"),
        PUBLIC_SALT,
        time_cost=ARGON_TIME_COST,
        memory_cost=ARGON_MEMORY_COST_KIB,
        parallelism=ARGON_PARALLELISM,
        hash_len=block_size,
        type=_ArgonType.ID,
    )


def public_from_bytes(raw: bytes, block_size: int) -> bytes:
    return _check(bytes(raw), block_size)


def load_public_file(path: str, block_size: int) -> bytes:
    """Read a public parameter from ``path``: hex text if it ends in ``.hex``, raw bytes otherwise."""
    with open(path, "rb") as fh:
        raw = fh.read()
    if path.endswith(".hex"):
        return parse_public_hex(raw.decode("ascii", errors="replace"), block_size)
    return public_from_bytes(raw, block_size)
