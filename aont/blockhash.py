"""Block hash functions used as the keystream and checksum generator.

A block hash maps byte strings of any length to a fixed-size digest. The
digest size defines the block size ``B`` of the transform: the public
parameter, the random key, every message block and the checksum are all
``B`` bytes long.

Backends are PyCryptodomex hash modules. The HMAC variant keys the hash
with a token that is published alongside the public parameter, so the
result is still keyless to anyone holding the full transformed output.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from Cryptodome.Hash import HMAC, SHA1, SHA224, SHA256, SHA384, SHA512, SHA3_256, SHA3_512

from .constants import COUNTER_STRUCT, DEFAULT_HASH, MAX_BLOCKS
from .errors import UnknownHashError


_HASH_MODULES: Dict[str, object] = {
    "sha1": SHA1,
    "sha224": SHA224,
    "sha256": SHA256,
    "sha384": SHA384,
    "sha512": SHA512,
    "sha3-256": SHA3_256,
    "sha3-512": SHA3_512,
}


def counter_bytes(index: int) -> bytes:
    if not 0 < index <= MAX_BLOCKS:
        raise ValueError(f"block counter out of range: {index}")
    return COUNTER_STRUCT.pack(index)


class BlockHash:
    """Deterministic one-way function with a fixed output length."""

    name = "abstract"

    def output_length(self) -> int:
        raise NotImplementedError

    def digest(self, data: bytes) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} B={self.output_length()}>"


class CryptodomeBlockHash(BlockHash):
    def __init__(self, module, name: Optional[str] = None):
        self._module = module
        self._size = int(module.digest_size)
        self.name = name or module.__name__.rsplit(".", 1)[-1].lower()

    def output_length(self) -> int:
        return self._size

    def digest(self, data: bytes) -> bytes:
        return self._module.new(data).digest()


class HmacBlockHash(BlockHash):
    def __init__(self, token: bytes, module=SHA1, name: Optional[str] = None):
        if not token:
            raise ValueError("HMAC token must not be empty")
        self._token = bytes(token)
        self._module = module
        self._size = int(module.digest_size)
        self.name = name or "hmac-" + module.__name__.rsplit(".", 1)[-1].lower()

    @property
    def token(self) -> bytes:
        return self._token

    def output_length(self) -> int:
        return self._size

    def digest(self, data: bytes) -> bytes:
        return HMAC.new(self._token, msg=data, digestmod=self._module).digest()


def available_hashes() -> List[str]:
    return sorted(_HASH_MODULES)


def get_block_hash(name: str = DEFAULT_HASH, hmac_token: Optional[bytes] = None) -> BlockHash:
    """Look up a block hash by name.

    Args:
        name: Registry name (see ``available_hashes()``), case-insensitive.
        hmac_token: When given, wrap the hash in HMAC keyed with this token.

    Raises:
        UnknownHashError: If ``name`` is not registered.
    """
    key = name.strip().lower().replace("_", "-")
    module = _HASH_MODULES.get(key)
    if module is None:
        raise UnknownHashError(f"unknown hash '{name}' (choose from: {', '.join(available_hashes())})")
    if hmac_token is not None:
        return HmacBlockHash(hmac_token, module, name="hmac-" + key)
    return CryptodomeBlockHash(module, name=key)
