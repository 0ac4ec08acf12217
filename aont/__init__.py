"""
aont — Rivest's All-or-Nothing Transform.

The transform turns a block-aligned message into ``n + 1`` blocks such that
the message cannot be recovered unless every output block is available.
Decoding needs only a public parameter known to all parties. This is not
encryption: anyone holding the complete output and the public parameter can
decode it.

- Pluggable block hash (SHA-1 by default, any PyCryptodomex SHA-2/SHA-3, or
  an HMAC keyed with a published token); the block size is the digest size.
- Injected random key source for reproducible encodings in tests.
- Optional thread fan-out across block ranges.
- ``aont`` command-line wrapper for files and pipes.
"""

__version__ = "0.1"

from .errors import (
    AontError,
    InvalidMessageLength,
    InvalidParameterLength,
    RandomSourceFailure,
    UnknownHashError,
)
from .blockhash import BlockHash, available_hashes, get_block_hash
from .randsrc import FixedRandomSource, RandomSource, SystemRandomSource
from .transform import Decoder, Encoder, decode, decode_sha1, encode, encode_sha1

__all__ = [
    "AontError",
    "InvalidMessageLength",
    "InvalidParameterLength",
    "RandomSourceFailure",
    "UnknownHashError",
    "BlockHash",
    "available_hashes",
    "get_block_hash",
    "RandomSource",
    "SystemRandomSource",
    "FixedRandomSource",
    "Encoder",
    "Decoder",
    "encode",
    "decode",
    "encode_sha1",
    "decode_sha1",
]
