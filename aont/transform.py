"""Rivest's all-or-nothing transform.

Encoding, for message blocks ``m_1 .. m_n`` of ``B`` bytes each:

1. outer masking: ``t_i = m_i XOR H(R || i)`` with a fresh random block ``R``
2. inner checksum: ``S = XOR over i of H(P || t_i || i)`` with the public block ``P``
3. trailer: ``t_{n+1} = S XOR R``

Decoding recomputes ``S`` from the received ``t_1 .. t_n``, recovers
``R = S XOR t_{n+1}`` and removes the outer mask. Counters are 1-based and
serialized as big-endian u32. Nothing is embedded in the output besides the
blocks: ``P`` and the hash choice travel out of band.

There is no integrity check. Decoding tampered data, or decoding with the
wrong ``P``, succeeds and yields garbage.
"""

from __future__ import annotations

import concurrent.futures as _fut
from typing import Iterable, List, Optional, Tuple

from .blockhash import BlockHash, counter_bytes, get_block_hash
from .constants import MAX_BLOCKS
from .errors import InvalidMessageLength, InvalidParameterLength
from .randsrc import RandomSource, SystemRandomSource, draw_key
from .xorutil import xor_bytes, xor_into


def checksum_contribution(block_hash: BlockHash, public: bytes, block: bytes, index: int) -> bytes:
    """Return ``H(P || block || BE32(index))`` for a single transformed block."""
    return block_hash.digest(public + block + counter_bytes(index))


def fold_checksum(contributions: Iterable[bytes], block_size: int) -> bytes:
    """XOR-fold checksum contributions; the result does not depend on order."""
    acc = bytearray(block_size)
    for c in contributions:
        xor_into(acc, c)
    return bytes(acc)


def keystream_block(block_hash: BlockHash, key: bytes, index: int) -> bytes:
    return block_hash.digest(key + counter_bytes(index))


def _check_public(public: bytes, block_size: int) -> bytes:
    public = bytes(public)
    if len(public) != block_size:
        raise InvalidParameterLength(block_size, len(public))
    return public


def _split_ranges(n: int, jobs: int) -> List[Tuple[int, int]]:
    # Contiguous 1-based [start, stop) block ranges, one per worker
    if n == 0:
        return []
    jobs = max(1, min(jobs, n))
    step, extra = divmod(n, jobs)
    ranges = []
    start = 1
    for j in range(jobs):
        stop = start + step + (1 if j < extra else 0)
        ranges.append((start, stop))
        start = stop
    return ranges


class _Transform:
    def __init__(self, block_hash: Optional[BlockHash] = None, jobs: int = 1):
        self.block_hash = block_hash if block_hash is not None else get_block_hash()
        self.block_size = self.block_hash.output_length()
        self.jobs = max(1, int(jobs))

    def _map_ranges(self, func, n: int):
        ranges = _split_ranges(n, self.jobs)
        if len(ranges) <= 1:
            return [func(start, stop) for start, stop in ranges]
        with _fut.ThreadPoolExecutor(max_workers=len(ranges)) as ex:
            return list(ex.map(lambda r: func(*r), ranges))


class Encoder(_Transform):
    """All-or-nothing encoder.

    Args:
        block_hash: Block hash; defaults to SHA-1 (20-byte blocks).
        random_source: Source of the per-call random key ``R``; defaults to the
            system CSPRNG.
        jobs: Worker threads used to process block ranges.
    """

    def __init__(
        self,
        block_hash: Optional[BlockHash] = None,
        random_source: Optional[RandomSource] = None,
        jobs: int = 1,
    ):
        super().__init__(block_hash, jobs)
        self.random_source = random_source if random_source is not None else SystemRandomSource()

    def encode(self, message: bytes, public: bytes) -> bytes:
        """Transform ``message`` into ``len(message) + B`` bytes.

        Raises:
            InvalidParameterLength: ``public`` is not exactly one block.
            InvalidMessageLength: ``message`` is not block aligned or too long.
            RandomSourceFailure: no random key could be drawn.
        """
        bs = self.block_size
        message = bytes(message)
        if len(message) % bs != 0:
            raise InvalidMessageLength(len(message), bs)
        n = len(message) // bs
        if n > MAX_BLOCKS:
            raise InvalidMessageLength(len(message), bs, f"message has {n} blocks; at most {MAX_BLOCKS} supported")
        public = _check_public(public, bs)

        rkey = draw_key(self.random_source, bs)
        h = self.block_hash
        out = bytearray(len(message) + bs)

        def _run(start: int, stop: int) -> bytes:
            partial = bytearray(bs)
            for i in range(start, stop):
                off = (i - 1) * bs
                block = bytearray(message[off:off + bs])
                xor_into(block, keystream_block(h, rkey, i))
                out[off:off + bs] = block
                # checksum over the masked block, as the decoder will see it
                xor_into(partial, checksum_contribution(h, public, bytes(block), i))
            return bytes(partial)

        checksum = fold_checksum(self._map_ranges(_run, n), bs)
        out[n * bs:] = xor_bytes(checksum, rkey)
        return bytes(out)


class Decoder(_Transform):
    """All-or-nothing decoder. Needs no random source."""

    def decode(self, transformed: bytes, public: bytes) -> bytes:
        """Recover the message from ``transformed`` (``n + 1`` blocks).

        Raises:
            InvalidParameterLength: ``public`` is not exactly one block.
            InvalidMessageLength: ``transformed`` is not block aligned, lacks
                the trailing block, or holds too many blocks.
        """
        bs = self.block_size
        transformed = bytes(transformed)
        if len(transformed) % bs != 0:
            raise InvalidMessageLength(len(transformed), bs)
        if len(transformed) < bs:
            raise InvalidMessageLength(len(transformed), bs, "transformed data is shorter than one block")
        n = len(transformed) // bs - 1
        if n > MAX_BLOCKS:
            raise InvalidMessageLength(len(transformed), bs, f"transformed data has {n} message blocks; at most {MAX_BLOCKS} supported")
        public = _check_public(public, bs)
        h = self.block_hash

        def _checksum(start: int, stop: int) -> bytes:
            partial = bytearray(bs)
            for i in range(start, stop):
                off = (i - 1) * bs
                xor_into(partial, checksum_contribution(h, public, transformed[off:off + bs], i))
            return bytes(partial)

        checksum = fold_checksum(self._map_ranges(_checksum, n), bs)
        rkey = xor_bytes(checksum, transformed[n * bs:])

        out = bytearray(n * bs)

        def _unmask(start: int, stop: int) -> None:
            for i in range(start, stop):
                off = (i - 1) * bs
                block = bytearray(transformed[off:off + bs])
                out[off:off + bs] = xor_into(block, keystream_block(h, rkey, i))

        self._map_ranges(_unmask, n)
        return bytes(out)


def encode(
    message: bytes,
    public: bytes,
    *,
    block_hash: Optional[BlockHash] = None,
    random_source: Optional[RandomSource] = None,
    jobs: int = 1,
) -> bytes:
    return Encoder(block_hash, random_source, jobs).encode(message, public)


def decode(transformed: bytes, public: bytes, *, block_hash: Optional[BlockHash] = None, jobs: int = 1) -> bytes:
    return Decoder(block_hash, jobs).decode(transformed, public)


def encode_sha1(message: bytes, public: bytes) -> bytes:
    return encode(message, public, block_hash=get_block_hash("sha1"))


def decode_sha1(transformed: bytes, public: bytes) -> bytes:
    return decode(transformed, public, block_hash=get_block_hash("sha1"))
