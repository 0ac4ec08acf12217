from __future__ import annotations


def xor_into(dest: bytearray, src: bytes) -> bytearray:
    """XOR ``src`` into ``dest`` in place and return ``dest``.

    Both buffers must have the same length; partial XOR is never attempted.
    """
    if len(dest) != len(src):
        raise ValueError(f"xor_into: length mismatch ({len(dest)} != {len(src)})")
    for i, b in enumerate(src):
        dest[i] ^= b
    return dest


def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise ValueError(f"xor_bytes: length mismatch ({len(a)} != {len(b)})")
    return bytes(x ^ y for x, y in zip(a, b))
