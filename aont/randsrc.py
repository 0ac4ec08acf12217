from __future__ import annotations

from Cryptodome.Random import get_random_bytes

from .errors import RandomSourceFailure


class RandomSource:
    """Supplier of the per-encoding random key."""

    def fill(self, buffer: bytearray) -> None:
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """Operating-system CSPRNG via PyCryptodomex."""

    def fill(self, buffer: bytearray) -> None:
        data = get_random_bytes(len(buffer))
        buffer[:] = data


class FixedRandomSource(RandomSource):
    """Deterministic source that repeats ``pattern``. Only for tests and vectors."""

    def __init__(self, pattern: bytes):
        if not pattern:
            raise ValueError("pattern must not be empty")
        self.pattern = bytes(pattern)

    def fill(self, buffer: bytearray) -> None:
        n = len(buffer)
        reps = n // len(self.pattern) + 1
        buffer[:] = (self.pattern * reps)[:n]


def draw_key(source: RandomSource, size: int) -> bytes:
    """Fill a fresh ``size``-byte key from ``source``.

    Any failure of the source is reported as ``RandomSourceFailure``; there is
    no fallback to a weaker generator.
    """
    buf = bytearray(size)
    try:
        source.fill(buf)
    except (OSError, ValueError, RuntimeError, NotImplementedError) as exc:
        raise RandomSourceFailure(f"random source failed: {exc}") from exc
    if len(buf) != size:
        raise RandomSourceFailure(f"random source returned {len(buf)} bytes, expected {size}")
    return bytes(buf)
