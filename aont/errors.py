from __future__ import annotations

class AontError(Exception):
    """Base class for AONT-specific errors."""


class InvalidParameterLength(AontError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"public parameter length {actual} != block size {expected}")
        self.expected = expected
        self.actual = actual


class InvalidMessageLength(AontError):
    def __init__(self, length: int, block_size: int, reason: str | None = None):
        if reason is None:
            reason = f"length {length} is not a multiple of block size {block_size}"
        super().__init__(reason)
        self.length = length
        self.block_size = block_size


class RandomSourceFailure(AontError):
    pass


class UnknownHashError(AontError):
    pass
