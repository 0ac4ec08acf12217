import struct


# Block counter: 1-based, serialized as a big-endian (network order) u32
COUNTER_STRUCT = struct.Struct(">I")
COUNTER_SIZE = COUNTER_STRUCT.size
MAX_BLOCKS = (1 << 32) - 1

DEFAULT_HASH = "sha1"  # 20-byte blocks, matches the reference encoding

# Public parameter derivation (Argon2id). The salt is fixed so that every party
# derives the same parameter from the same passphrase.
PUBLIC_SALT = b"AONT-PUBLIC-PARAM\x00"
ARGON_TIME_COST = 3
ARGON_MEMORY_COST_KIB = 64 * 1024  # 64 MiB
ARGON_PARALLELISM = 4
