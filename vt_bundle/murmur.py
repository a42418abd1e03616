# ==================================================
# vt_bundle/murmur.py
# ==================================================
import struct

_M = 0xC6A4A7935BD1E995
_R = 47
_MASK = 0xFFFFFFFFFFFFFFFF
_unpack_block = struct.Struct("<Q").unpack_from


def murmur64a(key: bytes, seed: int = 0) -> int:
    """MurmurHash64A, bit-compatible with the reference C on little-endian hosts."""
    n = len(key)
    h = (seed ^ (n * _M)) & _MASK

    tail = n & ~7
    for off in range(0, tail, 8):
        k = (_unpack_block(key, off)[0] * _M) & _MASK
        k ^= k >> _R
        k = (k * _M) & _MASK
        h ^= k
        h = (h * _M) & _MASK

    rest = n & 7
    if rest:
        h ^= int.from_bytes(key[tail:], "little")
        h = (h * _M) & _MASK

    h ^= h >> _R
    h = (h * _M) & _MASK
    h ^= h >> _R
    return h


def hash_text(text: str) -> int:
    return murmur64a(text.encode("utf-8"), 0)
