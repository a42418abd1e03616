# ==================================================
# vt_bundle/compression.py
# ==================================================
import logging
import zlib

from .errors import DecodeError

log = logging.getLogger(__name__)

# -------- capacity helpers ------------------------------------------------

def _next_pow2(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    return 1 << max(0, n - 1).bit_length()

# -------- zlib wrappers ---------------------------------------------------

def deflate(data: bytes, level: int = 6) -> bytes:
    return zlib.compress(data, level)

def inflate(data: bytes) -> bytes:
    """Inflate one zlib stream into an exactly sized ``bytes``.

    The output buffer starts at the next power of two >= ``len(data)`` and
    doubles every time it fills; the decompressor resumes from its
    unconsumed tail. Corrupt or truncated input, and running out of memory,
    raise :class:`DecodeError` and no partial output escapes.
    """
    capacity = _next_pow2(len(data))
    out = bytearray()
    pending = bytes(data)
    dobj = zlib.decompressobj()
    try:
        while not dobj.eof:
            room = capacity - len(out)
            if room == 0:
                capacity <<= 1                       # buffer full → double
                continue
            chunk = dobj.decompress(pending, room)
            pending = dobj.unconsumed_tail
            if not chunk and not pending and not dobj.eof:
                raise DecodeError("truncated deflate stream")
            out += chunk
    except zlib.error as exc:
        raise DecodeError(f"corrupt deflate stream: {exc}") from exc
    except MemoryError as exc:
        raise DecodeError("out of memory while inflating") from exc

    log.debug("inflated %d → %d bytes (capacity %d)", len(data), len(out), capacity)
    return bytes(out)
