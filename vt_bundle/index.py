# ==================================================
# vt_bundle/index.py
# ==================================================
import logging
import struct
from typing import List, NamedTuple, Optional

import numpy as np

from .const import GAME_VT1, GAME_VT2, INDEX_COUNT_FMT, INDEX_OFFSET, INDEX_STRIDE
from .errors import ParseError

log = logging.getLogger(__name__)

# one record per asset; VT2 appends 4 bytes nobody has decoded yet
RECORD_DTYPES = {
    GAME_VT1: np.dtype({"names": ["type_hash", "name_hash"],
                        "formats": ["<u8", "<u8"],
                        "offsets": [0x0, 0x8],
                        "itemsize": INDEX_STRIDE[GAME_VT1]}),
    GAME_VT2: np.dtype({"names": ["type_hash", "name_hash", "unknown"],
                        "formats": ["<u8", "<u8", "<u4"],
                        "offsets": [0x0, 0x8, 0x10],
                        "itemsize": INDEX_STRIDE[GAME_VT2]}),
}


class IndexEntry(NamedTuple):
    index: int
    type_hash: int
    name_hash: int
    unknown: Optional[int] = None


def decode_index(data: bytes, game: int) -> List[IndexEntry]:
    """Decode the inflated first blob of a bundle into its asset records."""
    try:
        dtype = RECORD_DTYPES[game]
    except KeyError:
        raise ValueError(f"unknown game {game!r}") from None

    if len(data) < struct.calcsize(INDEX_COUNT_FMT):
        raise ParseError("index blob too short for entry count")
    count = struct.unpack_from(INDEX_COUNT_FMT, data, 0)[0]
    need = INDEX_OFFSET + count * dtype.itemsize
    if len(data) < need:
        raise ParseError(f"truncated index: {count} entries need {need} bytes, have {len(data)}")

    records = np.frombuffer(data, dtype=dtype, count=count, offset=INDEX_OFFSET)
    has_unknown = "unknown" in dtype.names
    entries = [
        IndexEntry(i, int(r["type_hash"]), int(r["name_hash"]),
                   int(r["unknown"]) if has_unknown else None)
        for i, r in enumerate(records)
    ]
    log.debug("decoded %d index entries (stride 0x%x)", count, dtype.itemsize)
    return entries
