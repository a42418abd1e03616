# ==================================================
# vt_bundle/lookup.py
# ==================================================
import logging
import os
from collections import deque
from typing import IO, Iterable, List, NamedTuple, Optional, Union

import numpy as np

from .const import DUMP_FMT, TEXT_MAX
from .errors import ParseError, TooLong
from .murmur import murmur64a

log = logging.getLogger(__name__)


class HashEntry(NamedTuple):
    text: str
    hash: int


def _chomp(line: Union[str, bytes]) -> str:
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"dictionary line is not utf-8: {exc}") from exc
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _make_entry(text: str) -> HashEntry:
    raw = text.encode("utf-8")
    if len(raw) > TEXT_MAX:
        raise TooLong(f"text is {len(raw)} bytes, at most {TEXT_MAX} fit")
    if b"\0" in raw:
        raise ParseError("dictionary text contains NUL")
    return HashEntry(text, murmur64a(raw, 0))


class HashDictionary:
    """Reverse map from 64-bit name hashes to the strings they came from.

    Entries are kept twice: an insertion history (newest first) and a
    sorted snapshot used for binary search. Any insertion marks the
    snapshot dirty; ``find`` and ``dump`` go through ``rebuild`` first.
    Colliding hashes are neither detected nor reported.
    """

    def __init__(self, lines: Optional[Iterable[Union[str, bytes]]] = None):
        self._list: deque = deque()
        self._sorted: List[HashEntry] = []
        self._keys = np.empty(0, dtype=np.uint64)
        self._dirty = False
        if lines is not None:
            self.load(lines)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._list)

    def __contains__(self, h: int) -> bool:
        return self.find(h) is not None

    @property
    def dirty(self) -> bool:
        return self._dirty

    def entries(self) -> List[HashEntry]:
        """Insertion history, newest first."""
        return list(self._list)

    # ------------------------------------------------------------------
    def append(self, text: str) -> HashEntry:
        entry = _make_entry(text)
        self._list.appendleft(entry)
        self._dirty = True
        return entry

    def load(self, lines: Iterable[Union[str, bytes]]) -> int:
        """Prepend one entry per line; all or nothing. Returns the count."""
        batch = [_make_entry(_chomp(line)) for line in lines]
        self._list.extendleft(batch)
        if batch:
            self._dirty = True
        log.debug("loaded %d dictionary entries (%d total)", len(batch), len(self._list))
        return len(batch)

    def load_file(self, path: Union[str, os.PathLike]) -> int:
        with open(path, "rb") as f:
            return self.load(f)

    # ------------------------------------------------------------------
    def rebuild(self) -> bool:
        """Re-sort the lookup snapshot if stale. True if work was done."""
        if not self._dirty:
            return False
        snapshot = list(self._list)
        keys = np.fromiter((e.hash for e in snapshot), dtype=np.uint64, count=len(snapshot))
        order = np.argsort(keys, kind="quicksort")
        self._keys = keys[order]
        self._sorted = [snapshot[i] for i in order]
        self._dirty = False
        log.debug("rebuilt lookup array with %d entries", len(self._sorted))
        return True

    def find(self, h: int) -> Optional[str]:
        self.rebuild()
        i = int(np.searchsorted(self._keys, np.uint64(h)))
        if i < len(self._sorted) and self._sorted[i].hash == h:
            return self._sorted[i].text
        return None

    def resolve(self, h: int) -> str:
        """Text for ``h`` or its bare lowercase hex."""
        text = self.find(h)
        return text if text is not None else format(h, "x")

    def dump(self, out: IO[str]):
        self.rebuild()
        for e in self._sorted:
            out.write(DUMP_FMT.format(e.hash, e.text))
