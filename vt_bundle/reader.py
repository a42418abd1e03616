# ==================================================
# vt_bundle/reader.py
# ==================================================
from __future__ import annotations
import logging
import mmap
import os
import struct
from typing import IO, List, NamedTuple, Optional

from .compression import inflate
from .const import (BLOB_SIZE_FMT, BLOB_SIZE_SIZE, GAMES, GAME_VT2,
                    HEADER_FMT, HEADER_SIZE, SIGNATURES)
from .errors import BadSignature, BundleIOError, InvalidHeader, ParseError, SizeMismatch
from .index import IndexEntry, decode_index
from .lookup import HashDictionary
from .util import basename_hash, human_units

log = logging.getLogger(__name__)


class BundleBlob(NamedTuple):
    position: int       # first payload byte, just past the length prefix
    size: int


class BundleFile:
    """Read-only view of one bundle: header, blob framing and index.

    Blob positions are scanned once and cached; payloads are read on
    demand from a read-only mapping of the file.
    """
    def __init__(self, path: str | os.PathLike, game: int = GAME_VT2):
        if game not in GAMES:
            raise ValueError(f"invalid game {game!r}, must be one of {GAMES}")
        self.path = os.fspath(path)
        self.game = game
        self._blobs: Optional[List[BundleBlob]] = None
        self.file = open(self.path, "rb")
        self.mm = None
        try:
            self._open_existing()
        except BaseException:
            self.close()
            raise

    # ------------------------------------------------------------------
    def _open_existing(self):
        self.file_size = os.fstat(self.file.fileno()).st_size
        if self.file_size < HEADER_SIZE:
            raise BundleIOError(f"unable to read header: file is {self.file_size} bytes")
        self.mm = mmap.mmap(self.file.fileno(), 0, access=mmap.ACCESS_READ)
        self.signature, self.unzip_size, self.padding = struct.unpack_from(
            HEADER_FMT, self.mm, 0)
        log.debug("%s: signature=0x%08x unzip_size=%d padding=%d size=%d",
                  self.path, self.signature, self.unzip_size, self.padding, self.file_size)
        if self.signature != SIGNATURES[self.game]:
            raise BadSignature("bad signature")
        if self.padding != 0:
            raise InvalidHeader("non-zero padding")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._blobs = None
        if self.mm is not None:
            self.mm.close()
            self.mm = None
        self.file.close()

    def _check_open(self):
        if self.mm is None:
            raise ValueError("I/O operation on closed bundle")

    # ------------------------------------------------------------------
    @property
    def blobs(self) -> List[BundleBlob]:
        return self.enumerate_blobs()

    def enumerate_blobs(self) -> List[BundleBlob]:
        """Walk the ``[u32 size][payload]`` frames after the header.

        The frames must end exactly at end of file, otherwise
        :class:`SizeMismatch` is raised and nothing is cached.
        """
        self._check_open()
        if self._blobs is not None:
            return self._blobs
        blobs = []
        position = HEADER_SIZE
        while position < self.file_size:
            if position + BLOB_SIZE_SIZE > self.file_size:
                raise SizeMismatch("size mismatch")
            size = struct.unpack_from(BLOB_SIZE_FMT, self.mm, position)[0]
            position += BLOB_SIZE_SIZE
            blobs.append(BundleBlob(position, size))
            position += size
        if position != self.file_size:
            raise SizeMismatch("size mismatch")
        log.debug("%s: %d blobs", self.path, len(blobs))
        self._blobs = blobs
        return blobs

    def read_blob(self, i: int) -> bytes:
        """Raw, still compressed bytes of blob ``i``."""
        blobs = self.enumerate_blobs()
        if not 0 <= i < len(blobs):
            raise IndexError(f"blob index {i} out of range (0..{len(blobs) - 1})")
        blob = blobs[i]
        return bytes(self.mm[blob.position:blob.position + blob.size])

    def read_index(self) -> List[IndexEntry]:
        if not self.enumerate_blobs():
            raise ParseError("bundle has no index blob")
        return decode_index(inflate(self.read_blob(0)), self.game)

    # ------------------------------------------------------------------
    def dump_info(self, out: IO[str], lookup: Optional[HashDictionary] = None):
        blobs = self.enumerate_blobs()
        out.write(f'BundleReader(path="{self.path}", game={self.game}) {{\n')
        if lookup is not None:
            name_hash = basename_hash(self.path)
            if name_hash is not None:
                out.write(f'\tfilename    = "{lookup.resolve(name_hash)}"\n')
        out.write(f"\tsignature   = 0x{self.signature:x}\n")
        out.write(f"\tunzip_size  = {self.unzip_size} ({human_units(self.unzip_size)})\n")
        out.write(f"\tfile_size   = {self.file_size} ({human_units(self.file_size)})\n")
        out.write(f"\tpadding     = {self.padding}\n")
        out.write(f"\tblob_count  = {len(blobs)}\n")
        out.write("\tblobs       = [\n")
        for blob in blobs:
            out.write(f"\t\tBundleBlob( {blob.size:7d} bytes @ {blob.position:9d} )\n")
        out.write("\t]\n}\n")

    def dump_index(self, out: IO[str], lookup: Optional[HashDictionary] = None):
        resolve = lookup.resolve if lookup is not None else (lambda h: format(h, "x"))
        for e in self.read_index():
            out.write(f"{e.index}\t{resolve(e.name_hash)}.{resolve(e.type_hash)}\n")


def open_bundle(path: str | os.PathLike, game: int = GAME_VT2) -> BundleFile:
    return BundleFile(path, game)
