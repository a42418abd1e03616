from .const import GAME_VT1, GAME_VT2
from .errors import (BadSignature, BundleError, BundleIOError, DecodeError,
                     InvalidHeader, ParseError, SizeMismatch, TooLong)
from .compression import inflate
from .index import IndexEntry, decode_index
from .lookup import HashDictionary, HashEntry
from .murmur import hash_text, murmur64a
from .reader import BundleBlob, BundleFile, open_bundle

__all__ = [
    "GAME_VT1", "GAME_VT2",
    "BundleError", "BundleIOError", "BadSignature", "InvalidHeader",
    "SizeMismatch", "DecodeError", "ParseError", "TooLong",
    "inflate", "IndexEntry", "decode_index", "HashDictionary", "HashEntry",
    "hash_text", "murmur64a", "BundleBlob", "BundleFile", "open_bundle",
]
