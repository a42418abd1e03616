# ==================================================
# vt_bundle/errors.py
# ==================================================


class BundleError(Exception):
    """Base class for malformed or incompatible input."""


class BundleIOError(BundleError, OSError):
    """The bundle could not be read (short header)."""


class BadSignature(BundleError):
    pass


class InvalidHeader(BundleError):
    """The reserved header word is not zero."""


class SizeMismatch(BundleError):
    """The blob stream does not end exactly at end of file."""


class DecodeError(BundleError):
    """A blob payload failed to inflate."""


class ParseError(BundleError):
    pass


class TooLong(BundleError, ValueError):
    """Dictionary text wider than a dictionary slot."""
