# ==================================================
# vt_bundle/util.py
# ==================================================
import os
import re
from typing import Optional

_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")
_HEX_PREFIX = re.compile(r"[0-9a-fA-F]{1,16}")


def human_units(n: int) -> str:
    i = 0
    while n >> (10 * (i + 1)) and i < len(_UNITS) - 1:
        i += 1
    return f"{n / (1 << (10 * i)):.2f} {_UNITS[i]}"


def basename_hash(path) -> Optional[int]:
    """Bundles are named after the hash of their resource name."""
    m = _HEX_PREFIX.match(os.path.basename(os.path.normpath(os.fspath(path))))
    return int(m.group(), 16) if m else None
