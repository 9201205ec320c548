"""Case-insensitive natural ordering ("file2" < "file10")."""

import re

_CHUNK_RE = re.compile(r"(\d+)")


def natural_key(value: str) -> tuple:
    """Sort key comparing digit runs by numeric value, ignoring case.

    Ties (e.g. "A.png" / "a.png", "07" / "7") fall back to the raw string.
    """
    chunks = []
    for i, part in enumerate(_CHUNK_RE.split(value.lower())):
        if not part:
            continue
        if i % 2:
            chunks.append((0, int(part), ""))
        else:
            chunks.append((1, 0, part))
    return tuple(chunks), value


def natural_sorted(values, key=lambda v: v, reverse: bool = False) -> list:
    """Return values sorted by natural_key applied to key(value)."""
    return sorted(values, key=lambda v: natural_key(key(v)), reverse=reverse)
