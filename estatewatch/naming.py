"""Sequence-numbered object naming for append-only stores.

Objects are named ``<prefix>_<n>``. The newest object is the one with the
greatest ``n``; the next object gets ``n + 1``.
"""

from __future__ import annotations

import posixpath
import re
from typing import Iterable, Optional

SEPARATOR = "_"
_DIGITS = re.compile(r"[0-9]+")


def parse_sequence_number(name: str) -> int:
    """Return the integer after the last ``_`` of ``name``, or 0."""
    base = posixpath.basename(name.replace("\\", "/"))
    _, sep, suffix = base.rpartition(SEPARATOR)
    if not sep or not _DIGITS.fullmatch(suffix):
        return 0
    return int(suffix)


def matches_prefix(name: str, prefix: str) -> bool:
    return name.startswith(prefix + SEPARATOR)


def latest_object_name(names: Iterable[str], prefix: str) -> Optional[str]:
    """Pick the highest-numbered name sharing ``prefix``.

    Malformed suffixes count as 0 and may tie with a genuine ``<prefix>_0``;
    the later name in ``names`` wins a tie.
    """
    candidates = sorted(
        (name for name in names if matches_prefix(name, prefix)),
        key=parse_sequence_number,
    )
    return candidates[-1] if candidates else None


def next_object_name(names: Iterable[str], prefix: str) -> str:
    latest = latest_object_name(names, prefix)
    if latest is None:
        return f"{prefix}{SEPARATOR}0"
    return f"{prefix}{SEPARATOR}{parse_sequence_number(latest) + 1}"
