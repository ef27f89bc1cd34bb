from __future__ import annotations

import re
from collections.abc import Iterable

# git tag --list pattern for tags that look like release markers.
RELEASE_TAG_GLOB = "*[._]*"

_DIGIT_RUN_RE = re.compile(r"(\d+)")

type _Chunk = tuple[tuple[int, ...], int]


def is_release_tag(tag: str) -> bool:
    return "." in tag or "_" in tag


def strip_v_prefix(value: str) -> str:
    """Drop a single leading 'v' ("v1.2" -> "1.2", "vv1" -> "v1")."""
    return value.removeprefix("v")


def _char_order(c: str) -> int:
    # '~' sorts before end of string, letters before any other character.
    if c == "~":
        return -1
    if c.isascii() and c.isalpha():
        return ord(c)
    return ord(c) + 256


def _text_key(text: str) -> tuple[int, ...]:
    return (*(_char_order(c) for c in text), 0)


def version_sort_key(tag: str) -> tuple[_Chunk, ...]:
    """Sort key ordering tags the way `sort -V` does.

    The tag is split into alternating non-digit and digit runs. Digit runs
    compare numerically, so "1.10" sorts after "1.2"; non-digit runs compare
    character by character with Debian version rules.
    """
    parts = _DIGIT_RUN_RE.split(tag)
    chunks: list[_Chunk] = []
    for i in range(0, len(parts) - 1, 2):
        chunks.append((_text_key(parts[i]), int(parts[i + 1])))
    if parts[-1]:
        chunks.append((_text_key(parts[-1]), 0))
    # End-of-string marker, so "1.0~rc1" < "1.0" < "1.0a" < "1.0.1".
    chunks.append(((0,), 0))
    return tuple(chunks)


def latest_release_tag(tags: Iterable[str]) -> str | None:
    """Greatest release tag in version order, None if there is none."""
    candidates = [t for t in tags if is_release_tag(t)]
    if not candidates:
        return None
    # Ties ("1.0" vs "1.00") fall back to plain string order.
    return max(candidates, key=lambda t: (version_sort_key(t), t))
