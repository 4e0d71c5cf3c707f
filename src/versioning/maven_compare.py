"""Maven version ordering.

Follows the ordering rules of Maven's ComparableVersion closely enough for
picking the newest release out of a ``maven-metadata.xml`` listing:

* a version is split into segments, a new segment starting at each ``-``
  and at each digit/letter transition; items inside a segment are split
  on ``.``;
* zeros and release qualifiers at the end of a segment are insignificant
  (``1 == 1.0 == 1.0.0`` and ``1-alpha == 1.0-alpha``);
* qualifiers order ``alpha < beta < milestone < rc < snapshot < "" < sp``,
  with ``ga``/``final``/``release`` meaning the plain release and ``cr``
  aliasing ``rc``; unknown qualifiers sort after ``sp``, lexically, and
  every qualifier sorts before a positive number in the same position.

Each version is reduced to a key of plain tuples that are compared
lexicographically, missing items and segments padding as the release, so
the ordering is a total order.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

ItemKey = Tuple[int, int, str]
Segment = Tuple[ItemKey, ...]

_PRE_RELEASE_RANK = {
    "alpha": 0,
    "beta": 1,
    "milestone": 2,
    "rc": 3,
    "snapshot": 4,
}
_QUALIFIER_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
# Only honored when immediately followed by a number, e.g. "1.0a1"
_SHORT_ALIASES = {"a": "alpha", "b": "beta", "m": "milestone"}

_NULL: ItemKey = (1, 0, "")  # zero, empty and the plain release qualifier
_SERVICE_PACK: ItemKey = (2, 0, "")


def _split(version: str) -> List[Tuple[str, str]]:
    """Split into (separator, raw item) pairs; separator is "" on a digit/letter transition."""
    tokens: List[Tuple[str, str]] = []
    sep = ""
    current = ""
    for char in version.strip().lower():
        if char in ".-":
            tokens.append((sep, current))
            sep, current = char, ""
            continue
        if current and current[-1].isdigit() != char.isdigit():
            tokens.append((sep, current))
            sep, current = "", ""
        current += char
    tokens.append((sep, current))
    return tokens


def _item_key(raw: str, following: Optional[Tuple[str, str]]) -> ItemKey:
    if raw.isdigit():
        number = int(raw)
        return (4, number, "") if number else _NULL
    if raw in _SHORT_ALIASES and following is not None and following[0] == "" and following[1].isdigit():
        raw = _SHORT_ALIASES[raw]
    qualifier = _QUALIFIER_ALIASES.get(raw, raw)
    if qualifier == "":
        return _NULL
    if qualifier in _PRE_RELEASE_RANK:
        return 0, _PRE_RELEASE_RANK[qualifier], ""
    if qualifier == "sp":
        return _SERVICE_PACK
    return 3, 0, qualifier


def _trimmed(items: List[ItemKey]) -> Segment:
    while items and items[-1] == _NULL:
        items.pop()
    return tuple(items)


def version_key(version: str) -> Tuple[Segment, ...]:
    """Reduce ``version`` to its segments of item keys, insignificant items dropped."""
    tokens = _split(version)
    segments: List[Segment] = []
    current: List[ItemKey] = []
    for index, (sep, raw) in enumerate(tokens):
        if index and sep in ("-", ""):
            segments.append(_trimmed(current))
            current = []
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        current.append(_item_key(raw, following))
    segments.append(_trimmed(current))
    return tuple(segment for segment in segments if segment)


def _compare_segments(left: Segment, right: Segment) -> int:
    for index in range(max(len(left), len(right))):
        a = left[index] if index < len(left) else _NULL
        b = right[index] if index < len(right) else _NULL
        if a != b:
            return 1 if a > b else -1
    return 0


def compare(left: str, right: str) -> int:
    """Three-way compare two Maven version strings.

    Returns:
        1 when ``left`` is newer, 0 when equivalent, -1 when older.
    """
    left_key, right_key = version_key(left), version_key(right)
    for index in range(max(len(left_key), len(right_key))):
        a = left_key[index] if index < len(left_key) else ()
        b = right_key[index] if index < len(right_key) else ()
        result = _compare_segments(a, b)
        if result:
            return result
    return 0


def latest_version(
    versions: Sequence[str],
    comparator: Callable[[str, str], int] = compare,
) -> Optional[str]:
    """Left-fold ``versions`` keeping the newest; the first element seeds the fold.

    A candidate only replaces the running best when it compares strictly
    greater, so among equivalent versions the earliest one wins.
    """
    if not versions:
        return None
    best = versions[0]
    for candidate in versions[1:]:
        if comparator(candidate, best) == 1:
            best = candidate
    return best
