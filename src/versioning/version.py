"""Artifact version parsing and ordering.

Versions are split into a canonical item list so that ``1.0``, ``1`` and
``1.0.0`` compare equal, numeric segments compare numerically and well-known
qualifiers compare by release maturity::

    alpha < beta < milestone < rc < snapshot < (release) < sp

Anything else is a "custom" qualifier that sorts after every known one,
lexically among themselves.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Union

_QUALIFIERS = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")
_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
_RELEASE_INDEX = str(_QUALIFIERS.index(""))
_SHORT_QUALIFIERS = {"a": "alpha", "b": "beta", "m": "milestone"}


def _comparable_qualifier(qualifier: str) -> str:
    try:
        return str(_QUALIFIERS.index(qualifier))
    except ValueError:
        return f"{len(_QUALIFIERS)}-{qualifier}"


class _IntItem:
    def __init__(self, value: int) -> None:
        self.value = value

    def is_null(self) -> bool:
        return self.value == 0

    def compare(self, other: _Item | None) -> int:
        if other is None:
            return 0 if self.value == 0 else 1
        if isinstance(other, _IntItem):
            return (self.value > other.value) - (self.value < other.value)
        # ints sort after qualifiers and sub-lists
        return 1

    def __repr__(self) -> str:
        return str(self.value)


class _StringItem:
    def __init__(self, value: str, followed_by_digit: bool) -> None:
        if followed_by_digit and len(value) == 1:
            value = _SHORT_QUALIFIERS.get(value, value)
        self.value = _ALIASES.get(value, value)

    def is_null(self) -> bool:
        return self.value == ""

    def compare(self, other: _Item | None) -> int:
        mine = _comparable_qualifier(self.value)
        if other is None:
            return (mine > _RELEASE_INDEX) - (mine < _RELEASE_INDEX)
        if isinstance(other, _StringItem):
            theirs = _comparable_qualifier(other.value)
            return (mine > theirs) - (mine < theirs)
        return -1

    def __repr__(self) -> str:
        return self.value


class _ListItem(list):
    def is_null(self) -> bool:
        return len(self) == 0

    def normalize(self) -> None:
        for index in range(len(self) - 1, -1, -1):
            item = self[index]
            if item.is_null():
                del self[index]
            elif not isinstance(item, _ListItem):
                break

    def compare(self, other: _Item | None) -> int:
        if other is None:
            if not self:
                return 0
            return self[0].compare(None)
        if isinstance(other, _IntItem):
            return -1
        if isinstance(other, _StringItem):
            return 1

        for index in range(max(len(self), len(other))):
            left = self[index] if index < len(self) else None
            right = other[index] if index < len(other) else None
            if left is None:
                result = 0 if right is None else -right.compare(None)
            else:
                result = left.compare(right)
            if result != 0:
                return result
        return 0


_Item = Union[_IntItem, _StringItem, _ListItem]


def _parse_item(is_digit: bool, text: str) -> _Item:
    if is_digit:
        return _IntItem(int(text))
    return _StringItem(text, False)


def _parse_items(version: str) -> _ListItem:
    version = version.lower()
    items = _ListItem()
    current = items
    stack = [items]
    is_digit = False
    start = 0

    for index, char in enumerate(version):
        if char in ".-":
            if index == start:
                current.append(_IntItem(0))
            else:
                current.append(_parse_item(is_digit, version[start:index]))
            start = index + 1
            if char == "-":
                sub = _ListItem()
                current.append(sub)
                current = sub
                stack.append(sub)
        elif char.isdigit():
            if not is_digit and index > start:
                current.append(_StringItem(version[start:index], True))
                start = index
                sub = _ListItem()
                current.append(sub)
                current = sub
                stack.append(sub)
            is_digit = True
        else:
            if is_digit and index > start:
                current.append(_parse_item(True, version[start:index]))
                start = index
                sub = _ListItem()
                current.append(sub)
                current = sub
                stack.append(sub)
            is_digit = False

    if len(version) > start:
        current.append(_parse_item(is_digit, version[start:]))

    while stack:
        stack.pop().normalize()
    return items


def _strict_int(token: str) -> int | None:
    # leading zeros make a segment non-numeric
    if not token.isdigit() or (len(token) > 1 and token.startswith("0")):
        return None
    return int(token)


@total_ordering
class ArtifactVersion:
    """A parsed artifact version.

    ``major``, ``minor`` and ``incremental`` default to 0 when the version
    does not follow the ``major.minor.incremental-qualifier`` layout; in that
    case the whole string becomes the qualifier.
    """

    def __init__(self, version: str) -> None:
        self.raw = version
        self.major = 0
        self.minor = 0
        self.incremental = 0
        self.build_number = 0
        self.qualifier: str | None = None
        self._items = _parse_items(version)
        self._parse_layout(version)

    def _parse_layout(self, version: str) -> None:
        head, sep, tail = version.partition("-")
        if sep:
            build = _strict_int(tail) if len(tail) == 1 or not tail.startswith("0") else None
            if build is None:
                self.qualifier = tail
            else:
                self.build_number = build

        if "." not in head and not head.startswith("0"):
            major = _strict_int(head)
            if major is None:
                self._fallback(version)
            else:
                self.major = major
            return

        tokens = head.split(".")
        numbers: list[int] = []
        for token in tokens[:3]:
            number = _strict_int(token)
            if number is None:
                self._fallback(version)
                return
            numbers.append(number)
        if len(tokens) > 3:
            # a fourth segment is only tolerated as a non-numeric qualifier
            extra = ".".join(tokens[3:])
            if extra.isdigit() or not extra:
                self._fallback(version)
                return
            self.qualifier = extra
        if ".." in head or head.startswith(".") or head.endswith("."):
            self._fallback(version)
            return

        numbers += [0] * (3 - len(numbers))
        self.major, self.minor, self.incremental = numbers

    def _fallback(self, version: str) -> None:
        self.major = self.minor = self.incremental = self.build_number = 0
        self.qualifier = version

    def compare(self, other: ArtifactVersion) -> int:
        return self._items.compare(other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: ArtifactVersion) -> bool:
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(repr(self._items))

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"ArtifactVersion({self.raw!r})"


__all__ = ["ArtifactVersion"]
