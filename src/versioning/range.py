"""Version ranges: bracketed intervals or a single recommended version."""

from __future__ import annotations

from dataclasses import dataclass

from errors import VersionParseError
from versioning.version import ArtifactVersion


@dataclass(frozen=True)
class Restriction:
    """One interval; a missing bound is unbounded on that side."""

    lower: ArtifactVersion | None = None
    lower_inclusive: bool = False
    upper: ArtifactVersion | None = None
    upper_inclusive: bool = False

    def contains(self, version: ArtifactVersion) -> bool:
        if self.lower is not None:
            comparison = self.lower.compare(version)
            if comparison > 0 or (comparison == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            comparison = self.upper.compare(version)
            if comparison < 0 or (comparison == 0 and not self.upper_inclusive):
                return False
        return True

    def __str__(self) -> str:
        left = "[" if self.lower_inclusive else "("
        right = "]" if self.upper_inclusive else ")"
        if (
            self.lower is not None
            and self.lower == self.upper
            and self.lower_inclusive
            and self.upper_inclusive
        ):
            return f"[{self.lower}]"
        lower = str(self.lower) if self.lower is not None else ""
        upper = str(self.upper) if self.upper is not None else ""
        return f"{left}{lower},{upper}{right}"


EVERYTHING = Restriction()


@dataclass(frozen=True)
class VersionRange:
    """A parsed version specification.

    ``recommended`` is set only for a bare version such as ``1.0``; bracketed
    specifications carry their intervals in ``restrictions`` instead.
    """

    spec: str
    restrictions: tuple[Restriction, ...]
    recommended: ArtifactVersion | None = None

    @classmethod
    def from_spec(cls, spec: str) -> VersionRange:
        """Parse a version specification.

        Examples of accepted input: ``1.0``, ``[1.0]``, ``[1,2)``,
        ``(,1.0]``, ``[1,2),[3,)``.

        Raises:
            VersionParseError: If the specification is malformed.
        """
        process = spec.strip()
        restrictions: list[Restriction] = []
        previous_upper: ArtifactVersion | None = None

        while process.startswith(("[", "(")):
            close = _find_close(process)
            if close < 0:
                msg = f"Unbounded range: {spec}"
                raise VersionParseError(msg)

            restriction = _parse_restriction(process[: close + 1], spec)
            if (
                previous_upper is not None
                and restriction.lower is not None
                and restriction.lower.compare(previous_upper) < 0
            ):
                msg = f"Ranges overlap: {spec}"
                raise VersionParseError(msg)
            restrictions.append(restriction)
            previous_upper = restriction.upper

            process = process[close + 1 :].strip()
            if process.startswith(","):
                process = process[1:].strip()

        if process:
            if restrictions:
                msg = f"Only fully-qualified sets allowed in multiple set scenario: {spec}"
                raise VersionParseError(msg)
            return cls(
                spec=spec,
                restrictions=(EVERYTHING,),
                recommended=ArtifactVersion(process),
            )

        if not restrictions:
            msg = f"Empty version specification: {spec!r}"
            raise VersionParseError(msg)
        return cls(spec=spec, restrictions=tuple(restrictions))

    def contains(self, version: ArtifactVersion) -> bool:
        return any(r.contains(version) for r in self.restrictions)

    def __str__(self) -> str:
        if self.recommended is not None:
            return str(self.recommended)
        return ",".join(str(r) for r in self.restrictions)


def _find_close(text: str) -> int:
    closes = [i for i in (text.find(")"), text.find("]")) if i >= 0]
    return min(closes) if closes else -1


def _parse_restriction(text: str, spec: str) -> Restriction:
    lower_inclusive = text.startswith("[")
    upper_inclusive = text.endswith("]")
    body = text[1:-1].strip()

    if "," not in body:
        if not lower_inclusive or not upper_inclusive:
            msg = f"Single version must be surrounded by []: {spec}"
            raise VersionParseError(msg)
        if not body:
            msg = f"Empty version in range: {spec}"
            raise VersionParseError(msg)
        version = ArtifactVersion(body)
        return Restriction(version, True, version, True)

    lower_text, _, upper_text = (part.strip() for part in body.partition(","))
    if lower_text == upper_text:
        msg = f"Range cannot have identical boundaries: {spec}"
        raise VersionParseError(msg)
    if "," in upper_text:
        msg = f"Range must have exactly two boundaries: {spec}"
        raise VersionParseError(msg)

    lower = ArtifactVersion(lower_text) if lower_text else None
    upper = ArtifactVersion(upper_text) if upper_text else None
    if lower is not None and upper is not None and upper.compare(lower) < 0:
        msg = f"Range defies version ordering: {spec}"
        raise VersionParseError(msg)
    return Restriction(lower, lower_inclusive, upper, upper_inclusive)


def is_range(spec: str) -> bool:
    return spec.strip().startswith(("[", "("))


__all__ = ["EVERYTHING", "Restriction", "VersionRange", "is_range"]
