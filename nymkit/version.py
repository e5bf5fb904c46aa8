"""Node software versions of the form ``major.minor.patch``."""

from __future__ import annotations

import re
from dataclasses import dataclass

_COMPONENT = re.compile(r"[0-9]+")
_MAX_COMPONENT = 0xFFFF


class InsufficientPartsError(ValueError):
    """Raised when a version string does not have three dot-separated parts."""

    def __init__(self) -> None:
        super().__init__("insufficient parts, must be x.y.z")


@dataclass(frozen=True, order=True)
class Version:
    """A version made of three 16-bit components, ordered numerically."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if not 0 <= value <= _MAX_COMPONENT:
                raise ValueError(f"version {name} {value} out of range")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _component(piece: str, text: str) -> int:
    if not _COMPONENT.fullmatch(piece):
        raise ValueError(f"invalid version component {piece!r} in {text!r}")
    value = int(piece)
    if value > _MAX_COMPONENT:
        raise ValueError(f"version component {piece!r} in {text!r} out of range")
    return value


def parse(text: str) -> Version:
    """Parse ``text`` as ``major.minor.patch``."""
    pieces = text.split(".", 2)
    if len(pieces) != 3:
        raise InsufficientPartsError()
    major, minor, patch = (_component(piece, text) for piece in pieces)
    return Version(major, minor, patch)