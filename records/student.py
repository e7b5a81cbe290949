"""
StudentDir Record Definition
============================
A student record: NIM (unique id), display name, IPK (ranking attribute)
and an append-only list of tags.

The IPK is the key of the ranking tree, so it is read-only once the
record exists. Changing a student's IPK means delete + reinsert.
"""

from dataclasses import dataclass, field

from config import IPK_DECIMALS


def _dedupe(tags) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return seen


@dataclass(frozen=True, eq=False)
class Student:
    """One directory record. Identity is object identity, not field equality."""
    nim: str
    name: str
    ipk: float
    tags: list[str] = field(default_factory=list)

    def __post_init__(self):
        # frozen: bypass __setattr__ to normalise once at construction
        object.__setattr__(self, "ipk", float(self.ipk))
        object.__setattr__(self, "tags", _dedupe(self.tags))

    def add_tag(self, tag: str) -> bool:
        """Append a tag. Returns False if it is already present."""
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def to_dict(self) -> dict:
        """Row view used by the renderer."""
        return {
            "nim": self.nim,
            "name": self.name,
            "ipk": self.ipk,
            "tags": ", ".join(self.tags),
        }

    def __str__(self) -> str:
        return f"NIM:{self.nim} | Name:{self.name} | IPK:{self.ipk:.{IPK_DECIMALS}f}"
