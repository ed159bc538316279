"""
Textual key paths used as row keys in the translation table.

A key path addresses one leaf of a nested JSON document:

    home.title            -> {"home": {"title": ...}}
    home.items[2]         -> {"home": {"items": [_, _, ...]}}
    grid[0][1]            -> {"grid": [[_, ...]]}
    [0].label             -> [{"label": ...}]

Field names are not escaped. A field literally named "a.b" or "x[0]" produces
the same text as a different structure, and parsing picks the structural
reading.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_SEGMENT_RE = re.compile(r"^(?P<name>.*?)(?P<indices>(?:\[\d+\])+)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")

# A walk step is either an object field name or an array index.
Step = Union[str, int]

# Largest index a key created from the editor may use. Gaps up to the index
# are filled with placeholders, so the array grows to index + 1 items.
MAX_ARRAY_INDEX = 10_000


@dataclass(frozen=True)
class Segment:
    """One dot-separated part of a key path: a field name plus array indices."""

    name: str
    indices: tuple[int, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Segment:
        m = _SEGMENT_RE.match(text)
        if not m:
            return cls(text)
        indices = tuple(int(i) for i in _INDEX_RE.findall(m.group("indices")))
        return cls(m.group("name"), indices)

    def __str__(self) -> str:
        return self.name + "".join(f"[{i}]" for i in self.indices)

    def steps(self) -> list[Step]:
        # "[0]" (no name) addresses an element of the enclosing array directly.
        head: list[Step] = [self.name] if self.name or not self.indices else []
        return head + list(self.indices)


@dataclass(frozen=True)
class KeyPath:
    segments: tuple[Segment, ...]

    @classmethod
    def parse(cls, text: str) -> KeyPath:
        return cls(tuple(Segment.parse(part) for part in text.split(".")))

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)

    def steps(self) -> list[Step]:
        """Flatten segments into the field/index walk used to build documents."""
        out: list[Step] = []
        for segment in self.segments:
            out.extend(segment.steps())
        return out

    def max_index(self) -> int:
        """Largest array index in the path, or -1 when there is none."""
        return max((i for s in self.segments for i in s.indices), default=-1)


def join_field(prefix: str, name: str) -> str:
    """Child path for an object field."""
    return f"{prefix}.{name}" if prefix else name


def join_index(prefix: str, index: int) -> str:
    """Child path for an array element."""
    return f"{prefix}[{index}]"
