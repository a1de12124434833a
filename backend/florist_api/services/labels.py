"""
Label priority lookups.

A LabelPriorityTable is an immutable snapshot of the label registry keyed by
(category, name). Lookups return Known(priority) or UNKNOWN; callers decide
how UNKNOWN sorts instead of guessing a numeric stand-in.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Literal, Protocol, Union


@dataclass(frozen=True)
class Known:
    priority: int


class _Unknown(Enum):
    UNKNOWN = "UNKNOWN"

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = _Unknown.UNKNOWN

LabelPriority = Union[Known, Literal[_Unknown.UNKNOWN]]


class LabelLike(Protocol):
    category: str
    name: str
    priority: int


def priority_sort_key(value: LabelPriority) -> tuple[int, int]:
    """Known priorities ascending, UNKNOWN after every known value."""
    if isinstance(value, Known):
        return (0, value.priority)
    return (1, 0)


@dataclass(frozen=True)
class LabelPriorityTable:
    """Read-only (category, name) -> priority map."""

    _priorities: Mapping[tuple[str, str], int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_priorities", MappingProxyType(dict(self._priorities)))

    @classmethod
    def from_labels(cls, labels: Iterable[LabelLike]) -> "LabelPriorityTable":
        return cls({(label.category, label.name): label.priority for label in labels})

    def resolve(self, category: str, name: str | None) -> LabelPriority:
        if name is None:
            return UNKNOWN
        priority = self._priorities.get((category, name))
        if priority is None:
            return UNKNOWN
        return Known(priority)

    def __len__(self) -> int:
        return len(self._priorities)
