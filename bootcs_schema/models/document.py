"""Tagged view over decoded manifest values.

Manifests are decoded into plain ``dict``/``list``/scalar trees. Code that
pulls specific fields out of them (``slug``, ``stage_order``) goes through
:class:`DynamicValue` so the expected kind is checked at the point of use.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class ValueKind(str, Enum):
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def _kind_of(raw: Any) -> ValueKind:
    if raw is None:
        return ValueKind.NULL
    # bool before number: bool is an int subclass
    if isinstance(raw, bool):
        return ValueKind.BOOLEAN
    if isinstance(raw, (int, float)):
        return ValueKind.NUMBER
    if isinstance(raw, str):
        return ValueKind.STRING
    if isinstance(raw, dict):
        return ValueKind.MAPPING
    if isinstance(raw, (list, tuple)):
        return ValueKind.SEQUENCE
    raise TypeError(f"Unsupported document value type: {type(raw).__name__}")


@dataclass(frozen=True)
class DynamicValue:
    kind: ValueKind
    raw: Any = None

    @classmethod
    def wrap(cls, raw: Any) -> DynamicValue:
        return cls(kind=_kind_of(raw), raw=raw)

    @classmethod
    def null(cls) -> DynamicValue:
        return cls(kind=ValueKind.NULL)

    def get(self, key: str) -> DynamicValue:
        """Member lookup; anything other than a mapping yields null."""
        if self.kind is not ValueKind.MAPPING or key not in self.raw:
            return DynamicValue.null()
        return DynamicValue.wrap(self.raw[key])

    def items(self) -> List[DynamicValue]:
        if self.kind is not ValueKind.SEQUENCE:
            return []
        return [DynamicValue.wrap(item) for item in self.raw]

    def as_str(self) -> Optional[str]:
        return self.raw if self.kind is ValueKind.STRING else None

    def as_str_list(self) -> List[str]:
        """Return the string members of a sequence, skipping anything else."""
        return [s for s in (item.as_str() for item in self.items()) if s is not None]
