from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def json_pointer(tokens: Iterable) -> str:
    """Build a JSON pointer such as ``/stage_order/1``; no tokens gives ``""``."""
    return "".join(f"/{json_pointer_escape(str(token))}" for token in tokens)


@dataclass(frozen=True)
class SourceLocation:
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], yaml_path: Optional[str]) -> SourceLocation:
    """Find where a JSON-pointer path sits in the YAML text.

    The root pointer ("") is never resolved: pointing at line 1 for a
    document-level issue carries no information.
    """
    if not source_map or not yaml_path:
        return SourceLocation(yaml_path=yaml_path)

    entry = source_map.get(yaml_path)
    if not entry:
        return SourceLocation(yaml_path=yaml_path)

    return SourceLocation(
        yaml_path=yaml_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )
