from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..exceptions import SchemaViolation
from ..file_io.source_location import json_pointer, lookup_source
from .json_schema_loader import CompiledSchema


JsonPointer = str


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    yaml_path: Optional[JsonPointer] = None


def canonicalize(document: Any) -> Any:
    """Round-trip a decoded YAML document through JSON.

    YAML scalars such as dates and timestamps have no JSON counterpart; after
    this they are plain strings, which is what the schemas describe.
    """
    return json.loads(json.dumps(document, default=str))


def validate_against_schema(document: Any, schema: Optional[CompiledSchema]) -> List[SchemaIssue]:
    """Validate a decoded document against a compiled schema.

    Args:
        document: Decoded YAML document
        schema: Compiled schema, or None when the bundled schema failed to compile

    Returns:
        List of SchemaIssue objects sorted by path, empty when the document conforms
    """
    if schema is None:
        return [SchemaIssue(message="schema not loaded", yaml_path="")]

    if not isinstance(document, dict):
        return [SchemaIssue(message="Root must be a mapping/object", yaml_path="")]

    try:
        instance = canonicalize(document)
    except (TypeError, ValueError) as e:
        return [SchemaIssue(message=f"Document cannot be represented as JSON: {e}", yaml_path="")]

    issues = [
        SchemaIssue(message=error.message, yaml_path=json_pointer(error.absolute_path))
        for error in schema.validator.iter_errors(instance)
    ]
    return sorted(issues, key=lambda issue: (issue.yaml_path or "", issue.message))


def format_issues(issues: List[SchemaIssue], source_map: Optional[Dict[str, Dict[str, int]]] = None) -> str:
    """Render issues as a single line, with YAML line numbers when known."""
    parts = []
    for issue in issues:
        loc = lookup_source(source_map, issue.yaml_path)
        text = f"{issue.yaml_path}: {issue.message}" if issue.yaml_path else issue.message
        if loc.line is not None:
            text += f" (line {loc.line})"
        parts.append(text)
    return "; ".join(parts)


def ensure_valid(
    document: Any,
    schema: Optional[CompiledSchema],
    name: str,
    source_map: Optional[Dict[str, Dict[str, int]]] = None,
) -> None:
    """Raise SchemaViolation if the document does not conform."""
    issues = validate_against_schema(document, schema)
    if issues:
        raise SchemaViolation(f"{name} schema: {format_issues(issues, source_map)}", issues)
