"""Manifest models: schema store, YAML loading and schema checking."""

from .document import DynamicValue, ValueKind
from .json_schema_loader import CompiledSchema, SchemaStore, compile_schema, load_schema
from .yaml_schema import SchemaIssue, canonicalize, ensure_valid, validate_against_schema

__all__ = [
    "DynamicValue",
    "ValueKind",
    "CompiledSchema",
    "SchemaStore",
    "compile_schema",
    "load_schema",
    "SchemaIssue",
    "canonicalize",
    "ensure_valid",
    "validate_against_schema",
]
