# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema loader for course and stage manifests."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema.exceptions import SchemaError

from ..exceptions import SchemaCompileError
from ..schema import COURSE_SCHEMA, STAGE_SCHEMA

logger = logging.getLogger(__name__)


# Compiled schema cache to avoid recompiling the bundled files on every run
_SCHEMA_CACHE: Dict[str, "CompiledSchema"] = {}


@dataclass(frozen=True)
class CompiledSchema:
    """A compiled, read-only validation ruleset for one document type."""
    name: str
    schema: Dict[str, Any]
    validator: Any = field(compare=False, repr=False)


def get_schema_path(name: str) -> Path:
    """Get the path to a bundled JSON Schema file.

    Args:
        name: Schema resource name (e.g. "course.schema.json")

    Returns:
        Path to the schema file
    """
    schema_dir = Path(__file__).parent.parent / "schema"
    return schema_dir / name


def load_schema_source(name: str) -> str:
    """Read the raw text of a bundled schema resource.

    Raises:
        SchemaCompileError: If the resource is missing or unreadable
    """
    schema_path = get_schema_path(name)
    try:
        return schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaCompileError(f"Cannot read schema resource {name}: {e}") from e


def compile_schema(source: str, name: str) -> CompiledSchema:
    """Compile a schema definition into a reusable validator.

    Each call builds its own validator instance, so a defect in one schema
    never leaks into another.

    Args:
        source: JSON text of the schema
        name: Resource name used in error messages

    Returns:
        CompiledSchema

    Raises:
        SchemaCompileError: If the source is not valid JSON or not a valid schema
    """
    try:
        schema = json.loads(source)
    except json.JSONDecodeError as e:
        raise SchemaCompileError(f"Invalid JSON in schema {name}: {e.msg} (line {e.lineno})") from e

    if not isinstance(schema, dict):
        raise SchemaCompileError(f"Schema {name} must be a JSON object")

    validator_cls = jsonschema.validators.validator_for(schema)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise SchemaCompileError(f"Invalid schema {name}: {e.message}") from e

    validator = validator_cls(schema, format_checker=validator_cls.FORMAT_CHECKER)
    return CompiledSchema(name=name, schema=schema, validator=validator)


def load_schema(name: str) -> CompiledSchema:
    """Load and compile a bundled schema, using the process-wide cache.

    Raises:
        SchemaCompileError: If the bundled resource is malformed
    """
    if name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[name]

    compiled = compile_schema(load_schema_source(name), name)
    _SCHEMA_CACHE[name] = compiled
    logger.debug(f"Compiled schema {name}")
    return compiled


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()


class SchemaStore:
    """Holds the compiled course and stage schemas for a validation run.

    A schema that fails to compile is left as ``None`` and its error is kept
    in ``errors`` so callers can report the defect separately from document
    findings.
    """

    def __init__(
        self,
        course: Optional[CompiledSchema],
        stage: Optional[CompiledSchema],
        errors: Optional[List[SchemaCompileError]] = None,
    ):
        self.course = course
        self.stage = stage
        self.errors: List[SchemaCompileError] = list(errors or [])

    @classmethod
    def load(cls) -> "SchemaStore":
        """Compile both bundled schemas independently."""
        compiled: Dict[str, Optional[CompiledSchema]] = {}
        errors: List[SchemaCompileError] = []
        for name in (COURSE_SCHEMA, STAGE_SCHEMA):
            try:
                compiled[name] = load_schema(name)
            except SchemaCompileError as e:
                logger.error(f"Schema bundle defect: {e}")
                compiled[name] = None
                errors.append(e)
        return cls(compiled[COURSE_SCHEMA], compiled[STAGE_SCHEMA], errors)

    @property
    def ok(self) -> bool:
        return not self.errors
