"""Validation and documentation tooling for bootcs course directories."""

__version__ = "0.3.0"

from .exceptions import BootcsSchemaError, SchemaCompileError, SchemaViolation
from .validator import CourseValidator, ValidationResult, validate_course

__all__ = [
    "__version__",
    "BootcsSchemaError",
    "SchemaCompileError",
    "SchemaViolation",
    "CourseValidator",
    "ValidationResult",
    "validate_course",
]
