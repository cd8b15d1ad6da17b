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

"""Custom exceptions for the bootcs course schema tooling."""


class BootcsSchemaError(Exception):
    """Base exception for course schema tooling errors."""
    pass


class SchemaCompileError(BootcsSchemaError):
    """Raised when a bundled schema definition cannot be compiled.

    The schemas ship with the package, so this always indicates a packaging
    defect rather than a problem with the course being checked.
    """
    pass


class DocumentError(BootcsSchemaError):
    """Exception raised when a manifest cannot be read."""
    pass


class DocumentNotFoundError(DocumentError):
    """Exception raised when a manifest file does not exist."""
    pass


class DocumentParseError(DocumentError):
    """Exception raised when a manifest is not a valid YAML mapping."""
    pass


class SchemaViolation(BootcsSchemaError):
    """Exception raised when a document does not conform to its schema."""

    def __init__(self, message: str, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])


class GeneratorError(BootcsSchemaError):
    """Exception raised for README generation errors."""
    pass
