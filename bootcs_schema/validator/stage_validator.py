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

"""Per-stage directory checks.

Each stage directory must hold ``stage.yml``, ``README.md`` and
``LEARNING.md``. The manifest is schema-checked and its ``slug`` must match
the directory name; the two documents are checked against recommended
line-count ranges.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

from ..exceptions import DocumentError
from ..models.document import DynamicValue
from ..models.json_schema_loader import CompiledSchema
from ..models.parsing.yaml_parser import YamlParser, yaml_parser
from ..models.yaml_schema import canonicalize, format_issues, validate_against_schema
from .report import ValidationResult

logger = logging.getLogger(__name__)

STAGE_MANIFEST = "stage.yml"
README_FILE = "README.md"
LEARNING_FILE = "LEARNING.md"

REQUIRED_FILES = (STAGE_MANIFEST, README_FILE, LEARNING_FILE)

# Inclusive recommended line-count ranges
LEARNING_LINES = (60, 100)
README_LINES = (30, 60)


def count_lines(path: Path) -> int:
    """Count ``\\n``-delimited segments, so a trailing newline adds one."""
    return path.read_bytes().count(b"\n") + 1


class StageValidator:
    """Validator for a single stage directory."""

    def __init__(
        self,
        stage_schema: Optional[CompiledSchema],
        verbose: bool = False,
        parser: Optional[YamlParser] = None,
    ):
        self.stage_schema = stage_schema
        self.verbose = verbose
        self.parser = parser or yaml_parser

    def validate(self, stage_dir: Path, stage_name: str, result: ValidationResult):
        """Run all checks for one stage and record findings.

        Args:
            stage_dir: Path to the stage directory
            stage_name: Directory name, i.e. the slug the manifest must declare
            result: ValidationResult to add errors/warnings to
        """
        prefix = f"stages/{stage_name}"

        present = {}
        for file_name in REQUIRED_FILES:
            try:
                present[file_name] = (stage_dir / file_name).exists()
            except OSError as e:
                logger.warning(f"Cannot access {stage_dir / file_name}: {e}")
                result.add_error(f"{prefix}/{file_name}: cannot access: {e.strerror or e}")
                present[file_name] = False
                continue
            if not present[file_name]:
                result.add_error(f"{prefix}/{file_name}: missing")

        if present[STAGE_MANIFEST]:
            self._check_manifest(stage_dir / STAGE_MANIFEST, stage_name, prefix, result)
        if present[LEARNING_FILE]:
            self._check_length(stage_dir / LEARNING_FILE, LEARNING_LINES, prefix, result)
        if present[README_FILE]:
            self._check_length(stage_dir / README_FILE, README_LINES, prefix, result)

    def _check_manifest(self, path: Path, stage_name: str, prefix: str, result: ValidationResult):
        try:
            document, source_map = self.parser.load_document_with_source(path)
        except DocumentError as e:
            result.add_error(f"{prefix}/{STAGE_MANIFEST}: {e}")
            return

        issues = validate_against_schema(document, self.stage_schema)
        if issues:
            result.add_error(f"{prefix}/{STAGE_MANIFEST} schema: {format_issues(issues, source_map)}")
            return

        slug = DynamicValue.wrap(canonicalize(document)).get("slug").as_str()
        if slug is not None and slug != stage_name:
            result.add_error(
                f"{prefix}/{STAGE_MANIFEST}: slug '{slug}' does not match directory name '{stage_name}'"
            )
            return
        result.add_info(f"{prefix}/{STAGE_MANIFEST}: valid")

    def _check_length(
        self,
        path: Path,
        bounds: Tuple[int, int],
        prefix: str,
        result: ValidationResult,
    ):
        try:
            lines = count_lines(path)
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            result.add_error(f"{prefix}/{path.name}: cannot read file: {e.strerror or e}")
            return

        low, high = bounds
        if lines < low or lines > high:
            result.add_warning(f"{prefix}/{path.name}: {lines} lines (recommended: {low}-{high})")
        elif self.verbose:
            result.add_info(f"{prefix}/{path.name}: {lines} lines")
