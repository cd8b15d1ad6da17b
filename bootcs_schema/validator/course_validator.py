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

"""Course-level validation.

Checks ``course.yml``, runs the stage checks for every directory under
``stages/`` and finally cross-checks the declared ``stage_order`` against the
directories that exist.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import DocumentError
from ..models.document import DynamicValue
from ..models.json_schema_loader import SchemaStore
from ..models.parsing.yaml_parser import YamlParser, yaml_parser
from ..models.yaml_schema import canonicalize, format_issues, validate_against_schema
from .report import ValidationResult
from .stage_validator import StageValidator

logger = logging.getLogger(__name__)

COURSE_MANIFEST = "course.yml"
STAGES_DIR = "stages"


def get_stage_order(document: Dict[str, Any]) -> List[str]:
    """Extract ``stage_order`` from a course manifest.

    Missing or malformed values give an empty order; non-string entries are
    skipped.
    """
    try:
        value = DynamicValue.wrap(canonicalize(document))
    except (TypeError, ValueError):
        return []
    return value.get("stage_order").as_str_list()


def list_stage_dirs(stages_dir: Path) -> List[Path]:
    """Immediate subdirectories of ``stages/`` sorted by name."""
    return sorted((p for p in stages_dir.iterdir() if p.is_dir()), key=lambda p: p.name)


class CourseValidator:
    """Validator for a complete course directory."""

    def __init__(
        self,
        verbose: bool = False,
        schemas: Optional[SchemaStore] = None,
        parser: Optional[YamlParser] = None,
    ):
        self.verbose = verbose
        self.schemas = schemas if schemas is not None else SchemaStore.load()
        self.parser = parser or yaml_parser
        self.stage_validator = StageValidator(self.schemas.stage, verbose=verbose, parser=self.parser)

    def validate_course(self, directory: Union[str, Path]) -> ValidationResult:
        """Validate a course directory.

        Args:
            directory: Directory holding ``course.yml`` and ``stages/``

        Returns:
            ValidationResult for the whole run
        """
        course_dir = Path(directory)
        result = ValidationResult(course_dir)
        course_path = course_dir / COURSE_MANIFEST
        stages_dir = course_dir / STAGES_DIR

        try:
            if not course_path.exists():
                result.add_error(f"{COURSE_MANIFEST} not found")
        except OSError as e:
            result.add_error(f"{COURSE_MANIFEST}: cannot access: {e.strerror or e}")
        try:
            if not stages_dir.is_dir():
                result.add_error(f"{STAGES_DIR}/ directory not found")
        except OSError as e:
            result.add_error(f"{STAGES_DIR}/: cannot access: {e.strerror or e}")
        if not result.valid:
            logger.debug(f"Fatal precondition failed for {course_dir}")
            return result

        stage_order = self._check_course_manifest(course_path, result)

        actual_stages: List[str] = []
        try:
            stage_dirs = list_stage_dirs(stages_dir)
        except OSError as e:
            result.add_error(f"{STAGES_DIR}/: cannot list directory: {e.strerror or e}")
            stage_dirs = []

        for stage_dir in stage_dirs:
            logger.debug(f"Validating stage {stage_dir.name}")
            actual_stages.append(stage_dir.name)
            self.stage_validator.validate(stage_dir, stage_dir.name, result)
            result.stage_count += 1

        self._check_stage_order(stage_order, actual_stages, result)
        return result

    def _check_course_manifest(self, course_path: Path, result: ValidationResult) -> List[str]:
        try:
            document, source_map = self.parser.load_document_with_source(course_path)
        except DocumentError as e:
            result.add_error(f"{COURSE_MANIFEST}: {e}")
            return []

        issues = validate_against_schema(document, self.schemas.course)
        if issues:
            result.add_error(f"{COURSE_MANIFEST} schema: {format_issues(issues, source_map)}")
        else:
            result.add_info(f"{COURSE_MANIFEST}: schema valid")

        return get_stage_order(document)

    @staticmethod
    def _check_stage_order(stage_order: List[str], actual_stages: List[str], result: ValidationResult):
        existing = set(actual_stages)
        reported = set()
        for slug in stage_order:
            if slug not in existing and slug not in reported:
                reported.add(slug)
                result.add_error(f"stage_order: '{slug}' declared but directory not found")

        declared = set(stage_order)
        for slug in actual_stages:
            if slug not in declared:
                result.add_warning(f"stages/{slug}: directory exists but not in stage_order")


def validate_course(directory: Union[str, Path], verbose: bool = False) -> ValidationResult:
    """Validate a course directory with freshly loaded schemas."""
    return CourseValidator(verbose=verbose).validate_course(directory)
