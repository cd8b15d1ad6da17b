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

"""README generation from course and stage manifests."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..exceptions import DocumentError, DocumentNotFoundError, GeneratorError
from ..file_io.template_renderer import TemplateRenderer
from ..models.document import DynamicValue
from ..models.json_schema_loader import SchemaStore
from ..models.parsing.yaml_parser import YamlParser, yaml_parser
from ..models.yaml_schema import canonicalize, ensure_valid
from ..validator.course_validator import COURSE_MANIFEST, STAGES_DIR, get_stage_order
from ..validator.stage_validator import STAGE_MANIFEST

logger = logging.getLogger(__name__)

README_TEMPLATE = "README.md.jinja2"

COURSE_FIELDS = ("name", "description", "language", "version")
STAGE_FIELDS = ("name", "description", "difficulty")


def _pick(document: DynamicValue, fields) -> Dict[str, Optional[str]]:
    return {key: document.get(key).as_str() for key in fields}


class ReadmeGenerator:
    """Renders the course README with one table row per stage in ``stage_order``."""

    def __init__(
        self,
        course_dir: Union[str, Path],
        schemas: Optional[SchemaStore] = None,
        parser: Optional[YamlParser] = None,
        renderer: Optional[TemplateRenderer] = None,
    ):
        self.course_dir = Path(course_dir)
        self.schemas = schemas if schemas is not None else SchemaStore.load()
        self.parser = parser or yaml_parser
        self.renderer = renderer or TemplateRenderer()

    def _load_course(self) -> Dict[str, Any]:
        course_path = self.course_dir / COURSE_MANIFEST
        try:
            document, source_map = self.parser.load_document_with_source(course_path)
        except DocumentNotFoundError as e:
            raise GeneratorError(f"{COURSE_MANIFEST} not found in {self.course_dir}") from e
        except DocumentError as e:
            raise GeneratorError(str(e)) from e

        # SchemaViolation propagates: a README built from a broken manifest is misleading
        ensure_valid(document, self.schemas.course, COURSE_MANIFEST, source_map)
        return document

    def _load_stage(self, slug: str) -> Dict[str, Optional[str]]:
        stage = {"slug": slug, **{key: None for key in STAGE_FIELDS}}
        stage_path = self.course_dir / STAGES_DIR / slug / STAGE_MANIFEST
        try:
            document = self.parser.load_document(stage_path)
        except DocumentError as e:
            logger.warning(f"Stage '{slug}' listed without metadata: {e}")
            return stage

        try:
            value = DynamicValue.wrap(canonicalize(document))
        except (TypeError, ValueError) as e:
            logger.warning(f"Stage '{slug}' listed without metadata: {STAGE_MANIFEST} is not JSON-representable: {e}")
            return stage

        stage.update(_pick(value, STAGE_FIELDS))
        return stage

    def build_context(self) -> Dict[str, Any]:
        document = self._load_course()
        course = _pick(DynamicValue.wrap(canonicalize(document)), COURSE_FIELDS)
        stages: List[Dict[str, Optional[str]]] = [
            self._load_stage(slug) for slug in get_stage_order(document)
        ]
        return {"course": course, "stages": stages}

    def generate_readme(self) -> str:
        """Render the README content.

        Raises:
            GeneratorError: If course.yml is missing or unreadable
            SchemaViolation: If course.yml does not conform to the course schema
        """
        return self.renderer.render_template(README_TEMPLATE, **self.build_context())

    def write_readme(self, output: Optional[Union[str, Path]] = None) -> Path:
        """Render and write the README, by default to ``<course-dir>/README.md``."""
        output_path = Path(output) if output else self.course_dir / "README.md"
        content = self.generate_readme()
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise GeneratorError(f"Cannot write {output_path}: {e}") from e
        logger.info(f"Generated {output_path}")
        return output_path
