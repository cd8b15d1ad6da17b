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

"""YAML manifest parser with optional caching and source locations."""

import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Set, Union, Optional, Tuple

from ...config import validator_config
from ...exceptions import DocumentError, DocumentNotFoundError, DocumentParseError
from ...file_io.source_location import json_pointer_escape

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """Loads manifests into generic mappings.

    Shape is not enforced here beyond "the top level is a mapping"; unknown
    fields are kept and left for the schema checker.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, Tuple[Dict[str, Any], SourceMap]] = {}

    @staticmethod
    def _build_source_map(content: str) -> SourceMap:
        """Map JSON-pointer paths to 1-based line/column using ``yaml.compose``.

        An alias can point back into its own anchor, so every node is visited
        once; later aliases of a node get no location.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            return source_map

        visited: Set[int] = set()

        def _walk(node, path: str) -> None:
            if id(node) in visited:
                return
            visited.add(id(node))

            mark = getattr(node, "start_mark", None)
            if mark is not None:
                source_map[path] = {"line": mark.line + 1, "column": mark.column + 1}

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is not None:
                        _walk(value_node, f"{path}/{json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        if root is None:
            return source_map
        try:
            _walk(root, "")
        except RecursionError:
            logger.debug("Source map skipped: document nesting too deep")
            return {}
        return source_map

    @staticmethod
    def _decode(content: str, origin: str) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DocumentParseError(f"Failed to parse YAML {origin}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Failed to parse YAML {origin}: top level must be a mapping, got {type(data).__name__}"
            )
        return data

    def load_document_with_source(self, file_path: Union[str, Path]) -> Tuple[Dict[str, Any], SourceMap]:
        """Load a YAML manifest and return (document, source_map).

        Raises:
            DocumentNotFoundError: If the file does not exist
            DocumentParseError: If the content is not a YAML mapping
            DocumentError: If the file cannot be read
        """
        path = Path(file_path)

        try:
            exists, is_file = path.exists(), path.is_file()
        except OSError as exc:
            raise DocumentError(f"Cannot access {path}: {exc}") from exc
        if not exists:
            raise DocumentNotFoundError(f"File not found: {path}")
        if not is_file:
            raise DocumentNotFoundError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading manifest from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading manifest: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentError(f"Failed to read {path}: {exc}") from exc

        document = self._decode(content, str(path))
        source_map = self._build_source_map(content)

        if self.cache_enabled:
            self._cache[path] = (document, source_map)
        return document, source_map

    def load_document(self, file_path: Union[str, Path]) -> Dict[str, Any]:
        """Load a YAML manifest as a generic mapping."""
        document, _ = self.load_document_with_source(file_path)
        return document

    def clear_cache(self):
        """Clear the manifest cache."""
        self._cache.clear()
        logger.debug("Manifest cache cleared")


# Global parser instance
yaml_parser = YamlParser()
