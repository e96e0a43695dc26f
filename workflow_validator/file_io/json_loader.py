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

"""JSON document loader with source locations and optional caching."""

import json
import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..config import validator_config
from ..exceptions import ParseError, RootNotFoundError
from .source_location import SourceMap, join_pointer

logger = logging.getLogger(__name__)

# Directories never descended into while listing documents
SKIPPED_DIRECTORIES = {"node_modules", "__pycache__"}


def _reject_constant(name: str):
    # NaN and Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Invalid JSON value {name}")


@dataclass
class JsonDocument:
    """A parsed JSON file together with its JSON-pointer source map."""
    path: Path
    data: Any
    source_map: SourceMap = field(default_factory=dict)


class JsonLoader:
    """Filesystem layer for document discovery and JSON reading."""

    def __init__(self, cache_enabled: bool = None):
        """Initialize JSON loader.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, JsonDocument] = {}
        self._lock = threading.Lock()

    @staticmethod
    def build_source_map(content: str) -> SourceMap:
        """Build a mapping from JSON pointers to 1-based line/column.

        JSON is a subset of YAML, so PyYAML's node tree (yaml.compose) gives us
        positions without a second JSON parser. Content YAML cannot compose
        (e.g. tab indentation) yields an empty map.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, join_pointer(path, key))
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, join_pointer(path, idx))

        _walk(root, "")
        return source_map

    def read_json(self, file_path: Union[str, Path]) -> JsonDocument:
        """Read and parse a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            JsonDocument holding the parsed value and its source map

        Raises:
            ParseError: If the file cannot be read or is not valid JSON
        """
        path = Path(file_path)

        if self.cache_enabled:
            with self._lock:
                cached = self._cache.get(path)
            if cached is not None:
                logger.debug(f"Loading document from cache: {path}")
                return cached

        try:
            logger.debug(f"Loading document: {path}")
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"Failed to read file {path}: {exc}") from exc

        try:
            data = json.loads(content, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise ParseError(
                f"Error parsing file {path}: {exc.msg} (line {exc.lineno}, column {exc.colno})"
            ) from exc
        except ValueError as exc:
            raise ParseError(f"Error parsing file {path}: {exc}") from exc

        document = JsonDocument(path=path, data=data, source_map=self.build_source_map(content))

        if self.cache_enabled:
            with self._lock:
                self._cache[path] = document

        return document

    @staticmethod
    def exists(file_path: Union[str, Path]) -> bool:
        return Path(file_path).is_file()

    @staticmethod
    def list_json_files(root: Union[str, Path]) -> List[Path]:
        """Recursively list ``*.json`` files under ``root`` in sorted order.

        Hidden directories and dependency folders are skipped.

        Raises:
            RootNotFoundError: If ``root`` is not an existing directory
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise RootNotFoundError(f"Directory not found: {root_path}")

        json_files: List[Path] = []
        for dir_path, dir_names, file_names in os.walk(root_path):
            dir_names[:] = [
                d for d in dir_names
                if not d.startswith(".") and d not in SKIPPED_DIRECTORIES
            ]
            for file_name in file_names:
                if file_name.endswith(".json"):
                    json_files.append(Path(dir_path) / file_name)

        return sorted(json_files)

    def clear_cache(self):
        """Clear the document cache."""
        with self._lock:
            self._cache.clear()
        logger.debug("Document cache cleared")


# Global loader instance
json_loader = JsonLoader()
