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

"""Structure linter for schema definition files.

A schema definition wraps a JSON-Schema body in orchestration metadata::

    {"name": "sum_input", "version": 1, "type": "JSON",
     "data": {"$schema": "...", "type": "object", "properties": {...}}}
"""

from pathlib import Path
from typing import Any, Optional

from ..exceptions import StructuralError
from ..file_io.source_location import SourceMap, format_source, lookup_source
from ..models.documents import SCHEMA_TYPE_JSON, SchemaBody, SchemaDefinition, WorkflowDefinition
from .report import SetResult


class SchemaStructureValidator:
    """Checks schema metadata and the shape of the embedded JSON-Schema body."""

    REQUIRED_FIELDS = ('name', 'version', 'type', 'data')
    REQUIRED_BODY_FIELDS = ('$schema', 'type', 'properties')

    def validate(
        self,
        raw: Any,
        file_path: Path,
        result: SetResult,
        workflow: Optional[WorkflowDefinition] = None,
        source_map: Optional[SourceMap] = None,
    ) -> SchemaDefinition:
        """Validate a parsed schema document.

        Args:
            raw: Parsed JSON content of the schema file
            file_path: Path of the schema file, used in messages
            result: SetResult to add warnings to
            workflow: Owning workflow, enables the schema name check
            source_map: Optional JSON pointer to line/column mapping

        Returns:
            The typed schema definition

        Raises:
            StructuralError: If required metadata or body fields are missing or invalid
        """
        if not isinstance(raw, dict):
            raise StructuralError(
                f"Schema {file_path} must be a JSON object, got {type(raw).__name__}"
            )

        missing_fields = [f for f in self.REQUIRED_FIELDS if f not in raw]
        if missing_fields:
            raise StructuralError(
                f"Schema {file_path} is missing required fields: {', '.join(missing_fields)}"
            )

        if raw['type'] != SCHEMA_TYPE_JSON:
            loc = lookup_source(source_map, "/type", file_path)
            raise StructuralError(
                f"Schema {file_path} has invalid type. Expected '{SCHEMA_TYPE_JSON}', "
                f"got '{raw['type']}'{format_source(loc)}"
            )

        body = self._validate_body(raw['data'], file_path, source_map)

        if workflow is not None and raw['name'] != workflow.expected_schema_name:
            loc = lookup_source(source_map, "/name", file_path)
            result.add_warning(
                f"Schema {file_path} name '{raw['name']}' does not match expected "
                f"'{workflow.expected_schema_name}' for workflow '{workflow.name}'{format_source(loc)}",
                location=loc,
            )

        return SchemaDefinition(
            name=raw['name'],
            version=raw['version'],
            type=raw['type'],
            data=body,
            file_path=file_path,
            source_map=source_map or {},
        )

    def _validate_body(self, data: Any, file_path: Path, source_map: Optional[SourceMap]) -> SchemaBody:
        loc = lookup_source(source_map, "/data", file_path)
        if not isinstance(data, dict):
            raise StructuralError(
                f"Schema {file_path} has invalid JSON Schema structure in data field: "
                f"expected an object, got {type(data).__name__}{format_source(loc)}"
            )

        missing = [f for f in self.REQUIRED_BODY_FIELDS if data.get(f) in (None, "")]
        if missing:
            raise StructuralError(
                f"Schema {file_path} has invalid JSON Schema structure in data field: "
                f"missing {', '.join(missing)}{format_source(loc)}"
            )

        if not isinstance(data["$schema"], str):
            raise StructuralError(
                f"Schema {file_path} field 'data.$schema' must be a dialect URI string{format_source(loc)}"
            )

        properties = data['properties']
        if not isinstance(properties, dict):
            props_loc = lookup_source(source_map, "/data/properties", file_path)
            raise StructuralError(
                f"Schema {file_path} field 'data.properties' must be an object{format_source(props_loc)}"
            )

        required = data.get('required', [])
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            req_loc = lookup_source(source_map, "/data/required", file_path)
            raise StructuralError(
                f"Schema {file_path} field 'data.required' must be a list of property "
                f"names{format_source(req_loc)}"
            )

        return SchemaBody(
            schema_dialect=data['$schema'],
            type=data['type'],
            properties=properties,
            required=list(required),
            raw=data,
        )
