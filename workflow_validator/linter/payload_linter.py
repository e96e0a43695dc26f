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

"""Sample payload validation against a schema's JSON-Schema body."""

from pathlib import Path
from typing import Any

from ..exceptions import CompileError, PayloadValidationError
from ..models.documents import SchemaBody
from ..models.schema_engine import JsonSchemaEngine, SchemaInstanceValidator
from .report import SetResult


class PayloadValidator:
    """Validates payload instances through a SchemaInstanceValidator."""

    def __init__(self, engine: SchemaInstanceValidator = None):
        self.engine = engine or JsonSchemaEngine()

    def check(self, payload: Any, schema_body: SchemaBody, payload_path: Path) -> None:
        """Validate ``payload`` and raise on the first failing step.

        Raises:
            CompileError: If the schema body cannot be compiled
            PayloadValidationError: If the payload violates the schema
        """
        compiled = self.engine.compile(schema_body.raw)
        violations = self.engine.execute(compiled, payload)
        if violations:
            raise PayloadValidationError(
                f"Payload validation failed for {payload_path}:",
                violations=violations,
            )

    def validate(self, payload: Any, schema_body: SchemaBody, payload_path: Path, result: SetResult) -> bool:
        """Validate a payload, logging every violation.

        Args:
            payload: Parsed payload document
            schema_body: JSON-Schema body of the paired schema definition
            payload_path: Path of the payload file, used in messages
            result: SetResult to add errors/success to

        Returns:
            True if the payload satisfies the schema
        """
        try:
            self.check(payload, schema_body, payload_path)
        except CompileError as exc:
            result.add_error(f"Error validating payload {payload_path}: {exc}")
            return False
        except PayloadValidationError as exc:
            result.add_error(str(exc))
            for violation in exc.violations:
                result.add_error(f"- {violation.path or '/'}: {violation.message}")
            return False

        result.add_success(f"Payload {payload_path} is valid")
        return True
