from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Protocol, Sequence

import jsonschema
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from referencing.exceptions import Unresolvable

from ..exceptions import CompileError
from ..file_io.source_location import join_pointer


@dataclass(frozen=True)
class SchemaViolation:
    path: str  # JSON pointer into the instance; "" is the document root
    message: str


class SchemaInstanceValidator(Protocol):
    """Compiles JSON-Schema documents and checks instances against them."""

    def compile(self, schema_body: dict) -> Any:
        ...

    def execute(self, compiled: Any, instance: Any) -> List[SchemaViolation]:
        ...


def _to_pointer(path: Sequence[Any]) -> str:
    return join_pointer("", *path)


class JsonSchemaEngine:
    """SchemaInstanceValidator backed by the ``jsonschema`` library.

    The dialect is chosen from the body's ``$schema`` marker (falling back to
    the latest draft), and every violation is collected rather than only the
    first one.
    """

    def __init__(self, check_formats: bool = True):
        self.check_formats = check_formats

    def compile(self, schema_body: dict) -> Validator:
        if not isinstance(schema_body, dict):
            raise CompileError(
                f"Schema body must be an object, got {type(schema_body).__name__}"
            )
        validator_cls = jsonschema.validators.validator_for(schema_body)
        try:
            validator_cls.check_schema(schema_body)
        except SchemaError as exc:
            location = _to_pointer(exc.absolute_path)
            raise CompileError(
                f"Invalid JSON Schema at '{location or '/'}': {exc.message}"
            ) from exc

        format_checker = validator_cls.FORMAT_CHECKER if self.check_formats else None
        return validator_cls(schema_body, format_checker=format_checker)

    def execute(self, compiled: Validator, instance: Any) -> List[SchemaViolation]:
        # $ref targets are only resolved while iterating
        try:
            violations = [
                SchemaViolation(path=_to_pointer(error.absolute_path), message=error.message)
                for error in compiled.iter_errors(instance)
            ]
        except Unresolvable as exc:
            raise CompileError(f"Unresolvable reference in JSON Schema: {exc}") from exc
        return sorted(violations, key=lambda v: (v.path, v.message))
