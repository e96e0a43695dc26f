from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..file_io.source_location import SourceMap


Version = Union[int, float, str]

# Literal required in the "type" field of a schema definition
SCHEMA_TYPE_JSON = "JSON"

# Suffix expected on a schema name relative to its workflow name
SCHEMA_NAME_SUFFIX = "_input"


@dataclass(frozen=True)
class TaskSpec:
    name: str
    task_reference_name: str
    type: str
    index: int
    input_parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkflowDefinition:
    name: str
    version: Version
    input_parameters: List[str]
    tasks: List[TaskSpec]
    file_path: Optional[Path] = None
    source_map: SourceMap = field(default_factory=dict, repr=False)

    @property
    def expected_schema_name(self) -> str:
        return f"{self.name}{SCHEMA_NAME_SUFFIX}"


@dataclass
class SchemaBody:
    schema_dialect: str
    type: str
    properties: Dict[str, Any]
    required: List[str] = field(default_factory=list)
    # Untouched document handed to the instance validator
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class SchemaDefinition:
    name: str
    version: Version
    type: str
    data: SchemaBody
    file_path: Optional[Path] = None
    source_map: SourceMap = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class DocumentSet:
    """Workflow file plus its paired schema and payload files, sharing a base name."""

    base_name: str
    workflow_path: Path
    schema_path: Optional[Path] = None
    payload_path: Optional[Path] = None

    @property
    def has_schema(self) -> bool:
        return self.schema_path is not None

    @property
    def has_payload(self) -> bool:
        return self.payload_path is not None
