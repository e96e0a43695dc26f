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

"""Embeds a workflow's input schema into the workflow document for deployment."""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Union

from ..models.documents import SCHEMA_NAME_SUFFIX, SCHEMA_TYPE_JSON
from .json_loader import JsonLoader, json_loader

logger = logging.getLogger(__name__)

AUTOMATION_USER = "workflow-automation"
OWNER_APP = "conductor"


def build_schema_block(workflow: Dict[str, Any], schema_data: Any, timestamp_ms: int = None) -> Dict[str, Any]:
    """Create the ``schema`` object the orchestrator expects on a workflow."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return {
        "createTime": timestamp_ms,
        "updatedTime": timestamp_ms,
        "createdBy": AUTOMATION_USER,
        "updatedBy": AUTOMATION_USER,
        "data": schema_data,
        "name": f"{workflow.get('name')}{SCHEMA_NAME_SUFFIX}",
        "ownerApp": OWNER_APP,
        "version": workflow.get("version"),
        "type": SCHEMA_TYPE_JSON,
    }


def inject_schema(
    workflow_path: Union[str, Path],
    loader: JsonLoader = None,
    timestamp_ms: int = None,
) -> Dict[str, Any]:
    """Return the workflow document with its paired schema embedded.

    If ``<name>_schema.json`` does not exist next to the workflow, the workflow
    is returned unchanged and a warning is logged.

    Raises:
        ParseError: If the workflow or schema file is not valid JSON
    """
    loader = loader or json_loader
    workflow_path = Path(workflow_path)
    workflow = dict(loader.read_json(workflow_path).data)

    schema_path = workflow_path.with_name(f"{workflow_path.stem}_schema.json")
    if not loader.exists(schema_path):
        logger.warning(f"No schema file found for {workflow_path}")
        return workflow

    schema = loader.read_json(schema_path).data
    schema_data = schema.get("data") if isinstance(schema, dict) else None
    workflow["schema"] = build_schema_block(workflow, schema_data, timestamp_ms)
    return workflow


def write_injected_workflow(
    workflow_path: Union[str, Path],
    output_dir: Union[str, Path],
    loader: JsonLoader = None,
) -> Path:
    """Write the schema-injected workflow to ``output_dir/<workflow file name>``."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / Path(workflow_path).name
    injected = inject_schema(workflow_path, loader)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(injected, f, indent=2)
        f.write("\n")
    logger.info(f"Wrote workflow with embedded schema: {output_path}")
    return output_path
