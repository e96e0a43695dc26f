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

"""Structure linter for workflow definition files."""

from pathlib import Path
from typing import Any, List, Optional

from ..exceptions import StructuralError
from ..file_io.source_location import SourceMap, format_source, lookup_source
from ..models.documents import TaskSpec, WorkflowDefinition
from .report import SetResult


class WorkflowStructureValidator:
    """Checks required workflow and task fields and builds a WorkflowDefinition."""

    REQUIRED_FIELDS = ('name', 'version', 'tasks', 'inputParameters')
    REQUIRED_TASK_FIELDS = ('name', 'taskReferenceName', 'type')

    def validate(
        self,
        raw: Any,
        file_path: Path,
        result: SetResult,
        source_map: Optional[SourceMap] = None,
    ) -> WorkflowDefinition:
        """Validate a parsed workflow document.

        Problems in individual tasks are added to ``result`` and every task is
        checked before failing, so one run reports all of them.

        Args:
            raw: Parsed JSON content of the workflow file
            file_path: Path of the workflow file, used in messages
            result: SetResult to add errors/warnings to
            source_map: Optional JSON pointer to line/column mapping

        Returns:
            The typed workflow definition

        Raises:
            StructuralError: If the document is unusable for further checks
        """
        if not isinstance(raw, dict):
            raise StructuralError(
                f"Workflow {file_path} must be a JSON object, got {type(raw).__name__}"
            )

        missing_fields = [f for f in self.REQUIRED_FIELDS if f not in raw]
        if missing_fields:
            raise StructuralError(
                f"Workflow {file_path} is missing required fields: {', '.join(missing_fields)}"
            )

        tasks_raw = raw['tasks']
        if not isinstance(tasks_raw, list):
            loc = lookup_source(source_map, "/tasks", file_path)
            raise StructuralError(
                f"Workflow {file_path} field 'tasks' must be a list, "
                f"got {type(tasks_raw).__name__}{format_source(loc)}"
            )

        input_parameters = raw['inputParameters']
        if not isinstance(input_parameters, list) or not all(isinstance(p, str) for p in input_parameters):
            loc = lookup_source(source_map, "/inputParameters", file_path)
            raise StructuralError(
                f"Workflow {file_path} field 'inputParameters' must be a list of "
                f"parameter names{format_source(loc)}"
            )

        for field_name in ('name', 'version'):
            if raw[field_name] in (None, ""):
                loc = lookup_source(source_map, f"/{field_name}", file_path)
                result.add_warning(
                    f"Workflow {file_path} has an empty '{field_name}'{format_source(loc)}",
                    location=loc,
                )

        if not tasks_raw:
            result.add_warning(f"Workflow {file_path} does not define any tasks")

        tasks: List[TaskSpec] = []
        task_errors = 0
        for index, task_raw in enumerate(tasks_raw):
            task = self._validate_task(task_raw, index, file_path, result, source_map)
            if task is None:
                task_errors += 1
            else:
                tasks.append(task)

        if task_errors:
            raise StructuralError(
                f"Workflow {file_path} has {task_errors} invalid task(s)"
            )

        return WorkflowDefinition(
            name=raw['name'],
            version=raw['version'],
            input_parameters=list(input_parameters),
            tasks=tasks,
            file_path=file_path,
            source_map=source_map or {},
        )

    def _validate_task(
        self,
        task_raw: Any,
        index: int,
        file_path: Path,
        result: SetResult,
        source_map: Optional[SourceMap],
    ) -> Optional[TaskSpec]:
        loc = lookup_source(source_map, f"/tasks/{index}", file_path)

        if not isinstance(task_raw, dict):
            result.add_error(
                f"Task at index {index} in workflow {file_path} must be an object{format_source(loc)}",
                location=loc,
            )
            return None

        missing = [f for f in self.REQUIRED_TASK_FIELDS if f not in task_raw]
        if missing:
            label = f" ('{task_raw['name']}')" if 'name' in task_raw else ""
            result.add_error(
                f"Task at index {index}{label} in workflow {file_path} is missing required "
                f"fields: {', '.join(missing)}{format_source(loc)}",
                location=loc,
            )
            return None

        task_inputs = task_raw.get('inputParameters', {})
        if task_inputs is None:
            task_inputs = {}
        if not isinstance(task_inputs, dict):
            params_loc = lookup_source(source_map, f"/tasks/{index}/inputParameters", file_path)
            result.add_error(
                f"Task \"{task_raw['name']}\" in workflow {file_path} has 'inputParameters' "
                f"that is not an object{format_source(params_loc)}",
                location=params_loc,
            )
            return None

        return TaskSpec(
            name=task_raw['name'],
            task_reference_name=task_raw['taskReferenceName'],
            type=task_raw['type'],
            index=index,
            input_parameters=task_inputs,
        )
