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

"""Consistency checks between a workflow definition and its input schema.

Three kinds of drift are caught:

* workflow inputs the schema does not describe,
* schema-required properties the workflow never declares as inputs,
* ``${workflow.input.X}`` references in tasks to undeclared inputs.
"""

from typing import Callable, List

from ..exceptions import CrossReferenceError
from ..file_io.source_location import format_source, join_pointer, lookup_source
from ..models.documents import SchemaDefinition, TaskSpec, WorkflowDefinition
from ..models.references import InputReference, iter_parameter_references
from .report import SetResult


class CrossReferenceValidator:
    """Checks that workflow inputs, schema properties and task references agree."""

    def validate(self, workflow: WorkflowDefinition, schema: SchemaDefinition, result: SetResult) -> bool:
        """Run every cross-reference rule.

        All rules are evaluated even when an earlier one fails.

        Args:
            workflow: Validated workflow definition
            schema: Validated schema definition
            result: SetResult to add errors to

        Returns:
            True if no rule was violated
        """
        rules: List[Callable[[WorkflowDefinition, SchemaDefinition], List[CrossReferenceError]]] = [
            self.check_inputs_defined,
            self.check_required_declared,
            self.check_task_references,
        ]

        consistent = True
        for rule in rules:
            for issue in rule(workflow, schema):
                result.add_error(str(issue), location=issue.location)
                consistent = False
        return consistent

    @staticmethod
    def check_inputs_defined(workflow: WorkflowDefinition, schema: SchemaDefinition) -> List[CrossReferenceError]:
        properties = schema.data.properties
        undefined = [p for p in workflow.input_parameters if p not in properties]
        if not undefined:
            return []
        loc = lookup_source(workflow.source_map, "/inputParameters", workflow.file_path)
        return [CrossReferenceError(
            "Workflow input parameters not defined in schema: "
            f"{', '.join(undefined)}{format_source(loc)}",
            location=loc,
        )]

    @staticmethod
    def check_required_declared(workflow: WorkflowDefinition, schema: SchemaDefinition) -> List[CrossReferenceError]:
        declared = set(workflow.input_parameters)
        missing = [p for p in schema.data.required if p not in declared]
        if not missing:
            return []
        loc = lookup_source(schema.source_map, "/data/required", schema.file_path)
        return [CrossReferenceError(
            "Required schema properties not in workflow inputs: "
            f"{', '.join(missing)}{format_source(loc)}",
            location=loc,
        )]

    def check_task_references(self, workflow: WorkflowDefinition, schema: SchemaDefinition) -> List[CrossReferenceError]:
        declared = set(workflow.input_parameters)
        issues = []
        for task in workflow.tasks:
            for reference in iter_parameter_references(task.input_parameters):
                try:
                    self._resolve(reference, task, declared, workflow)
                except CrossReferenceError as exc:
                    issues.append(exc)
        return issues

    @staticmethod
    def _resolve(reference: InputReference, task: TaskSpec, declared: set, workflow: WorkflowDefinition):
        if reference.name in declared:
            return
        pointer = join_pointer("/tasks", task.index, "inputParameters", reference.parameter)
        loc = lookup_source(workflow.source_map, pointer, workflow.file_path)
        raise CrossReferenceError(
            f"Task \"{task.name}\" references undefined input parameter: {reference.name} "
            f"(in inputParameters.{reference.parameter}){format_source(loc)}",
            location=loc,
        )
