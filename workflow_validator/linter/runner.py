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

"""Orchestration of the per-set validation pipeline.

Each document set moves through::

    DISCOVERED -> WORKFLOW_CHECKED -> SCHEMA_CHECKED -> CROSS_CHECKED
               -> PAYLOAD_CHECKED -> PASSED

and drops to FAILED at the first stage that does not succeed. Sets without a
payload go from CROSS_CHECKED straight to PASSED.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..config import LOGGER_NAME
from ..exceptions import WorkflowValidatorError
from ..file_io.json_loader import JsonLoader, json_loader
from ..models.documents import DocumentSet, SchemaDefinition, WorkflowDefinition
from ..models.schema_engine import SchemaInstanceValidator
from .cross_reference_linter import CrossReferenceValidator
from .locator import DocumentSetLocator
from .payload_linter import PayloadValidator
from .report import ReportEntry, SetResult, SetState, Severity, ValidationReport
from .schema_linter import SchemaStructureValidator
from .workflow_linter import WorkflowStructureValidator

logger = logging.getLogger(LOGGER_NAME)

NO_SETS_MESSAGE = (
    "No workflow sets found. Each workflow should have a corresponding "
    "_schema.json file and optionally a _payload.json file."
)


class ValidationRunner:
    """Runs every validation stage for every document set under a root directory."""

    def __init__(
        self,
        loader: JsonLoader = None,
        engine: SchemaInstanceValidator = None,
        jobs: int = 1,
    ):
        self.loader = loader or json_loader
        self.locator = DocumentSetLocator(self.loader)
        self.workflow_validator = WorkflowStructureValidator()
        self.schema_validator = SchemaStructureValidator()
        self.cross_validator = CrossReferenceValidator()
        self.payload_validator = PayloadValidator(engine)
        self.jobs = max(1, jobs)

    def run(self, root_dir: Union[str, Path]) -> ValidationReport:
        """Validate all document sets under ``root_dir``.

        Raises:
            RootNotFoundError: If ``root_dir`` does not exist
        """
        root = Path(root_dir)
        # Each run reads the documents as they are on disk now
        self.loader.clear_cache()
        document_sets = self.locator.locate(root)

        if not document_sets:
            logger.warning(NO_SETS_MESSAGE)
            return ValidationReport(root, [], [ReportEntry(Severity.WARNING, NO_SETS_MESSAGE)])

        set_results = []
        for set_result in self._map(document_sets):
            self._emit(set_result)
            set_results.append(set_result)

        return ValidationReport(root, set_results)

    def _map(self, document_sets: List[DocumentSet]) -> Iterable[SetResult]:
        # Results come back in discovery order regardless of completion order
        if self.jobs == 1 or len(document_sets) == 1:
            yield from map(self.validate_set, document_sets)
            return
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            yield from executor.map(self.validate_set, document_sets)

    def validate_set(self, doc_set: DocumentSet) -> SetResult:
        """Run the stage pipeline for a single document set."""
        result = SetResult(doc_set)
        try:
            self._run_stages(doc_set, result)
        except Exception as exc:
            logger.debug("Unexpected failure in set %s", doc_set.base_name, exc_info=True)
            result.add_error(f"Error processing workflow set {doc_set.base_name}: {exc}")
            if result.state != SetState.FAILED:
                result.fail()
        return result

    def _run_stages(self, doc_set: DocumentSet, result: SetResult) -> None:
        if not self.locator.check_completeness(doc_set, result):
            result.fail()
            return

        workflow = self.check_workflow(doc_set.workflow_path, result)
        if workflow is None:
            result.fail()
            return
        result.advance(SetState.WORKFLOW_CHECKED)

        schema = self.check_schema(doc_set.schema_path, result, workflow)
        if schema is None:
            result.fail()
            return
        result.advance(SetState.SCHEMA_CHECKED)

        if not self.cross_validator.validate(workflow, schema, result):
            result.fail()
            return
        result.advance(SetState.CROSS_CHECKED)

        if doc_set.has_payload:
            if not self.check_payload(doc_set.payload_path, schema, result):
                result.fail()
                return
            result.advance(SetState.PAYLOAD_CHECKED)

        result.add_success(f"All validations passed for workflow set: {doc_set.base_name}")
        result.advance(SetState.PASSED)

    def check_workflow(self, workflow_path: Path, result: SetResult) -> Optional[WorkflowDefinition]:
        try:
            document = self.loader.read_json(workflow_path)
            return self.workflow_validator.validate(
                document.data, workflow_path, result, source_map=document.source_map
            )
        except WorkflowValidatorError as exc:
            result.add_error(str(exc))
            return None

    def check_schema(
        self, schema_path: Path, result: SetResult, workflow: WorkflowDefinition = None
    ) -> Optional[SchemaDefinition]:
        try:
            document = self.loader.read_json(schema_path)
            return self.schema_validator.validate(
                document.data, schema_path, result, workflow=workflow, source_map=document.source_map
            )
        except WorkflowValidatorError as exc:
            result.add_error(str(exc))
            return None

    def check_payload(self, payload_path: Path, schema: SchemaDefinition, result: SetResult) -> bool:
        try:
            document = self.loader.read_json(payload_path)
        except WorkflowValidatorError as exc:
            result.add_error(str(exc))
            return False
        return self.payload_validator.validate(document.data, schema.data, payload_path, result)

    @staticmethod
    def _emit(result: SetResult) -> None:
        """Log all messages of one set as a contiguous block."""
        logger.info(f"Validating workflow set: {result.base_name}")
        for entry in result.entries:
            if entry.severity == Severity.ERROR:
                logger.error(entry.message)
            elif entry.severity == Severity.WARNING:
                logger.warning(entry.message)
            else:
                logger.info(entry.message)
