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

"""Error reporting for workflow set validation."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..file_io.source_location import SourceLocation
from ..models.documents import DocumentSet


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"


class SetState(str, Enum):
    """Progress of a document set through the validation stages."""
    DISCOVERED = "discovered"
    WORKFLOW_CHECKED = "workflow_checked"
    SCHEMA_CHECKED = "schema_checked"
    CROSS_CHECKED = "cross_checked"
    PAYLOAD_CHECKED = "payload_checked"
    PASSED = "passed"
    FAILED = "failed"


TERMINAL_STATES = (SetState.PASSED, SetState.FAILED)


@dataclass(frozen=True)
class ReportEntry:
    severity: Severity
    message: str
    location: Optional[SourceLocation] = None

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': self.message}
        if self.location is not None:
            if self.location.file_path is not None:
                entry['file'] = str(self.location.file_path)
            if self.location.line is not None:
                entry['line'] = self.location.line
            if self.location.column is not None:
                entry['column'] = self.location.column
            if self.location.json_path:
                entry['json_path'] = self.location.json_path
        return entry


class SetResult:
    """Container for the validation outcome of a single document set.

    Stages only ever append to it; the runner owns the state transitions.
    """

    def __init__(self, doc_set: DocumentSet):
        """Initialize set result.

        Args:
            doc_set: The document set being validated
        """
        self.doc_set = doc_set
        self.state = SetState.DISCOVERED
        self.entries: List[ReportEntry] = []

    @property
    def base_name(self) -> str:
        return self.doc_set.base_name

    def add_error(self, message: str, location: Optional[SourceLocation] = None):
        """Add an error message.

        Args:
            message: Error message
            location: Optional position of the offending value
        """
        self.entries.append(ReportEntry(Severity.ERROR, message, location))

    def add_warning(self, message: str, location: Optional[SourceLocation] = None):
        """Add a warning message.

        Args:
            message: Warning message
            location: Optional position of the offending value
        """
        self.entries.append(ReportEntry(Severity.WARNING, message, location))

    def add_success(self, message: str):
        self.entries.append(ReportEntry(Severity.SUCCESS, message))

    def advance(self, state: SetState):
        if self.state in TERMINAL_STATES:
            raise ValueError(f"Set '{self.base_name}' is already {self.state.value}")
        self.state = state

    def fail(self):
        self.advance(SetState.FAILED)

    @property
    def errors(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.severity == Severity.WARNING]

    @property
    def passed(self) -> bool:
        return self.state == SetState.PASSED


class ValidationReport:
    """Aggregated outcome of a whole validation run."""

    def __init__(self, root: Path, set_results: List[SetResult], run_entries: List[ReportEntry] = None):
        self.root = root
        self.set_results = set_results
        self.run_entries: List[ReportEntry] = list(run_entries or [])

    def _collect(self, severity: Severity) -> List[ReportEntry]:
        collected = [e for e in self.run_entries if e.severity == severity]
        for result in self.set_results:
            collected.extend(e for e in result.entries if e.severity == severity)
        return collected

    @property
    def errors(self) -> List[ReportEntry]:
        return self._collect(Severity.ERROR)

    @property
    def warnings(self) -> List[ReportEntry]:
        return self._collect(Severity.WARNING)

    @property
    def total_sets(self) -> int:
        return len(self.set_results)

    @property
    def passed_sets(self) -> List[SetResult]:
        return [r for r in self.set_results if r.passed]

    @property
    def failed_sets(self) -> List[SetResult]:
        return [r for r in self.set_results if not r.passed]

    @property
    def passed(self) -> bool:
        if not self.set_results:
            return False
        if any(e.severity == Severity.ERROR for e in self.run_entries):
            return False
        return all(r.passed for r in self.set_results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'root': str(self.root),
            'passed': self.passed,
            'sets': self.total_sets,
            'errors': len(self.errors),
            'warnings': len(self.warnings),
            'messages': [e.to_dict() | {'severity': e.severity.value} for e in self.run_entries],
            'results': [
                {
                    'name': r.base_name,
                    'workflow': str(r.doc_set.workflow_path),
                    'state': r.state.value,
                    'errors': [e.to_dict() for e in r.errors],
                    'warnings': [e.to_dict() for e in r.warnings],
                }
                for r in self.set_results
            ],
        }
