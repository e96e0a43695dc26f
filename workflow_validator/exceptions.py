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

"""Custom exceptions for the workflow validator."""


class WorkflowValidatorError(Exception):
    """Base exception for workflow-validator related errors."""
    pass


class RootNotFoundError(WorkflowValidatorError):
    """Exception raised when the directory to scan does not exist."""
    pass


class ParseError(WorkflowValidatorError):
    """Exception raised when a document is not well-formed JSON."""
    pass


class StructuralError(WorkflowValidatorError):
    """Exception raised when a document lacks required fields or has invalid ones."""
    pass


class CrossReferenceError(WorkflowValidatorError):
    """Exception raised for inconsistencies between a workflow and its schema."""

    def __init__(self, message: str, location=None):
        super().__init__(message)
        self.location = location


class PayloadValidationError(WorkflowValidatorError):
    """Exception raised when a payload instance does not satisfy its schema."""

    def __init__(self, message: str, violations=None):
        super().__init__(message)
        self.violations = list(violations or [])


class CompileError(WorkflowValidatorError):
    """Exception raised when a schema body is not a valid JSON-Schema document."""
    pass
