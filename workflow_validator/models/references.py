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

"""Scanner for symbolic workflow-input references.

Task input parameters may embed placeholders such as
``${workflow.input.customer.id}``. Only the ``workflow.input`` namespace is
resolved here; other expressions (``${task_ref.output.x}``, ``${workflow.workflowId}``)
are left to the orchestrator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List


WORKFLOW_INPUT_REF_RE = re.compile(r"\$\{workflow\.input\.([A-Za-z0-9_.-]+)\}")


@dataclass(frozen=True)
class InputReference:
    """A single ``${workflow.input.<name>}`` occurrence."""

    name: str
    parameter: str


def find_input_references(value: Any) -> List[str]:
    """Return every referenced input name in ``value``, in order of appearance.

    Non-string values yield no references.
    """
    if not isinstance(value, str):
        return []
    return WORKFLOW_INPUT_REF_RE.findall(value)


def iter_parameter_references(input_parameters: Dict[str, Any]) -> Iterator[InputReference]:
    """Yield references found in the string-valued entries of a task's inputs."""
    for key, value in input_parameters.items():
        for name in find_input_references(value):
            yield InputReference(name=name, parameter=key)
