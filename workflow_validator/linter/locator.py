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

"""Discovery of workflow / schema / payload document sets."""

from pathlib import Path
from typing import List, Union

from ..file_io.json_loader import JsonLoader, json_loader
from ..models.documents import DocumentSet
from .report import SetResult

SCHEMA_SUFFIX = "_schema.json"
PAYLOAD_SUFFIX = "_payload.json"

# Package-manager metadata that lives next to workflows but is not one
EXCLUDED_FILE_NAMES = {
    "package.json",
    "package-lock.json",
    "npm-shrinkwrap.json",
    "composer.json",
}


class DocumentSetLocator:
    """Resolves workflow files to their paired schema and payload files.

    For a workflow ``B.json`` the schema is expected at ``B_schema.json`` and
    the payload at ``B_payload.json`` in the same directory.
    """

    def __init__(self, loader: JsonLoader = None):
        self.loader = loader or json_loader

    @staticmethod
    def is_workflow_candidate(file_path: Path) -> bool:
        name = file_path.name
        if name in EXCLUDED_FILE_NAMES:
            return False
        return not (name.endswith(SCHEMA_SUFFIX) or name.endswith(PAYLOAD_SUFFIX))

    def locate(self, root_dir: Union[str, Path]) -> List[DocumentSet]:
        """Find all document sets below ``root_dir``.

        Args:
            root_dir: Directory to scan recursively

        Returns:
            Document sets ordered by workflow path

        Raises:
            RootNotFoundError: If ``root_dir`` does not exist
        """
        document_sets = []
        for file_path in self.loader.list_json_files(root_dir):
            if not self.is_workflow_candidate(file_path):
                continue

            base_name = file_path.name[:-len(".json")]
            schema_path = file_path.with_name(f"{base_name}{SCHEMA_SUFFIX}")
            payload_path = file_path.with_name(f"{base_name}{PAYLOAD_SUFFIX}")

            document_sets.append(DocumentSet(
                base_name=base_name,
                workflow_path=file_path,
                schema_path=schema_path if self.loader.exists(schema_path) else None,
                payload_path=payload_path if self.loader.exists(payload_path) else None,
            ))

        return document_sets

    @staticmethod
    def check_completeness(doc_set: DocumentSet, result: SetResult) -> bool:
        """Report missing paired files.

        A missing schema is an error (the set cannot be validated); a missing
        payload only produces a warning.
        """
        expected_dir = doc_set.workflow_path.parent
        if not doc_set.has_payload:
            result.add_warning(
                f"No payload file found for workflow {doc_set.workflow_path} "
                f"(expected {expected_dir / (doc_set.base_name + PAYLOAD_SUFFIX)}); "
                f"payload validation skipped"
            )
        if not doc_set.has_schema:
            result.add_error(
                f"Missing schema file for workflow {doc_set.workflow_path}: "
                f"expected {expected_dir / (doc_set.base_name + SCHEMA_SUFFIX)}"
            )
            return False
        return True
