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

"""Linter package for workflow document set validation."""

from pathlib import Path
from typing import Union

from .report import SetResult, SetState, ValidationReport
from .runner import ValidationRunner

__all__ = ['validate_directory', 'SetResult', 'SetState', 'ValidationReport', 'ValidationRunner']


def validate_directory(root_dir: Union[str, Path], jobs: int = 1) -> ValidationReport:
    """Validate every workflow set under a directory.

    Args:
        root_dir: Directory to scan recursively
        jobs: Number of sets validated in parallel

    Returns:
        ValidationReport covering all discovered sets
    """
    return ValidationRunner(jobs=jobs).run(root_dir)
