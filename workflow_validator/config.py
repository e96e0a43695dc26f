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

"""Configuration management for the workflow validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging

DEFAULT_ROOT = "workflows"
LOGGER_NAME = "workflow_validator"


@dataclass
class ValidatorConfig:
    """Configuration class for a validation run."""
    root: str = DEFAULT_ROOT
    log_level: str = "INFO"
    print_level: str = "WARNING"
    jobs: int = 1
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            root=os.getenv('WORKFLOW_VALIDATOR_ROOT', DEFAULT_ROOT),
            log_level=os.getenv('WORKFLOW_VALIDATOR_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('WORKFLOW_VALIDATOR_PRINT_LEVEL', 'WARNING'),
            jobs=max(1, int(os.getenv('WORKFLOW_VALIDATOR_JOBS', '1'))),
            cache_enabled=os.getenv('WORKFLOW_VALIDATOR_CACHE_ENABLED', 'false').lower() == 'true',
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name=LOGGER_NAME,
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
