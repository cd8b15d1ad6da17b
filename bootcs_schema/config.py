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

"""Runtime configuration for the course validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import DEFAULT_FORMAT, configure_split_stream_logging


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ValidatorConfig:
    """Settings shared by the validator, the generator and the CLI."""
    log_level: str = "WARNING"
    print_level: str = "WARNING"
    verbose: bool = False
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('BOOTCS_SCHEMA_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('BOOTCS_SCHEMA_PRINT_LEVEL', 'WARNING'),
            verbose=_env_flag('BOOTCS_SCHEMA_VERBOSE', 'false'),
            cache_enabled=_env_flag('BOOTCS_SCHEMA_CACHE_ENABLED', 'false'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=logging.Formatter(DEFAULT_FORMAT),
        )
        return logging.getLogger('bootcs_schema')


# Global configuration instance
validator_config = ValidatorConfig.from_env()
