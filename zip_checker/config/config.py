# Copyright 2026 Cisco Systems, Inc.
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Configuration class for Zip Checker.

Values left at their defaults are filled from environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .constants import ZipCheckerConstants


@dataclass
class Config:
    """
    Configuration for Zip Checker.

    The scanning core itself has no configuration; these knobs shape the
    HTTP boundary and the rule table.
    """

    # Upload limits (enforced by the HTTP layer, not the core)
    max_upload_size_mb: int = ZipCheckerConstants.DEFAULT_MAX_UPLOAD_MB

    # Extra signature rules appended after the built-in table
    signatures_path: str | None = None

    # Server Options
    host: str = ZipCheckerConstants.DEFAULT_HOST
    port: int = ZipCheckerConstants.DEFAULT_PORT

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.max_upload_size_mb == ZipCheckerConstants.DEFAULT_MAX_UPLOAD_MB:
            if env_max := os.getenv("ZIP_CHECKER_MAX_UPLOAD_MB"):
                try:
                    self.max_upload_size_mb = int(env_max)
                except ValueError:
                    raise ValueError(f"ZIP_CHECKER_MAX_UPLOAD_MB must be an integer, got {env_max!r}") from None

        if self.signatures_path is None:
            self.signatures_path = os.getenv("ZIP_CHECKER_SIGNATURES_PATH") or None

        if self.host == ZipCheckerConstants.DEFAULT_HOST:
            if env_host := os.getenv("ZIP_CHECKER_HOST"):
                self.host = env_host

        if self.port == ZipCheckerConstants.DEFAULT_PORT:
            if env_port := os.getenv("ZIP_CHECKER_PORT"):
                try:
                    self.port = int(env_port)
                except ValueError:
                    raise ValueError(f"ZIP_CHECKER_PORT must be an integer, got {env_port!r}") from None

        if self.max_upload_size_mb <= 0:
            raise ValueError("max_upload_size_mb must be positive")

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Values already present in the environment are not overridden.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            for key, value in dotenv_values(config_file).items():
                if value is not None:
                    os.environ.setdefault(key, value)

        return cls.from_env()
