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
Constants for Zip Checker.
"""

from .. import __version__ as PACKAGE_VERSION


class ZipCheckerConstants:
    """Constants used throughout the checker."""

    VERSION = PACKAGE_VERSION

    # Default values
    DEFAULT_MAX_UPLOAD_MB = 50
    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 8090
    UPLOAD_CHUNK_SIZE = 1024 * 1024  # 1 MB

    # Output formats understood by the CLI
    OUTPUT_FORMATS = ("summary", "json", "markdown")
