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

"""Zip Checker exceptions.

This module defines custom exceptions for Zip Checker operations.
All exceptions inherit from ZipCheckerError for easy catching.

Example:
    >>> from zip_checker.core.scanner import scan_archive
    >>> from zip_checker.core.exceptions import ArchiveFormatError
    >>>
    >>> try:
    ...     results = scan_archive(b"not a zip")
    ... except ArchiveFormatError as e:
    ...     print(f"Rejected upload: {e}")
"""


class ZipCheckerError(Exception):
    """Base exception for all Zip Checker errors."""

    pass


class ArchiveFormatError(ZipCheckerError):
    """Raised when the input buffer cannot be parsed as an archive.

    This can indicate:
    - Missing or corrupt central directory
    - Empty or truncated upload
    - Data that is not an archive at all
    """

    pass


class EntryReadError(ZipCheckerError):
    """Raised when a single archive entry cannot be decompressed.

    This typically indicates:
    - Corrupt or truncated entry data (CRC mismatch)
    - Unsupported compression method
    - Encrypted entries
    """

    def __init__(self, entry_name: str, message: str):
        super().__init__(f"{entry_name}: {message}")
        self.entry_name = entry_name


class SignatureRuleError(ZipCheckerError):
    """Raised when a signature rule or rules file is invalid."""

    pass
