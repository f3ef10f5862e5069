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
Data models for archive entries, signature rules and classification results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .exceptions import SignatureRuleError

# Labels that mark an entry as directly executable.
EXECUTABLE_LABELS = frozenset({"Windows Executable", "ELF Executable"})


@dataclass
class Entry:
    """A file (or directory marker) stored inside an archive."""

    name: str  # Path exactly as recorded in the archive directory
    declared_size: int = 0  # Uncompressed size claimed by the archive
    compressed_size: int = 0
    content: bytes | None = None  # Set once the entry has been extracted

    @property
    def is_directory(self) -> bool:
        """Directory markers are recorded with a trailing separator."""
        return self.name.endswith("/")

    @property
    def size(self) -> int:
        """Length of the content actually read, 0 before extraction."""
        return len(self.content) if self.content is not None else 0


@dataclass(frozen=True)
class SignatureRule:
    """A static magic-number test: ``pattern`` must appear at ``offset``."""

    offset: int
    pattern: bytes
    label: str

    def __post_init__(self):
        if not isinstance(self.offset, int) or isinstance(self.offset, bool) or self.offset < 0:
            raise SignatureRuleError(f"Signature '{self.label}' has invalid offset: {self.offset!r}")
        if not isinstance(self.pattern, bytes) or not self.pattern:
            raise SignatureRuleError(f"Signature '{self.label}' must have a non-empty byte pattern")
        if not self.label:
            raise SignatureRuleError("Signature label must not be empty")

    @property
    def span(self) -> int:
        """Minimum content length required for this rule to match."""
        return self.offset + len(self.pattern)

    def to_dict(self) -> dict[str, Any]:
        return {
            "offset": self.offset,
            "pattern": self.pattern.hex(" ").upper(),
            "label": self.label,
        }


@dataclass
class ClassificationResult:
    """One classified archive entry."""

    filename: str
    size: int  # Decompressed length, not the archive's declared size
    type_hints: list[str] = field(default_factory=list)

    @property
    def is_executable(self) -> bool:
        return any(hint in EXECUTABLE_LABELS for hint in self.type_hints)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format returned by the ``/check`` endpoint."""
        return {
            "filename": self.filename,
            "size": self.size,
            "type_hints": list(self.type_hints),
        }


@dataclass
class ScanReport:
    """Results from scanning a single archive."""

    archive_name: str
    results: list[ClassificationResult] = field(default_factory=list)
    skipped_entries: list[str] = field(default_factory=list)  # Entries that failed extraction
    directories_skipped: int = 0
    scan_duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def files_classified(self) -> int:
        return len(self.results)

    @property
    def has_executables(self) -> bool:
        """True if any entry carries an executable type hint."""
        return any(r.is_executable for r in self.results)

    def get_results_by_hint(self, label: str) -> list[ClassificationResult]:
        """Get all results carrying a specific type hint."""
        return [r for r in self.results if label in r.type_hints]

    def to_dict(self) -> dict[str, Any]:
        """Convert scan report to dictionary."""
        return {
            "archive_name": self.archive_name,
            "files_classified": self.files_classified,
            "has_executables": self.has_executables,
            "results": [r.to_dict() for r in self.results],
            "skipped_entries": list(self.skipped_entries),
            "directories_skipped": self.directories_skipped,
            "scan_duration_seconds": self.scan_duration_seconds,
            "duration_ms": int(self.scan_duration_seconds * 1000),
            "timestamp": self.timestamp.isoformat(),
        }
