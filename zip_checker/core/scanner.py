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
Main scanner orchestrator: traverses an archive and classifies every entry.
"""

import logging
import time
from pathlib import Path

from .exceptions import ArchiveFormatError
from .models import ClassificationResult, ScanReport, SignatureRule
from .signatures import classify, get_signature_rules
from .traversal import ArchiveReader

logger = logging.getLogger(__name__)


class ArchiveScanner:
    """Classifies the entries of ZIP archives by their magic bytes."""

    def __init__(self, rules: tuple[SignatureRule, ...] | None = None):
        """
        Initialize scanner.

        Args:
            rules: Signature rules to apply (defaults to the shared rule table)
        """
        self.rules = tuple(rules) if rules is not None else get_signature_rules()

    def _classify_reader(self, reader: ArchiveReader) -> list[ClassificationResult]:
        results = []
        for entry in reader.iter_files():
            content = entry.content or b""
            results.append(
                ClassificationResult(
                    filename=entry.name,
                    size=len(content),
                    type_hints=classify(content, self.rules),
                )
            )
            # Entry bytes are not needed past classification
            entry.content = None
        return results

    def classify_entries(self, data: bytes) -> list[ClassificationResult]:
        """
        Classify every readable file entry of an archive.

        Args:
            data: Complete archive bytes

        Returns:
            One result per extracted file entry, in archive order

        Raises:
            ArchiveFormatError: If ``data`` is not a readable archive
        """
        with ArchiveReader(data) as reader:
            return self._classify_reader(reader)

    def scan(self, data: bytes, archive_name: str = "") -> ScanReport:
        """
        Scan an archive held in memory.

        Args:
            data: Complete archive bytes
            archive_name: Display name for the report

        Returns:
            ScanReport with results and skip bookkeeping

        Raises:
            ArchiveFormatError: If ``data`` is not a readable archive
        """
        start_time = time.time()
        try:
            reader = ArchiveReader(data)
        except ArchiveFormatError as e:
            logger.warning("Rejected archive %s: %s", archive_name or "<upload>", e)
            raise

        with reader:
            results = self._classify_reader(reader)

        report = ScanReport(
            archive_name=archive_name,
            results=results,
            skipped_entries=list(reader.skipped_entries),
            directories_skipped=reader.directories_skipped,
            scan_duration_seconds=time.time() - start_time,
        )
        logger.info(
            "Scanned %s: %d entries classified, %d skipped",
            archive_name or "<upload>",
            report.files_classified,
            len(report.skipped_entries),
        )
        return report

    def scan_file(self, archive_path: str | Path) -> ScanReport:
        """
        Scan an archive stored on disk.

        Raises:
            OSError: If the file cannot be read
            ArchiveFormatError: If the file is not a readable archive
        """
        path = Path(archive_path)
        return self.scan(path.read_bytes(), archive_name=path.name)


def scan_archive(data: bytes) -> list[ClassificationResult]:
    """
    Convenience function to classify an archive with the shared rule table.

    Args:
        data: Complete archive bytes

    Returns:
        Classification results in archive order
    """
    return ArchiveScanner().classify_entries(data)


def scan_archive_file(archive_path: str | Path) -> ScanReport:
    """
    Convenience function to scan an archive file with the shared rule table.

    Args:
        archive_path: Path to the archive

    Returns:
        ScanReport
    """
    return ArchiveScanner().scan_file(archive_path)
