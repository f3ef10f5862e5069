# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
In-memory ZIP traversal.

Opens an archive from a byte buffer, lists its entries in central directory
order and reads each file entry fully into memory. A single unreadable entry
is logged and skipped; only a buffer that is not an archive at all fails the
whole traversal.
"""

import io
import logging
import zipfile
from collections.abc import Iterator

from .exceptions import ArchiveFormatError, EntryReadError
from .models import Entry

logger = logging.getLogger(__name__)


class ArchiveReader:
    """
    Reads entries from a ZIP archive held in memory.

    Example:
        >>> with ArchiveReader(data) as reader:
        ...     for entry in reader.iter_files():
        ...         print(entry.name, entry.size)
    """

    def __init__(self, data: bytes):
        """
        Open the archive.

        Args:
            data: Complete archive bytes

        Raises:
            ArchiveFormatError: If ``data`` cannot be parsed as a ZIP archive
        """
        if not data:
            raise ArchiveFormatError("Archive is empty")
        try:
            self._zf = zipfile.ZipFile(io.BytesIO(data), "r")
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(f"Not a valid ZIP archive: {e}") from e
        except (zipfile.LargeZipFile, OSError, ValueError, EOFError) as e:
            raise ArchiveFormatError(f"Cannot read archive directory: {e}") from e

        self.skipped_entries: list[str] = []
        self.directories_skipped = 0

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._zf.close()

    @staticmethod
    def _to_entry(info: zipfile.ZipInfo) -> Entry:
        return Entry(name=info.filename, declared_size=info.file_size, compressed_size=info.compress_size)

    def entries(self) -> list[Entry]:
        """All entries in archive order, directory markers included."""
        return [self._to_entry(info) for info in self._zf.infolist()]

    def extract(self, entry: Entry) -> bytes:
        """
        Read the full decompressed content of one entry.

        Raises:
            EntryReadError: If the entry is missing, corrupt, encrypted,
                truncated or uses an unsupported compression method
        """
        try:
            info = self._zf.getinfo(entry.name)
        except KeyError as e:
            raise EntryReadError(entry.name, "no such entry in archive") from e
        return self._read(info)

    def _read(self, info: zipfile.ZipInfo) -> bytes:
        # zipfile surfaces bad data through many types (BadZipFile, zlib.error,
        # NotImplementedError, RuntimeError for encryption, EOFError, ...)
        try:
            return self._zf.read(info)
        except Exception as e:
            raise EntryReadError(info.filename, f"{type(e).__name__}: {e}") from e

    def iter_files(self) -> Iterator[Entry]:
        """
        Yield readable file entries with their content loaded.

        Directory markers are skipped before extraction is attempted. Entries
        that fail to extract are logged, recorded in ``skipped_entries`` and
        left out.
        """
        # Walk ZipInfo objects directly so duplicate names each read their own member
        for info in self._zf.infolist():
            entry = self._to_entry(info)
            if entry.is_directory:
                logger.debug("Skipping directory entry %s", entry.name)
                self.directories_skipped += 1
                continue

            logger.debug("Reading entry %s", entry.name)
            try:
                entry.content = self._read(info)
            except EntryReadError as e:
                logger.warning("Failed to read archive entry %s: %s", entry.name, e)
                self.skipped_entries.append(entry.name)
                continue

            yield entry


def traverse(data: bytes) -> list[Entry]:
    """
    Extract every readable file entry from an archive.

    Args:
        data: Complete archive bytes

    Returns:
        File entries with ``content`` set, in archive order

    Raises:
        ArchiveFormatError: If ``data`` is not a readable archive
    """
    with ArchiveReader(data) as reader:
        return list(reader.iter_files())
