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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable

import pytest

from zip_checker.core.signatures import reset_signature_rules

# ---------------------------------------------------------------------------
# Well-known payloads
# ---------------------------------------------------------------------------

OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ELF_MAGIC = b"\x7fELF"
HELLO = b"Hello"


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_signature_table(monkeypatch):
    """Every test starts from the built-in rule table and a clean environment."""
    monkeypatch.delenv("ZIP_CHECKER_SIGNATURES_PATH", raising=False)
    monkeypatch.delenv("ZIP_CHECKER_MAX_UPLOAD_MB", raising=False)
    reset_signature_rules()
    yield
    reset_signature_rules()


# ---------------------------------------------------------------------------
# Archive builders
# ---------------------------------------------------------------------------


def build_zip(entries: list[tuple[str, bytes]], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build an in-memory ZIP from ``(name, content)`` pairs, in order."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=compression) as zf:
        for name, content in entries:
            zf.writestr(zipfile.ZipInfo(name) if name.endswith("/") else name, content)
    return buf.getvalue()


def corrupt_stored_entry(data: bytes, original: bytes) -> bytes:
    """Flip the stored bytes of one entry so its CRC no longer matches."""
    assert data.count(original) == 1
    replacement = bytes(b ^ 0xFF for b in original)
    return data.replace(original, replacement)


def _central_record(buf: bytes | bytearray, entry_index: int) -> int:
    pos = -1
    for _ in range(entry_index + 1):
        pos = buf.index(b"PK\x01\x02", pos + 1)
    return pos


def set_compression_method(data: bytes, entry_index: int, method: int) -> bytes:
    """Rewrite the compression method recorded in the central directory."""
    buf = bytearray(data)
    pos = _central_record(buf, entry_index)
    buf[pos + 10 : pos + 12] = method.to_bytes(2, "little")
    return bytes(buf)


def mark_encrypted(data: bytes, entry_index: int) -> bytes:
    """Set the encryption bit of the general purpose flags in the central directory."""
    buf = bytearray(data)
    pos = _central_record(buf, entry_index)
    buf[pos + 8] |= 0x01
    return bytes(buf)


def truncate_last_entry(data: bytes, name: str) -> bytes:
    """Cut the stored data of ``name`` in half, leaving its central record untouched.

    ``name`` must be the last member so only the central directory offset moves.
    """
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        info = zf.getinfo(name)
        assert zf.infolist()[-1] is info
    local = info.header_offset
    name_len = int.from_bytes(data[local + 26 : local + 28], "little")
    extra_len = int.from_bytes(data[local + 28 : local + 30], "little")
    start = local + 30 + name_len + extra_len
    removed = info.compress_size - info.compress_size // 2
    end = start + info.compress_size

    buf = bytearray(data[: end - removed] + data[end:])
    eocd = buf.rindex(b"PK\x05\x06")
    cd_offset = int.from_bytes(buf[eocd + 16 : eocd + 20], "little")
    buf[eocd + 16 : eocd + 20] = (cd_offset - removed).to_bytes(4, "little")
    return bytes(buf)


@pytest.fixture
def make_zip() -> Callable[..., bytes]:
    """Factory fixture returning :func:`build_zip`."""
    return build_zip


@pytest.fixture
def two_entry_zip() -> bytes:
    """``a.txt`` with plain text followed by ``b.bin`` with an OLE header."""
    return build_zip([("a.txt", HELLO), ("b.bin", OLE_MAGIC)])


@pytest.fixture
def zip_with_corrupt_entry() -> bytes:
    """Three stored entries; the middle one fails its CRC check."""
    bad_payload = b"CORRUPTED-PAYLOAD-" * 4
    data = build_zip(
        [("first.txt", HELLO), ("broken.bin", bad_payload), ("last.exe", b"MZ\x90\x00")],
        compression=zipfile.ZIP_STORED,
    )
    return corrupt_stored_entry(data, bad_payload)


@pytest.fixture
def zip_with_unsupported_method() -> bytes:
    """``odd.bin`` claims compression method 99."""
    data = build_zip([("ok.txt", b"fine"), ("odd.bin", b"payload")], compression=zipfile.ZIP_STORED)
    return set_compression_method(data, entry_index=1, method=99)


@pytest.fixture
def zip_with_encrypted_entry() -> bytes:
    """``enc.bin`` is flagged as encrypted; no password is ever supplied."""
    data = build_zip([("ok.txt", HELLO), ("enc.bin", b"MZ secret payload")])
    return mark_encrypted(data, entry_index=1)


@pytest.fixture
def zip_with_truncated_entry() -> bytes:
    """Deflated ``cut.bin`` whose local data ends early; the directory is intact."""
    payload = bytes((i * 31 + i // 7) % 256 for i in range(8192))
    data = build_zip([("ok.txt", HELLO), ("cut.bin", payload)])
    return truncate_last_entry(data, "cut.bin")


@pytest.fixture
def archive_file(tmp_path, two_entry_zip):
    """The two-entry archive written to disk."""
    path = tmp_path / "upload.zip"
    path.write_bytes(two_entry_zip)
    return path


@pytest.fixture
def extra_signatures_file(tmp_path):
    """YAML file adding PNG and RAR signatures."""
    path = tmp_path / "signatures.yaml"
    path.write_text(
        "signatures:\n"
        "  - label: PNG Image\n"
        "    offset: 0\n"
        '    hex: "89 50 4E 47 0D 0A 1A 0A"\n'
        "  - label: RAR Archive\n"
        '    ascii: "Rar!"\n',
        encoding="utf-8",
    )
    return path
