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
Zip Checker - classifies archive entries by their magic bytes instead of their names.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``import zip_checker`` cheap for ``python -m zip_checker.cli.cli``
    and avoids pulling in FastAPI or YAML until they are needed.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "ZipCheckerConstants": (".config.constants", "ZipCheckerConstants"),
        "ArchiveReader": (".core.traversal", "ArchiveReader"),
        "traverse": (".core.traversal", "traverse"),
        "ArchiveScanner": (".core.scanner", "ArchiveScanner"),
        "scan_archive": (".core.scanner", "scan_archive"),
        "scan_archive_file": (".core.scanner", "scan_archive_file"),
        "classify": (".core.signatures", "classify"),
        "BUILTIN_SIGNATURES": (".core.signatures", "BUILTIN_SIGNATURES"),
        "ClassificationResult": (".core.models", "ClassificationResult"),
        "Entry": (".core.models", "Entry"),
        "ScanReport": (".core.models", "ScanReport"),
        "SignatureRule": (".core.models", "SignatureRule"),
        "ArchiveFormatError": (".core.exceptions", "ArchiveFormatError"),
        "EntryReadError": (".core.exceptions", "EntryReadError"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ArchiveScanner",
    "scan_archive",
    "scan_archive_file",
    "ArchiveReader",
    "traverse",
    "classify",
    "BUILTIN_SIGNATURES",
    "ClassificationResult",
    "Entry",
    "ScanReport",
    "SignatureRule",
    "ArchiveFormatError",
    "EntryReadError",
    "Config",
    "ZipCheckerConstants",
]
