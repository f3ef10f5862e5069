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
Markdown format reporter for scan results.
"""

import re

from ...core.models import ScanReport

_SIZE_UNITS = ("B", "kB", "MB", "GB", "TB")


def format_size(size: int) -> str:
    """Render a byte count with 1024-based units, e.g. ``1.5 kB``."""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _code_span(text: str) -> str:
    """Inline code for ``text``, fenced by a backtick run longer than any inside it."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    fence = "`" * (longest + 1)
    if longest:
        text = f" {text} "
    return f"{fence}{text}{fence}"


class MarkdownReporter:
    """Generates Markdown format reports."""

    def __init__(self, detailed: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            detailed: If True, include exact byte counts and skipped entries
        """
        self.detailed = detailed

    def generate_report(self, report: ScanReport) -> str:
        lines = []

        lines.append("# Archive Content Report")
        lines.append("")
        lines.append(f"**Archive:** {report.archive_name or '(upload)'}")
        lines.append(f"**Status:** {'[WARN] EXECUTABLES FOUND' if report.has_executables else '[OK] NO EXECUTABLES'}")
        lines.append(f"**Scan Duration:** {report.scan_duration_seconds:.2f}s")
        lines.append(f"**Timestamp:** {report.timestamp.isoformat()}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Files Classified:** {report.files_classified}")
        lines.append(f"- **Unreadable Entries:** {len(report.skipped_entries)}")
        lines.append(f"- **Directories:** {report.directories_skipped}")
        lines.append("")

        if report.results:
            lines.append("## Entries")
            lines.append("")
            if self.detailed:
                lines.append("| File | Size | Bytes | Type Hints |")
                lines.append("|------|------|-------|------------|")
            else:
                lines.append("| File | Size | Type Hints |")
                lines.append("|------|------|------------|")
            for r in report.results:
                hints = ", ".join(r.type_hints) if r.type_hints else "-"
                name = _escape_cell(_code_span(r.filename))
                if self.detailed:
                    lines.append(f"| {name} | {format_size(r.size)} | {r.size} | {hints} |")
                else:
                    lines.append(f"| {name} | {format_size(r.size)} | {hints} |")
            lines.append("")
        else:
            lines.append("## No Readable Entries")
            lines.append("")

        if self.detailed and report.skipped_entries:
            lines.append("## Unreadable Entries")
            lines.append("")
            for name in report.skipped_entries:
                lines.append(f"- {_code_span(name)}")
            lines.append("")

        return "\n".join(lines)
