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

"""Command-line interface for the Zip Checker."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.constants import ZipCheckerConstants
from ..core.exceptions import ArchiveFormatError, SignatureRuleError
from ..core.models import EXECUTABLE_LABELS, ScanReport, SignatureRule
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.markdown_reporter import MarkdownReporter, format_size
from ..core.scanner import ArchiveScanner
from ..core.signatures import BUILTIN_SIGNATURES, get_signature_rules, load_signature_rules

logger = logging.getLogger("zip_checker.cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EXECUTABLES_FOUND = 2


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_rules(args: argparse.Namespace) -> tuple[SignatureRule, ...]:
    """Built-in rules plus ``--signatures``, or the shared table when not given."""
    signatures = getattr(args, "signatures", None)
    if signatures:
        rules = BUILTIN_SIGNATURES + load_signature_rules(signatures)
        logger.info("Using %d signature rules (extra rules from %s)", len(rules), signatures)
        return rules
    return get_signature_rules()


def _format_output(args: argparse.Namespace, report: ScanReport) -> str:
    """Generate the formatted output string for a scan report."""
    fmt = getattr(args, "format", "summary")
    if fmt == "json":
        return JSONReporter(pretty=not args.compact, include_metadata=args.verbose).generate_report(report)
    if fmt == "markdown":
        return MarkdownReporter(detailed=args.verbose).generate_report(report)
    return _generate_summary(report)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def scan_command(args: argparse.Namespace) -> int:
    """Handle the ``scan`` command for a single archive."""
    archive_path = Path(args.archive)
    if not archive_path.is_file():
        print(f"Error: File does not exist: {archive_path}", file=sys.stderr)
        return EXIT_ERROR

    try:
        rules = _load_rules(args)
    except SignatureRuleError as e:
        print(f"Error loading signatures: {e}", file=sys.stderr)
        return EXIT_ERROR

    scanner = ArchiveScanner(rules=rules)
    try:
        report = scanner.scan_file(archive_path)
    except ArchiveFormatError as e:
        print(f"Error: {archive_path} is not a valid archive: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error reading {archive_path}: {e}", file=sys.stderr)
        return EXIT_ERROR

    _write_output(args, _format_output(args, report))

    if args.fail_on_executables and report.has_executables:
        return EXIT_EXECUTABLES_FOUND
    return EXIT_OK


def list_signatures_command(args: argparse.Namespace) -> int:
    """Handle the ``list-signatures`` command."""
    try:
        rules = _load_rules(args)
    except SignatureRuleError as e:
        print(f"[FAIL] Error loading signatures: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(f"Signature Rules ({len(rules)}):\n")
    for i, rule in enumerate(rules, 1):
        print(f"  {i:2d}. {rule.label}")
        print(f"      offset {rule.offset}: {rule.pattern.hex(' ').upper()}")
    return EXIT_OK


def serve_command(args: argparse.Namespace) -> int:
    """Handle the ``serve`` command."""
    from ..api.api_server import run_server

    run_server(host=args.host, port=args.port, reload=args.reload)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Summary formatter
# ---------------------------------------------------------------------------


def _generate_summary(report: ScanReport) -> str:
    lines = [
        "=" * 60,
        f"Archive: {report.archive_name}",
        "=" * 60,
        f"Status: {'[WARN] EXECUTABLES FOUND' if report.has_executables else '[OK] NO EXECUTABLES'}",
        f"Files Classified: {report.files_classified}",
        f"Unreadable Entries: {len(report.skipped_entries)}",
        f"Scan Duration: {report.scan_duration_seconds:.2f}s",
        "",
    ]
    if report.has_executables:
        lines.append("Executables:")
        for label in sorted(EXECUTABLE_LABELS):
            for r in report.get_results_by_hint(label):
                lines.append(f"  [{label}] {r.filename}")
        lines.append("")
    for r in report.results:
        hints = ", ".join(r.type_hints) if r.type_hints else "-"
        lines.append(f"  {r.filename}  ({format_size(r.size)})  {hints}")
    for name in report.skipped_entries:
        lines.append(f"  {name}  [UNREADABLE]")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Zip Checker - classify archive entries by their magic bytes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  zip-checker scan upload.zip
  zip-checker scan upload.zip --format json --compact
  zip-checker scan upload.zip --fail-on-executables
  zip-checker scan upload.zip --signatures extra_signatures.yaml
  zip-checker list-signatures
  zip-checker serve --port 8090
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- scan --------------------------------------------------------------
    scan_p = subparsers.add_parser("scan", help="Classify the entries of an archive")
    scan_p.add_argument("archive", help="Path to the ZIP archive")
    scan_p.add_argument(
        "--format",
        choices=list(ZipCheckerConstants.OUTPUT_FORMATS),
        default="summary",
        help="Output format (default: summary)",
    )
    scan_p.add_argument("--output", "-o", help="Output file path")
    scan_p.add_argument("--compact", action="store_true", help="Compact JSON output")
    scan_p.add_argument(
        "--fail-on-executables",
        action="store_true",
        help=f"Exit with code {EXIT_EXECUTABLES_FOUND} if any entry is an executable",
    )
    scan_p.add_argument("--signatures", metavar="PATH", help="YAML file with extra signature rules")
    scan_p.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress and include scan metadata in JSON/Markdown output",
    )

    # -- list-signatures ---------------------------------------------------
    ls_p = subparsers.add_parser("list-signatures", help="List the active signature rules")
    ls_p.add_argument("--signatures", metavar="PATH", help="YAML file with extra signature rules")

    # -- serve -------------------------------------------------------------
    serve_p = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None, help="Host to bind (default: ZIP_CHECKER_HOST or localhost)")
    serve_p.add_argument("--port", type=int, default=None, help="Port to bind (default: ZIP_CHECKER_PORT or 8090)")
    serve_p.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    _configure_logging(args)

    dispatch = {
        "scan": scan_command,
        "list-signatures": list_signatures_command,
        "serve": serve_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
