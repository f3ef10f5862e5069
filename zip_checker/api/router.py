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

"""API router for Zip Checker endpoints.

Composable ``APIRouter`` so the checker can be mounted in other FastAPI
applications. Scans run in a worker thread; the core is synchronous.
"""

import asyncio
import logging

try:
    from fastapi import APIRouter, File, HTTPException, Request, UploadFile
    from fastapi.responses import PlainTextResponse
    from pydantic import BaseModel, Field
except ImportError:
    raise ImportError("API server requires FastAPI. Install with: pip install fastapi uvicorn python-multipart")

from ..config.config import Config
from ..config.constants import ZipCheckerConstants
from ..core.exceptions import ArchiveFormatError, SignatureRuleError
from ..core.scanner import ArchiveScanner
from ..core.signatures import get_signature_rules

logger = logging.getLogger("zip_checker.api")

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class FileDescription(BaseModel):
    """One classified archive entry."""

    filename: str = Field(..., description="Entry path as recorded in the archive")
    size: int = Field(..., description="Decompressed size in bytes")
    type_hints: list[str] = Field(default_factory=list, description="Labels of matching signatures")


class ScanReportResponse(BaseModel):
    """Response model for multipart uploads."""

    archive_name: str
    files_classified: int
    has_executables: bool
    results: list[FileDescription]
    skipped_entries: list[str]
    directories_skipped: int
    scan_duration_seconds: float
    duration_ms: int
    timestamp: str


class SignatureDescription(BaseModel):
    """One rule of the active signature table."""

    offset: int
    pattern: str
    label: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    signatures_loaded: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_scanner() -> ArchiveScanner:
    """Build a scanner over the shared rule table.

    The first call may read the extra signatures file, so it runs off the event loop.
    """
    try:
        rules = await asyncio.to_thread(get_signature_rules, Config())
    except (SignatureRuleError, ValueError) as e:
        logger.error("Signature table unavailable: %s", e)
        raise HTTPException(status_code=500, detail=f"Signature table unavailable: {e}") from e
    return ArchiveScanner(rules=rules)


def _too_large(limit: int) -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"Upload exceeds maximum size of {limit // (1024 * 1024)} MB",
    )


async def _read_request_body(request: Request, limit: int) -> bytes:
    """Read the raw request body, aborting once it exceeds ``limit`` bytes."""
    chunks = []
    total_read = 0
    async for chunk in request.stream():
        total_read += len(chunk)
        if total_read > limit:
            raise _too_large(limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_upload(file: UploadFile, limit: int) -> bytes:
    """Read an uploaded file in chunks, enforcing ``limit``."""
    chunks = []
    total_read = 0
    while True:
        chunk = await file.read(ZipCheckerConstants.UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        total_read += len(chunk)
        if total_read > limit:
            raise _too_large(limit)
        chunks.append(chunk)
    return b"".join(chunks)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {"service": "Zip Checker API", "version": ZipCheckerConstants.VERSION, "docs": "/docs", "health": "/health"}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    scanner = await _get_scanner()
    return HealthResponse(status="healthy", version=ZipCheckerConstants.VERSION, signatures_loaded=len(scanner.rules))


@router.get("/headers", response_class=PlainTextResponse)
async def echo_headers(request: Request):
    """Echo the request headers, one ``Name: value`` pair per line."""
    return "".join(f"{name}: {value}\n" for name, value in request.headers.items())


@router.get("/signatures", response_model=list[SignatureDescription])
async def list_signatures():
    """List the active signature rules in evaluation order."""
    return [rule.to_dict() for rule in (await _get_scanner()).rules]


@router.post("/check", response_model=list[FileDescription])
async def check_archive(request: Request):
    """Classify the entries of a ZIP archive sent as the raw request body."""
    config = Config()
    body = await _read_request_body(request, config.max_upload_size_bytes)
    scanner = await _get_scanner()

    try:
        results = await asyncio.to_thread(scanner.classify_entries, body)
    except ArchiveFormatError as e:
        logger.warning("Rejected upload: %s", e)
        raise HTTPException(status_code=400, detail=f"Invalid archive: {e}") from e

    return [r.to_dict() for r in results]


@router.post("/scan-upload", response_model=ScanReportResponse)
async def scan_uploaded_archive(
    file: UploadFile = File(..., description="ZIP archive to inspect"),
):
    """Scan an uploaded archive (multipart) and return the full report."""
    config = Config()
    data = await _read_upload(file, config.max_upload_size_bytes)
    scanner = await _get_scanner()

    try:
        report = await asyncio.to_thread(scanner.scan, data, file.filename or "")
    except ArchiveFormatError as e:
        raise HTTPException(status_code=400, detail=f"Invalid archive: {e}") from e

    return report.to_dict()
