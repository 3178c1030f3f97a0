import logging
from typing import Literal, Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Form, HTTPException, Query, Request, Response, UploadFile

from cobalt.constants import ALLOWED_IMAGE_TYPES, MAX_IMAGE_SIZE, MAX_PDF_SIZE
from cobalt.utils import msds as records
from cobalt.utils.storage import (
    delete_object,
    put_public_object,
    safe_image_name,
    safe_pdf_name,
    timestamp_ms
)

log = logging.getLogger("cobalt.upload")

router = APIRouter(prefix="/upload")

# Generated documents: key prefix and the msds_items columns they fill
DOCUMENT_KINDS = {
    "warning-label": ("warning-labels", "warning_label"),
    "management-guidelines": ("management-guidelines", "management_guidelines"),
}


def is_pdf(file: UploadFile) -> bool:
    return "pdf" in (file.content_type or "") or (file.filename or "").lower().endswith(".pdf")


def too_large(limit: int) -> HTTPException:
    return HTTPException(status_code=413, detail=f"File must be {limit // (1024 * 1024)}MB or smaller")


async def read_limited(file: UploadFile, limit: int) -> bytes:
    """Reads at most limit + 1 bytes, so oversized uploads never land in memory whole."""
    if file.size is not None and file.size > limit:
        raise too_large(limit)

    content = await file.read(limit + 1)
    if len(content) > limit:
        raise too_large(limit)
    return content


async def store(request: Request, key: str, content: bytes, content_type: str) -> str:
    try:
        return await put_public_object(request.state.s3, key, content, content_type)
    except (BotoCoreError, ClientError) as exc:
        log.error("Upload of %s failed: %s", key, exc)
        raise HTTPException(status_code=502, detail=f"Storage upload failed: {exc}")


async def ensure_msds(request: Request, msds_id: int) -> None:
    db = request.state.db

    async with db.begin():
        if not await records.item_exists(db, msds_id):
            raise HTTPException(status_code=404, detail="MSDS not found")


@router.post("/pdf")
async def upload_pdf(request: Request, file: UploadFile, msds_id: int = Form()) -> Response:
    db = request.state.db

    if not is_pdf(file):
        raise HTTPException(status_code=415, detail="Only PDF files can be uploaded")

    content = await read_limited(file, MAX_PDF_SIZE)
    await ensure_msds(request, msds_id)

    key = f"pdfs/{timestamp_ms()}_{msds_id}_{safe_pdf_name(file.filename)}"
    url = await store(request, key, content, "application/pdf")

    async with db.begin():
        await records.set_file_columns(db, msds_id, pdf_file_name=key, pdf_file_url=url)

    log.info("Stored source PDF for MSDS %d at %s", msds_id, key)
    return {"success": True, "url": url, "file_name": key}


@router.post("/image")
async def upload_image(
    request: Request,
    file: UploadFile,
    item_type: Literal["ghs", "prgear"] = Form("ghs"),
) -> Response:
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=415, detail="Only JPEG, PNG, GIF, WebP or SVG images can be uploaded")

    content = await read_limited(file, MAX_IMAGE_SIZE)

    key = f"{item_type}/{timestamp_ms()}_{safe_image_name(file.filename)}"
    url = await store(request, key, content, file.content_type)

    return {"success": True, "file_url": url, "file_path": key, "file_name": file.filename}


@router.post("/{kind}")
async def upload_document(
    request: Request,
    kind: Literal["warning-label", "management-guidelines"],
    file: UploadFile,
    msds_id: int = Form(),
    msds_name: Optional[str] = Form(None),
) -> Response:
    db = request.state.db
    folder, column = DOCUMENT_KINDS[kind]

    if not is_pdf(file):
        raise HTTPException(status_code=415, detail="Only PDF files can be uploaded")

    content = await read_limited(file, MAX_PDF_SIZE)
    await ensure_msds(request, msds_id)

    # Names that sanitize to nothing (e.g. all Hangul) fall back to the id
    stem = safe_pdf_name(msds_name or "", default="").removesuffix(".pdf") or str(msds_id)
    file_name = f"{column}_{stem}_{timestamp_ms()}.pdf"
    key = f"{folder}/{file_name}"
    url = await store(request, key, content, "application/pdf")

    async with db.begin():
        await records.set_file_columns(
            db,
            msds_id,
            **{f"{column}_pdf_url": url, f"{column}_pdf_name": file_name},
        )

    return {"success": True, "url": url, "file_name": file_name}


@router.delete("/image")
async def delete_image(request: Request, file_path: Optional[str] = Query(None)) -> Response:
    if not file_path:
        raise HTTPException(status_code=400, detail="file_path is required")

    try:
        await delete_object(request.state.s3, file_path)
    except (BotoCoreError, ClientError) as exc:
        log.error("Delete of %s failed: %s", file_path, exc)
        raise HTTPException(status_code=502, detail=f"Storage delete failed: {exc}")

    return {"success": True}
