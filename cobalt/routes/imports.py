import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request, Response, UploadFile
from starlette.responses import StreamingResponse

from cobalt.routes.msds import MsdsPayload, create_msds
from cobalt.utils.importer import (
    WorkbookError,
    build_template,
    parse_workbook,
    upload_rows
)

log = logging.getLogger("cobalt.import")

router = APIRouter(prefix="/msds/import")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def read_rows(file: UploadFile):
    content = await file.read()
    try:
        return parse_workbook(content)
    except WorkbookError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/template")
async def get_template() -> Response:
    return StreamingResponse(
        content=build_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="msds_template.xlsx"'},
    )


@router.post("/preview")
async def preview_import(file: UploadFile) -> Response:
    rows, skipped = await read_rows(file)

    return {
        "rows": [row.preview() for row in rows],
        "total": len(rows),
        "skipped": skipped,
    }


@router.post("/")
async def run_import(request: Request, file: UploadFile) -> Response:
    db = request.state.db
    rows, skipped = await read_rows(file)

    async def create(payload: dict) -> dict:
        return await create_msds(db, MsdsPayload(**payload))

    log.info("Importing %d rows from %s (%d skipped)", len(rows), file.filename, skipped)
    results = await upload_rows(rows, create)

    succeeded = sum(result.success for result in results)
    return {
        "results": [asdict(result) for result in results],
        "succeeded": succeeded,
        "failed": len(results) - succeeded,
        "skipped": skipped,
    }
