import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, field_validator
from starlette.responses import StreamingResponse

from cobalt.constants import DEFAULT_PAGE_SIZE
from cobalt.utils import msds as records
from cobalt.utils.qr import msds_detail_url, qr_data_uri, qr_png

log = logging.getLogger("cobalt.msds")

router = APIRouter(prefix="/msds")


class MsdsPayload(BaseModel):
    name: str
    usage: str = ""
    description: str = ""
    msds_no: str = ""
    pdf_file_name: str = ""
    pdf_file_url: str = ""
    warning_label_pdf_url: str = ""
    warning_label_pdf_name: str = ""
    management_guidelines_pdf_url: str = ""
    management_guidelines_pdf_name: str = ""
    qr_code: str = ""
    warning_symbols: list[str] = []
    protective_equipment: list[str] = []
    reception: list[str] = []
    laws: list[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: str) -> str:
        if not name.strip():
            raise ValueError("Name is required")
        return name.strip()

    @field_validator("warning_symbols", "protective_equipment", "reception", "laws", mode="before")
    @classmethod
    def coerce_ids(cls, values):
        # Older clients send numeric ids
        if values is None:
            return []
        return [str(value) for value in values]


async def create_msds(db, payload: MsdsPayload) -> dict:
    async with db.begin():
        msds_id = await records.create_item(db, payload.model_dump())

    async with db.begin():
        item, = await records.fetch_items(db, msds_id)

    log.info("Created MSDS %d (%s)", msds_id, item["name"])
    return item


@router.get("/")
async def list_msds(
    request: Request,
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=500),
) -> Response:
    db = request.state.db

    async with db.begin():
        return await records.list_page(db, q, page, page_size)


@router.post("/", status_code=201)
async def post_msds(request: Request, payload: MsdsPayload) -> Response:
    return {"success": True, "data": await create_msds(request.state.db, payload)}


@router.get("/{msds_id}")
async def get_msds(request: Request, msds_id: int) -> Response:
    db = request.state.db

    async with db.begin():
        items = await records.fetch_items(db, msds_id)

    if not items:
        raise HTTPException(status_code=404, detail="MSDS not found")

    return items[0]


@router.put("/{msds_id}")
async def put_msds(request: Request, msds_id: int, payload: MsdsPayload) -> Response:
    db = request.state.db

    async with db.begin():
        updated = await records.update_item(
            db,
            msds_id,
            payload.model_dump(exclude_unset=True),
            payload.model_dump(include=set(records.LINK_FIELDS)),
        )
        if not updated:
            raise HTTPException(status_code=404, detail="MSDS not found")

    async with db.begin():
        item, = await records.fetch_items(db, msds_id)

    return {"success": True, "data": item}


@router.delete("/{msds_id}")
async def delete_msds(request: Request, msds_id: int) -> Response:
    db = request.state.db

    async with db.begin():
        if not await records.delete_item(db, msds_id):
            raise HTTPException(status_code=404, detail="MSDS not found")

    log.info("Deleted MSDS %d", msds_id)
    return {"success": True}


@router.get("/{msds_id}/qr")
async def get_msds_qr(request: Request, msds_id: int, size: int = Query(300, ge=64, le=2048)) -> Response:
    db = request.state.db

    async with db.begin():
        if not await records.item_exists(db, msds_id):
            raise HTTPException(status_code=404, detail="MSDS not found")

    return StreamingResponse(content=qr_png(msds_detail_url(msds_id), size), media_type="image/png")


@router.get("/{msds_id}/qr/label", response_class=HTMLResponse)
async def get_msds_qr_label(request: Request, msds_id: int) -> Response:
    db = request.state.db

    async with db.begin():
        items = await records.fetch_items(db, msds_id)

    if not items:
        raise HTTPException(status_code=404, detail="MSDS not found")

    item = items[0]
    url = msds_detail_url(msds_id)

    return HTMLResponse(request.state.templater.render_label({
        "id": item["id"],
        "name": item["name"],
        "usage": item["usage"],
        "url": url,
        "size": 200,
        "qr_image": qr_data_uri(url, 200),
    }))
