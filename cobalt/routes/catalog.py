"""Shared CRUD routes for the warning symbol and protective equipment catalogs."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, field_validator
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cobalt.utils.catalog import catalog_dict

log = logging.getLogger("cobalt.catalog")


class CatalogItemCreate(BaseModel):
    id: str
    name: str
    description: str = ""
    image_url: str = "/placeholder.svg"
    category: Optional[str] = None
    is_active: bool = True

    @field_validator("id", "name")
    @classmethod
    def validate_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name and ID are required")
        return value.strip()


class CatalogItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[str]:
        if name is not None and not name.strip():
            raise ValueError("Name cannot be blank")
        return name.strip() if name is not None else None


def catalog_router(
    *,
    prefix: str,
    model,
    link_model,
    link_column: str,
    defaults: list[dict],
    default_category: str,
    label: str,
) -> APIRouter:
    router = APIRouter(prefix=prefix)

    @router.get("/")
    async def list_items(request: Request) -> Response:
        db = request.state.db

        try:
            async with db.begin():
                stmt = select(model).order_by(model.name)
                rows = (await db.execute(stmt)).scalars().all()
        except (SQLAlchemyError, OSError) as exc:
            log.warning("Falling back to default %s: %s", label, exc)
            return defaults

        if not rows:
            return defaults

        return [catalog_dict(row) for row in rows]

    @router.get("/{item_id}")
    async def get_item(request: Request, item_id: str) -> Response:
        db = request.state.db

        async with db.begin():
            row = await db.get(model, item_id)

        if row is None:
            raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")

        return catalog_dict(row)

    @router.post("/", status_code=201)
    async def create_item(request: Request, payload: CatalogItemCreate) -> Response:
        db = request.state.db

        row = model(**payload.model_dump())
        row.category = payload.category or default_category

        try:
            async with db.begin():
                db.add(row)
        except IntegrityError:
            raise HTTPException(status_code=409, detail=f"{label.capitalize()} {payload.id!r} already exists")

        log.info("Created %s %s", label, row.id)
        return {"success": True, "data": catalog_dict(row)}

    @router.put("/{item_id}")
    async def update_item(request: Request, item_id: str, payload: CatalogItemUpdate) -> Response:
        db = request.state.db

        async with db.begin():
            row = await db.get(model, item_id)
            if row is None:
                raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")

            for field, value in payload.model_dump(exclude_none=True).items():
                setattr(row, field, value)

        return catalog_dict(row)

    @router.delete("/{item_id}")
    async def delete_item(request: Request, item_id: str) -> Response:
        db = request.state.db

        async with db.begin():
            row = await db.get(model, item_id)
            if row is None:
                raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")

            await db.execute(delete(link_model).where(getattr(link_model, link_column) == item_id))
            await db.delete(row)

        log.info("Deleted %s %s", label, item_id)
        return {"success": True}

    return router
