import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, field_validator
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from cobalt.defaults import DEFAULT_CONFIG_OPTIONS
from cobalt.models import ConfigOption
from cobalt.utils.catalog import config_option_dict, slugify

log = logging.getLogger("cobalt.config")

router = APIRouter(prefix="/config-options")


class ConfigOptionCreate(BaseModel):
    type: str
    label: str
    value: Optional[str] = None
    is_active: bool = True

    @field_validator("type", "label")
    @classmethod
    def validate_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Label and type are required")
        return value.strip()


class ConfigOptionUpdate(BaseModel):
    label: Optional[str] = None
    value: Optional[str] = None
    is_active: Optional[bool] = None


@router.get("/")
async def list_config_options(request: Request, type: Optional[str] = None) -> Response:
    db = request.state.db
    defaults = [option for option in DEFAULT_CONFIG_OPTIONS if type is None or option["type"] == type]

    try:
        async with db.begin():
            stmt = select(ConfigOption) \
                .where(ConfigOption.is_active.is_(True)) \
                .order_by(ConfigOption.type, ConfigOption.label)
            if type is not None:
                stmt = stmt.where(ConfigOption.type == type)
            rows = (await db.execute(stmt)).scalars().all()
    except (SQLAlchemyError, OSError) as exc:
        log.warning("Falling back to default config options: %s", exc)
        return defaults

    if not rows:
        return defaults

    return [config_option_dict(row) for row in rows]


@router.post("/", status_code=201)
async def create_config_option(request: Request, payload: ConfigOptionCreate) -> Response:
    db = request.state.db

    option = ConfigOption(
        type=payload.type,
        value=(payload.value or "").strip() or slugify(payload.label),
        label=payload.label,
        is_active=payload.is_active,
    )

    try:
        async with db.begin():
            db.add(option)
    except IntegrityError:
        raise HTTPException(
            status_code=409,
            detail=f"Config option {option.type}/{option.value} already exists",
        )

    return {"success": True, "data": config_option_dict(option)}


@router.put("/{option_id}")
async def update_config_option(request: Request, option_id: int, payload: ConfigOptionUpdate) -> Response:
    db = request.state.db

    try:
        async with db.begin():
            option = await db.get(ConfigOption, option_id)
            if option is None:
                raise HTTPException(status_code=404, detail="Config option not found")

            for field, value in payload.model_dump(exclude_none=True).items():
                setattr(option, field, value)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Config option value already in use")

    return config_option_dict(option)


@router.delete("/{option_id}")
async def delete_config_option(request: Request, option_id: int) -> Response:
    db = request.state.db

    async with db.begin():
        option = await db.get(ConfigOption, option_id)
        if option is None:
            raise HTTPException(status_code=404, detail="Config option not found")

        await db.delete(option)

    return {"success": True}
