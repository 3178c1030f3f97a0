import math
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cobalt.models import (
    ConfigOption,
    MsdsConfigItem,
    MsdsItem,
    MsdsProtectiveEquipment,
    MsdsWarningSymbol,
    ProtectiveEquipment,
    WarningSymbol
)
from cobalt.utils.catalog import RECEPTION_TYPES, catalog_dict
from cobalt.utils.db import insert_ignore

SCALAR_FIELDS = (
    "name",
    "usage",
    "description",
    "msds_no",
    "pdf_file_name",
    "pdf_file_url",
    "warning_label_pdf_url",
    "warning_label_pdf_name",
    "management_guidelines_pdf_url",
    "management_guidelines_pdf_name",
    "qr_code",
)

LINK_FIELDS = ("warning_symbols", "protective_equipment", "reception", "laws")


def unique_strings(values) -> list[str]:
    seen = []
    for value in values or []:
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def expand_reception(values: list[str], locations: dict[str, str]) -> list[str]:
    """Turns stored reception values into display labels.

    A stored value may itself hold several comma-separated location codes. Codes
    are looked up as-is, then zero-padded to two digits; unknown codes are kept.
    """
    reception = []
    for value in values:
        for code in (token.strip() for token in value.split(",")):
            if not code:
                continue
            label = locations.get(code) or locations.get(code.zfill(2)) or code
            if label not in reception:
                reception.append(label)
    return reception


def denormalize(
    item: MsdsItem,
    symbol_ids: list[str],
    equipment_ids: list[str],
    config_items: list[tuple[str, str]],
    symbols: dict[str, dict],
    equipment: dict[str, dict],
    locations: dict[str, str],
) -> dict:
    return {
        "id": item.id,
        **{field: getattr(item, field) or "" for field in SCALAR_FIELDS},
        "warning_symbols": symbol_ids,
        "protective_equipment": equipment_ids,
        "warning_symbols_data": [symbols[i] for i in symbol_ids if i in symbols],
        "protective_equipment_data": [equipment[i] for i in equipment_ids if i in equipment],
        "reception": expand_reception(
            [value for config_type, value in config_items if config_type == "reception"],
            locations,
        ),
        "laws": [value for config_type, value in config_items if config_type == "laws"],
        "created_at": item.created_at.isoformat() if item.created_at else None,
        "updated_at": item.updated_at.isoformat() if item.updated_at else None,
    }


async def _grouped(db: AsyncSession, model, *columns, ids: list[int]) -> dict[int, list]:
    stmt = select(model.msds_id, *columns) \
        .where(model.msds_id.in_(ids)) \
        .order_by(model.id)

    grouped = defaultdict(list)
    for row in await db.execute(stmt):
        msds_id, *values = row
        grouped[msds_id].append(values[0] if len(values) == 1 else tuple(values))
    return grouped


async def _catalog(db: AsyncSession, model, ids: set[str]) -> dict[str, dict]:
    if not ids:
        return {}
    rows = await db.execute(select(model).where(model.id.in_(ids)))
    return {row.id: catalog_dict(row) for row in rows.scalars()}


async def _locations(db: AsyncSession) -> dict[str, str]:
    stmt = select(ConfigOption.value, ConfigOption.label) \
        .where(ConfigOption.type.in_(RECEPTION_TYPES))
    return {value: label for value, label in await db.execute(stmt)}


async def fetch_items(
    db: AsyncSession,
    msds_id: int | None = None,
    ids: list[int] | None = None,
) -> list[dict]:
    """Loads records and joins their link ids back to current reference data.

    Must run inside a transaction.
    """
    stmt = select(MsdsItem) \
        .order_by(MsdsItem.id) \
        .execution_options(populate_existing=True)
    if msds_id is not None:
        stmt = stmt.where(MsdsItem.id == msds_id)
    if ids is not None:
        stmt = stmt.where(MsdsItem.id.in_(ids))

    items = (await db.execute(stmt)).scalars().all()
    if not items:
        return []

    ids = [item.id for item in items]
    symbol_links = await _grouped(db, MsdsWarningSymbol, MsdsWarningSymbol.warning_symbol_id, ids=ids)
    equipment_links = await _grouped(
        db, MsdsProtectiveEquipment, MsdsProtectiveEquipment.protective_equipment_id, ids=ids
    )
    config_links = await _grouped(
        db, MsdsConfigItem, MsdsConfigItem.config_type, MsdsConfigItem.config_value, ids=ids
    )

    symbols = await _catalog(
        db, WarningSymbol, {i for links in symbol_links.values() for i in links}
    )
    equipment = await _catalog(
        db, ProtectiveEquipment, {i for links in equipment_links.values() for i in links}
    )
    locations = await _locations(db)

    return [
        denormalize(
            item,
            symbol_links[item.id],
            equipment_links[item.id],
            config_links[item.id],
            symbols,
            equipment,
            locations,
        )
        for item in items
    ]


async def replace_links(db: AsyncSession, msds_id: int, data: dict) -> None:
    await db.execute(delete(MsdsWarningSymbol).where(MsdsWarningSymbol.msds_id == msds_id))
    await db.execute(delete(MsdsProtectiveEquipment).where(MsdsProtectiveEquipment.msds_id == msds_id))
    await db.execute(delete(MsdsConfigItem).where(MsdsConfigItem.msds_id == msds_id))

    await insert_ignore(
        db,
        MsdsWarningSymbol,
        [
            {"msds_id": msds_id, "warning_symbol_id": symbol_id}
            for symbol_id in unique_strings(data.get("warning_symbols"))
        ],
        ["msds_id", "warning_symbol_id"],
    )
    await insert_ignore(
        db,
        MsdsProtectiveEquipment,
        [
            {"msds_id": msds_id, "protective_equipment_id": equipment_id}
            for equipment_id in unique_strings(data.get("protective_equipment"))
        ],
        ["msds_id", "protective_equipment_id"],
    )
    await insert_ignore(
        db,
        MsdsConfigItem,
        [
            {"msds_id": msds_id, "config_type": config_type, "config_value": value}
            for config_type in ("reception", "laws")
            for value in unique_strings(data.get(config_type))
        ],
        ["msds_id", "config_type", "config_value"],
    )


async def create_item(db: AsyncSession, data: dict) -> int:
    item = MsdsItem(**{field: data.get(field) or "" for field in SCALAR_FIELDS})
    db.add(item)
    await db.flush()

    await replace_links(db, item.id, data)
    return item.id


async def update_item(db: AsyncSession, msds_id: int, fields: dict, links: dict) -> bool:
    """Updates the given scalar fields and replaces every link set."""
    item = await db.get(MsdsItem, msds_id)
    if item is None:
        return False

    for field in SCALAR_FIELDS:
        if field in fields:
            setattr(item, field, fields[field] or "")
    item.updated_at = datetime.now(timezone.utc)
    await db.flush()

    await replace_links(db, msds_id, links)
    return True


async def delete_item(db: AsyncSession, msds_id: int) -> bool:
    item = await db.get(MsdsItem, msds_id)
    if item is None:
        return False

    await replace_links(db, msds_id, {})
    await db.delete(item)
    return True


async def set_file_columns(db: AsyncSession, msds_id: int, **columns: str) -> bool:
    stmt = update(MsdsItem) \
        .where(MsdsItem.id == msds_id) \
        .values(updated_at=datetime.now(timezone.utc), **columns)
    result = await db.execute(stmt)
    return result.rowcount > 0


async def item_exists(db: AsyncSession, msds_id: int) -> bool:
    return await db.get(MsdsItem, msds_id) is not None


def _contains(column, query: str):
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


async def search_ids(db: AsyncSession, query: str) -> list[int]:
    """Ids of records whose name, usage, a law or a reception label contains query."""
    law_matches = select(MsdsConfigItem.msds_id) \
        .where(MsdsConfigItem.config_type == "laws") \
        .where(_contains(MsdsConfigItem.config_value, query))
    stmt = select(MsdsItem.id).where(or_(
        _contains(MsdsItem.name, query),
        _contains(MsdsItem.usage, query),
        MsdsItem.id.in_(law_matches),
    ))
    found = set((await db.execute(stmt)).scalars())

    # Reception labels only exist after code expansion, so they are matched here
    locations = await _locations(db)
    needle = query.lower()
    stmt = select(MsdsConfigItem.msds_id, MsdsConfigItem.config_value) \
        .where(MsdsConfigItem.config_type == "reception")
    for msds_id, value in await db.execute(stmt):
        if msds_id in found:
            continue
        if any(needle in label.lower() for label in expand_reception([value], locations)):
            found.add(msds_id)

    return sorted(found)


async def list_page(db: AsyncSession, query: str | None, page: int, page_size: int) -> dict:
    """One page of denormalized records in id order, optionally narrowed by a search.

    A page past the end clamps to the last page. Must run inside a transaction.
    """
    query = (query or "").strip()
    if query:
        matched = await search_ids(db, query)
        total = len(matched)
    else:
        total = await db.scalar(select(func.count(MsdsItem.id)))

    pages = math.ceil(total / page_size) if total else 0
    page = max(1, min(page, pages or 1))
    start = (page - 1) * page_size

    if query:
        ids = matched[start:start + page_size]
    else:
        stmt = select(MsdsItem.id) \
            .order_by(MsdsItem.id) \
            .offset(start) \
            .limit(page_size)
        ids = list((await db.execute(stmt)).scalars())

    return {
        "items": await fetch_items(db, ids=ids) if ids else [],
        "total": total,
        "page": page,
        "page_size": page_size,
        "pages": pages,
    }
