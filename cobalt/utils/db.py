import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from cobalt.defaults import (
    DEFAULT_CONFIG_OPTIONS,
    DEFAULT_PROTECTIVE_EQUIPMENT,
    DEFAULT_WARNING_SYMBOLS
)
from cobalt.models import ConfigOption, ProtectiveEquipment, WarningSymbol

log = logging.getLogger("cobalt.db")


def insert(db: AsyncSession, model):
    """Dialect-specific INSERT construct, so callers can use ON CONFLICT clauses."""
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert(model)
    return postgresql.insert(model)


async def insert_ignore(db: AsyncSession, model, rows: list[dict], index_elements: list[str]) -> None:
    if not rows:
        return

    stmt = insert(db, model) \
        .values(rows) \
        .on_conflict_do_nothing(index_elements=index_elements)
    await db.execute(stmt)


async def seed_defaults(db: AsyncSession) -> None:
    """Upserts the built-in catalogs; rows already present are left untouched."""
    async with db.begin():
        await insert_ignore(db, WarningSymbol, DEFAULT_WARNING_SYMBOLS, ["id"])
        await insert_ignore(db, ProtectiveEquipment, DEFAULT_PROTECTIVE_EQUIPMENT, ["id"])
        await insert_ignore(
            db,
            ConfigOption,
            [{k: v for k, v in option.items() if k != "id"} for option in DEFAULT_CONFIG_OPTIONS],
            ["type", "value"],
        )

    log.info(
        "Seeded %d warning symbols, %d protective equipment, %d config options",
        len(DEFAULT_WARNING_SYMBOLS),
        len(DEFAULT_PROTECTIVE_EQUIPMENT),
        len(DEFAULT_CONFIG_OPTIONS),
    )
