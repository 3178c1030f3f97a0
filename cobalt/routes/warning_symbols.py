from cobalt.defaults import DEFAULT_WARNING_SYMBOLS
from cobalt.models import MsdsWarningSymbol, WarningSymbol
from cobalt.routes.catalog import catalog_router

router = catalog_router(
    prefix="/warning-symbols",
    model=WarningSymbol,
    link_model=MsdsWarningSymbol,
    link_column="warning_symbol_id",
    defaults=DEFAULT_WARNING_SYMBOLS,
    default_category="physical",
    label="warning symbol",
)
