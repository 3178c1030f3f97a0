from cobalt.routes import (
    config_options,
    healthcheck,
    imports,
    msds,
    protective_equipment,
    upload,
    warning_symbols
)

__all__ = ["routers"]

routers = [
    healthcheck.router,
    imports.router,
    msds.router,
    warning_symbols.router,
    protective_equipment.router,
    config_options.router,
    upload.router,
]
