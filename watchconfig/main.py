from __future__ import annotations

import logging

from fastapi import FastAPI

from .env_settings import EnvSettings, get_env
from .log_config import setup_logging
from .routers import schemas
from .schema import SchemaCatalog

log = logging.getLogger(__name__)


def create_app(catalog: SchemaCatalog | None = None, env: EnvSettings | None = None) -> FastAPI:
    """Build the API; the catalog is loaded once here and kept on app.state."""

    env = env or get_env()
    if catalog is None:
        setup_logging(level=env.log_level, log_dir=env.log_dir, retention_days=env.log_retention_days)
        extra = [env.schema_dir] if (env.schema_dir or "").strip() else []
        catalog = SchemaCatalog.load(extra_dirs=extra, skip_unknown=env.skip_unknown_fields)

    app = FastAPI(title="Watch face settings")
    app.state.catalog = catalog
    app.include_router(schemas.router)
    log.info("API ready with %d settings page(s)", len(catalog))
    return app
