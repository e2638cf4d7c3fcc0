from __future__ import annotations

from fastapi import FastAPI

from sortbench.api.errors import APIError, api_error_handler, unhandled_error_handler

from .routers.health import router as health_router
from .routers.sort import router as sort_router


def create_app() -> FastAPI:
    app = FastAPI(title="sortbench API", version="0.1.0")

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # The sort endpoints live at the root; their paths are part of the public contract.
    app.include_router(sort_router, tags=["sort"])
    app.include_router(health_router, tags=["system"])

    return app


app = create_app()
