from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crucible.api.routes_solve import router as solve_router
from crucible.core.config import get_settings
from crucible.core.errors import install_error_handlers
from crucible.core.solve_runtime import solve_slots


def create_app() -> FastAPI:
    settings = get_settings()
    solve_slots.configure(max_concurrent=settings.solve_max_concurrent)
    app = FastAPI(
        title="Crucible Route Cost API",
        version="0.1.0",
        description="Minimum heat-loss search over digit grids with run-length limits.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    app.include_router(solve_router, prefix="/v1")

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
