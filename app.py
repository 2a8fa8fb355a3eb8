"""
Handover Notes API application setup.

- Loads `.env` and configures logging
- Registers route modules from `routes/*`
- Translates domain errors into JSON error responses
- Creates database tables on startup
"""

import logging

from dotenv import load_dotenv  # type: ignore
from fastapi import FastAPI, Request  # type: ignore
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

# ───────────────────── env / init ─────────────────────
load_dotenv()

from config import get_config  # noqa: E402
from logging_config import configure_logging  # noqa: E402
from shared.exceptions import HandoverAppError, create_error_response  # noqa: E402

from routes.handover import router as handover_router  # noqa: E402

_LOG = logging.getLogger("handover.startup")


def create_app() -> FastAPI:
    config = get_config()
    configure_logging()

    problems = config.validate()
    for problem in problems:
        _LOG.warning("Configuration problem: %s", problem)

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Handover notes between employees",
        debug=config.debug,
    )

    if config.api.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.api.allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(handover_router, prefix=config.api.prefix)

    @app.exception_handler(HandoverAppError)
    def _handle_app_error(request: Request, exc: HandoverAppError) -> JSONResponse:
        if exc.http_status >= 500:
            _LOG.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.http_status,
            content=create_error_response(exc, include_details=config.debug),
        )

    @app.on_event("startup")
    def _init_database() -> None:
        from core.persistence import init_db_if_configured
        if init_db_if_configured():
            _LOG.info("Database tables ready")

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok", "version": app.version}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
