"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
      or: classifieds-api   (uvloop + uvicorn, see serve())
"""

import logging

import uvicorn
import uvloop
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bootstrap import Services, build_services
from src.cm_admin.api.router import router as admin_router
from src.cm_ads.api.router import router as ads_router
from src.cm_common.errors import AppError
from src.cm_common.response import error_response
from src.cm_gateway.api.router import router as auth_router
from src.cm_gateway.middleware.request_log import RequestLogMiddleware
from src.cm_points.api.router import router as points_router
from src.cm_promotion.api.router import router as promotion_router
from src.cm_verification.api.router import router as verification_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(services: Services | None = None) -> FastAPI:
    """Build an app around `services`, or a fresh in-memory set from settings."""
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        debug=settings.DEBUG,
    )
    app.state.services = services if services is not None else build_services(settings)

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        resp = error_response(exc.code, exc.message, request)
        return JSONResponse(
            status_code=exc.http_status,
            content=resp.model_dump(),
        )

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(verification_router, prefix="/api/v1")
    app.include_router(points_router, prefix="/api/v1")
    app.include_router(ads_router, prefix="/api/v1")
    app.include_router(promotion_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": "0.1.0"}

    if settings.dev_code_disclosure_enabled:
        logger.warning("EXPOSE_DEV_CODES is on: undelivered mobile codes are returned to clients")
    return app


app = create_app()


def serve() -> None:
    config = uvicorn.Config(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    uvloop.run(uvicorn.Server(config).serve())


if __name__ == "__main__":
    serve()
