# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.errors import (
    GENERIC_FAILURE_MESSAGE,
    BackendUnavailableError,
    ExhaustionError,
    StoreError,
    ValidationError,
)
from app.core.logging_config import configure_logging
from app.routers import admin, portal
from app.services.bulk_loader import BulkLoader
from app.services.campaign_service import CampaignService
from app.services.claim_allocator import ClaimAllocator
from app.services.store_selector import StoreSelector, build_selector

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _bad_payload(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request payload.")

    @app.exception_handler(ExhaustionError)
    async def _exhausted(request: Request, exc: ExhaustionError):
        return _error(404, str(exc))

    @app.exception_handler(BackendUnavailableError)
    async def _unavailable(request: Request, exc: BackendUnavailableError):
        logger.warning("Request %s %s failed, backend unavailable: %s", request.method, request.url.path, exc)
        return _error(503, GENERIC_FAILURE_MESSAGE)

    @app.exception_handler(StoreError)
    async def _store_failure(request: Request, exc: StoreError):
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return _error(500, GENERIC_FAILURE_MESSAGE)


def create_app(settings: Optional[Settings] = None, selector: Optional[StoreSelector] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    selector = selector or build_selector(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = await selector.start()
        logger.info("Store state at startup: %s (%s)", state.value, selector.mode)
        yield
        await selector.close()

    app = FastAPI(title="Membership Portal", lifespan=lifespan)
    app.state.settings = settings
    app.state.selector = selector
    app.state.allocator = ClaimAllocator(selector)
    app.state.bulk_loader = BulkLoader(selector)
    app.state.campaign = CampaignService(selector)

    register_error_handlers(app)
    app.include_router(portal.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        return {"message": "Membership portal API is up and running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
