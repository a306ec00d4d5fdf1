from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.routers import main_router
from app.core.config import settings
from app.core.exceptions import ConfigurationError, MethodNotAllowed, Unauthorized
from app.core.loguru_logger import setup_logging
from app.db.sheets_helper import SheetsHelper
from app.services.counter_store import NicknameCounterStore


def build_counter_store(app: FastAPI) -> None:
    try:
        app.state.counter_store = NicknameCounterStore(SheetsHelper(settings.sheets))
    except ConfigurationError as e:
        logger.error(f"Counter store disabled: {e}")
        app.state.counter_store = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    setup_logging(settings.log)
    build_counter_store(app)

    yield

    # shutdown
    logger.info("shutting down event webhook")

main_app = FastAPI(lifespan=lifespan)
main_app.include_router(
    main_router,
    prefix=settings.api.prefix,
    tags=["api"],
    responses={404: {"description": "Not found"}},
)


@main_app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})


@main_app.exception_handler(MethodNotAllowed)
async def method_not_allowed_handler(request: Request, exc: MethodNotAllowed):
    return JSONResponse(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, content={"error": "Method Not Allowed"})


if __name__ == "__main__":
    uvicorn.run("main:main_app",
                host=settings.run.host,
                port=settings.run.port,
                reload=True
    )
