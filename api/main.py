import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from di.container import ApplicationContainer as DependencyContainer
from api.shared.dtos import ErrorResponse, HealthCheckResponse
from api.shared.exceptions import MarketplaceException
from core.settings import SETTINGS

# Configure logging
logging.basicConfig(
    level=SETTINGS.APP.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("marketplace")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    events = _app.container.infrastructure.logger()
    start_time = time.time()

    try:
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        async with db_resource.engine.begin() as _conn:
            await _conn.execute(text("SELECT 1"))
        events.info("startup.database_ready", elapsed=round(time.time() - start_time, 2))
    except Exception as e:
        logger.exception(f"Failed to initialize application: {str(e)}")
        raise

    yield

    try:
        db_resource = _app.container.infrastructure.database()
        if db_resource:
            await db_resource.shutdown()
        events.info("shutdown.complete")
    except Exception as e:
        logger.exception(f"Error during shutdown: {str(e)}")


def create_fastapi_app() -> CustomFastAPI:
    _app = CustomFastAPI(
        title="Marketplace API",
        description="Classifieds marketplace: users and private messaging",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Initialize dependency container
    _app.container = DependencyContainer()
    _app.container.wire(modules=[sys.modules[__name__]])
    _app.container.init_resources()

    # The mobile client calls the API from arbitrary origins
    _app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include feature routers
    from api.features.messages.router import router as messages_router
    from api.features.users.router import router as users_router

    _app.include_router(users_router, prefix="/api/users", tags=["Users"])
    _app.include_router(messages_router, prefix="/api/messages", tags=["Messages"])

    return _app


app = create_fastapi_app()


@app.get("/")
async def root():
    return {"message": "Marketplace API is running", "status": "ok"}


@app.get("/api/health", response_model=HealthCheckResponse)
async def health():
    return HealthCheckResponse(status="OK")


def _error_response(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True),
    )


# Exception handlers
@app.exception_handler(MarketplaceException)
async def marketplace_exception_handler(request: Request, exc: MarketplaceException):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(
        exc.status_code,
        ErrorResponse(error=exc.message, error_code=exc.error_code, details=exc.details),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error_response(
        422,
        ErrorResponse(
            error="Validation Error",
            error_code="REQUEST_VALIDATION_ERROR",
            details={"errors": jsonable_encoder(exc.errors())},
        ),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {str(exc)}")
    return _error_response(
        500,
        ErrorResponse(
            error="An unexpected error occurred", error_code="INTERNAL_ERROR"
        ),
    )
