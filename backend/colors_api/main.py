import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from colors_api.api import api_router
from colors_api.config import Settings, get_settings
from colors_api.core.exceptions import ColorsAPIError
from colors_api.db.raw import close_pool, init_pool

# Configure logging - centralized configuration for the entire application
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set third-party loggers to WARNING to reduce noise
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def error_response(message: str | list[str], status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Translate every failure into an {"error": {"message", "status"}} payload."""

    @app.exception_handler(ColorsAPIError)
    async def colors_api_error_handler(request: Request, exc: ColorsAPIError):
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        messages = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        return error_response(messages, status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            exc_info=settings.debug,
        )
        message = str(exc) if settings.debug else "Internal server error"
        return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting Colors API")
        await init_pool(settings)
        yield
        # Shutdown
        logger.info("Shutting down Colors API")
        await close_pool()

    app = FastAPI(
        title="Colors",
        description="User accounts and their color collections",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app, settings)

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {
            "name": "Colors",
            "description": "User accounts and their color collections",
            "version": "0.1.0",
            "docs": "/docs",
        }

    return app


app = create_app()
