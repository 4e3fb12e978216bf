"""
Book Catalog API application.

    uvicorn bookcatalog.main:app --port 4000

create_app() wires together:
- a lifespan that refuses to start while the database is unreachable
- slowapi rate limiting and CORS middleware
- error handlers that turn CatalogError into {"detail": ...} responses and
  request validation failures into 400s
- the users, reviews and books routers plus /health and /
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError

from bookcatalog import __version__
from bookcatalog.config import get_settings
from bookcatalog.database import check_database_connection, engine
from bookcatalog.exceptions import CatalogError
from bookcatalog.routers import books_router, reviews_router, users_router
from bookcatalog.services.rate_limiter import limiter, rate_limit_exceeded_handler

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_DESCRIPTION = """
Catalog books and collect reader reviews.

* **Users** register and log in to get a bearer token.
* **Books** can be listed and read by anyone; changing them needs a token.
* **Reviews** rate a book from 1 to 5 stars. Each book carries the running
  average of its ratings.

Send `Authorization: Bearer <token>` (from `POST /users/login`) on every
request that modifies data.
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(f"Starting {settings.app_name} {__version__} ({settings.environment})")

    try:
        check_database_connection()
    except SQLAlchemyError:
        logger.critical("Database unreachable at startup, refusing to start", exc_info=True)
        raise

    yield

    logger.info(f"Shutting down {settings.app_name}")
    engine.dispose()


def _server_error(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses.

    | Exception              | Status             | Body                                  |
    |------------------------|--------------------|---------------------------------------|
    | CatalogError subclass  | exc.status_code    | {"detail": message}                   |
    | RequestValidationError | 400                | {"detail": "Validation failed", ...}  |
    | SQLAlchemyError        | 500                | generic message, details only in logs |
    | anything else          | 500                | generic message unless DEBUG          |
    """

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Validation failed",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return _server_error("A database error occurred. Please try again later.")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return _server_error(str(exc) if settings.debug else "An internal error occurred.")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(users_router)
    # /books/reviews/{review_id} has to be matched before /books/{book_id}
    app.include_router(reviews_router)
    app.include_router(books_router)

    @app.get("/health", tags=["Health"], summary="Health check")
    def health_check() -> dict:
        """Report whether the API can reach its database."""
        try:
            check_database_connection()
            database = "connected"
        except SQLAlchemyError as e:
            logger.error(f"Health check database error: {e}")
            database = "unreachable"

        return {
            "status": "healthy" if database == "connected" else "degraded",
            "version": __version__,
            "database": database,
            "rate_limiting": settings.rate_limit_enabled,
        }

    @app.get("/", tags=["Root"], summary="API root")
    async def root() -> dict:
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bookcatalog.main:app", host=settings.host, port=settings.port, reload=settings.debug)
