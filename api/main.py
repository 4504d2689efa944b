"""
FastAPI main application for the Book Catalog API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from api.config import config as api_config
from api.models import ErrorResponse, HealthResponse
from api.service import CatalogService
from catalog.errors import CatalogError
from catalog.models import Book, BookPayload
from catalog.query import BookQuery, PaginationPolicy
from catalog.store import BookStore
from utilities.config import config
from utilities.logger import setup_logging

logger = structlog.get_logger(__name__)

# Process-wide catalog, starts empty
catalog_service = CatalogService(
    BookStore(),
    pagination_policy=PaginationPolicy(config.pagination_bounds)
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info(
        "Starting Book Catalog API",
        pagination_bounds=catalog_service.pagination_policy.value
    )

    yield

    logger.info("Shutting down Book Catalog API")


def get_catalog_service() -> CatalogService:
    """Dependency returning the process-wide catalog service."""
    return catalog_service


app = FastAPI(
    title=api_config.api_title,
    description="""
    A small REST API for keeping track of books and how far along you are with them.

    ## Features

    * **Books**: Create books with a generated identifier and delete them
    * **Reading status**: Move a book between `unread`, `reading` and `completed`
    * **Listing**: Filter by status, ordered by title, with `offset` and `limit` paging

    ## Errors

    Every rejected request returns status 400 with an `error` message.
    """,
    version=api_config.api_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.detail,
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def _bad_request(e: CatalogError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@app.get("/", response_class=PlainTextResponse, tags=["Health"])
async def root():
    """Welcome message."""
    return "Welcome to the book catalog"


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(service: CatalogService = Depends(get_catalog_service)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        **service.stats()
    )


# Books endpoints
@app.post("/books", response_model=Book, tags=["Books"])
async def create_book(
    request: Request,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Create a book.

    The body must contain `title`, `author` and `status`. The identifier
    is generated by the server and must not be sent.
    """
    try:
        payload = BookPayload.decode(await request.body())
        return service.create_book(payload)
    except CatalogError as e:
        raise _bad_request(e)


@app.get("/books", response_model=List[Book], tags=["Books"])
async def list_books(
    status_filter: Optional[str] = Query(None, alias="status"),
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    List books ordered by title.

    - **status**: Keep only books with this exact status
    - **offset**: Skip this many books (must be above 0 and below the number of books)
    - **limit**: Return at most this many books (must be above 0 and below the number left)
    """
    try:
        query = BookQuery.from_request(status=status_filter, offset=offset, limit=limit)
        return service.list_books(query)
    except CatalogError as e:
        raise _bad_request(e)


@app.get("/books/{book_id}", response_model=Book, tags=["Books"])
async def get_book(
    book_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """Get a single book by ID."""
    try:
        return service.get_book(book_id)
    except CatalogError as e:
        raise _bad_request(e)


@app.put("/books/{book_id}", response_model=Book, tags=["Books"])
async def update_book(
    book_id: str,
    request: Request,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Update the reading status of a book.

    The body must contain only `status`.
    """
    try:
        payload = BookPayload.decode(await request.body())
        return service.update_book_status(book_id, payload)
    except CatalogError as e:
        raise _bad_request(e)


@app.delete("/books/{book_id}", response_model=Book, tags=["Books"])
async def delete_book(
    book_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """Delete a book by ID."""
    try:
        return service.delete_book(book_id)
    except CatalogError as e:
        raise _bad_request(e)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=api_config.debug,
        log_level="info"
    )
