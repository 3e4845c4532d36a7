"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import router as api_router
from app.core.config import settings
from app.core.errors import ServiceError, StoreError
from app.schemas.common import STATUS_FAILURE

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

# Framework defaults for a path (or method) no route matches.
UNMATCHED_ROUTE_DETAILS = frozenset({"Not Found", "Method Not Allowed"})

app = FastAPI(
    title="Postboard API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


def _failure_body(message: str) -> dict[str, str]:
    return {"status": STATUS_FAILURE, "message": message}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {status, message}; unmatched routes get a plain-text 404."""
    if (
        exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED)
        and isinstance(exc.detail, str)
        and exc.detail in UNMATCHED_ROUTE_DETAILS
    ):
        return PlainTextResponse(
            f"{request.method} Route {request.url.path} not found !",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    if isinstance(exc.detail, dict):
        body = exc.detail
    else:
        body = _failure_body(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed body, path or query parameters."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_failure_body("; ".join(problems) or "invalid request"),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Service errors no route maps to a specific status end up as 500 failures."""
    log = logger.error if isinstance(exc, StoreError) else logger.warning
    log("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_failure_body(exc.message),
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_failure_body(message),
    )


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Postboard API"}
