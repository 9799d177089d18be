"""FastAPI entrypoint for the budget tracker HTTP endpoints."""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from backend.factory import build_transaction_service
from backend.reporting import DashboardReportData, generate_dashboard_report_pdf
from backend.services.transaction_validation import VALIDATION_MESSAGES, parse_list_filters, parse_type
from backend.services.transactions import CREATE_FAILED_MESSAGE, TransactionService
from shared import config as _config
from shared.models import DashboardResult, ToolError, ToolErrorCode, TransactionType, ValidationReason


logger = logging.getLogger(__name__)


_INVALID_TYPE_MESSAGE = VALIDATION_MESSAGES[ValidationReason.INVALID_TYPE]


@lru_cache(maxsize=1)
def get_transaction_service() -> TransactionService:
    """Create and cache the transaction service (and its store) once per process."""

    return build_transaction_service()


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _tool_error_response(error: ToolError) -> JSONResponse:
    status_code = 400 if error.code == ToolErrorCode.VALIDATION_ERROR else 500
    return _error_response(status_code, error.message)


def _resolve_dashboard_type(raw_type: str | None) -> TransactionType | None:
    if raw_type is None or raw_type == "":
        return TransactionType.EXPENSE
    return parse_type(raw_type)


app = FastAPI(title="Budget Tracker API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("cors_allow_origins=%s", ALLOW_ORIGINS)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 envelope for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return _error_response(500, "Internal Server Error")


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.get("/api/transaction")
def list_transactions(
    type: str | None = None,
    category: str | None = None,
    limit: str | None = None,
) -> JSONResponse:
    """Return transactions filtered by type and category, capped by limit, newest first."""

    filters = parse_list_filters(type=type, category=category, limit=limit)
    result = get_transaction_service().list_transactions(filters)
    if isinstance(result, ToolError):
        return _tool_error_response(result)
    return JSONResponse(status_code=200, content=jsonable_encoder(result))


@app.post("/api/transaction")
async def create_transaction(request: Request) -> JSONResponse:
    """Validate and store a new transaction; the store assigns its id."""

    try:
        payload = await request.json()
    except ValueError:
        logger.exception("transaction_create_body_unreadable")
        return _error_response(500, CREATE_FAILED_MESSAGE)

    service = get_transaction_service()
    result = await run_in_threadpool(service.create_transaction, payload)
    if isinstance(result, ToolError):
        return _tool_error_response(result)
    return JSONResponse(status_code=201, content=jsonable_encoder(result))


@app.get("/api/categories")
def list_categories(type: str | None = None) -> JSONResponse:
    """Return the category catalog, optionally restricted to one type."""

    result = get_transaction_service().list_categories(parse_type(type))
    return JSONResponse(status_code=200, content=jsonable_encoder(result))


@app.get("/api/dashboard")
def get_dashboard(type: str | None = None) -> JSONResponse:
    """Return totals, averages and the daily series for one transaction type."""

    transaction_type = _resolve_dashboard_type(type)
    if transaction_type is None:
        return _error_response(400, _INVALID_TYPE_MESSAGE)

    summary = get_transaction_service().dashboard_summary(transaction_type)
    if isinstance(summary, ToolError):
        return _tool_error_response(summary)
    return JSONResponse(status_code=200, content=jsonable_encoder(DashboardResult(data=summary)))


@app.get("/api/reports/dashboard.pdf")
def get_dashboard_report_pdf(type: str | None = None) -> Response:
    transaction_type = _resolve_dashboard_type(type)
    if transaction_type is None:
        return _error_response(400, _INVALID_TYPE_MESSAGE)

    summary = get_transaction_service().dashboard_summary(transaction_type)
    if isinstance(summary, ToolError):
        return _tool_error_response(summary)

    logger.info(
        "dashboard_report_requested type=%s count=%s",
        transaction_type.value,
        summary.count,
    )
    pdf_bytes = generate_dashboard_report_pdf(
        DashboardReportData(summary=summary, generated_on=date.today())
    )
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="dashboard-{transaction_type.value}.pdf"'},
    )
