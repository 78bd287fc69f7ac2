"""FastAPI application exposing the school records API."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from .config import LOG_LEVEL, SEED_DEV_DATA, STORAGE_BACKEND
from .db.fixtures import seed_dev_data
from .dependencies import get_records, open_records
from .errors import (
    DependencyExistsError,
    InvalidIdError,
    InvalidReferenceError,
    InvalidTestDataError,
    NotFound,
    RecordsError,
    StorageUnavailable,
    ValidationError,
)
from .routers import ROUTERS
from .schemas import HealthResponse
from .services import SchoolRecords

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=LOG_LEVEL)

ERROR_STATUS: dict[type[RecordsError], int] = {
    InvalidIdError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidReferenceError: status.HTTP_400_BAD_REQUEST,
    DependencyExistsError: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidTestDataError: 422,
}

app = FastAPI(title="School Records Service", version="0.1.0")

for router in ROUTERS:
    app.include_router(router)


@app.on_event("startup")
def startup_event() -> None:  # pragma: no cover - exercised indirectly
    records = open_records(STORAGE_BACKEND)
    if SEED_DEV_DATA:
        seed_dev_data(records)
    app.state.records = records


def _camel(name: str) -> str:
    return to_camel(name) if "_" in name else name


def error_body(exc: RecordsError) -> dict:
    body = exc.to_dict()
    if "field" in body:
        body["field"] = _camel(body["field"])
    if "fields" in body:
        body["fields"] = [_camel(field) for field in body["fields"]]
    return body


@app.exception_handler(RecordsError)
def records_error_handler(request: Request, exc: RecordsError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content=error_body(exc))


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body type errors share the 400 validation_error shape raised by the repositories.
    fields: list[str] = []
    for problem in exc.errors():
        parts = [str(part) for part in problem["loc"] if part != "body"]
        if problem["type"] == "json_invalid" or not parts:
            continue
        field = ".".join(parts)
        if field not in fields:
            fields.append(field)
    if fields:
        error = ValidationError(f"Invalid values for: {', '.join(fields)}", fields)
    else:
        error = ValidationError("Request body must be a JSON object")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(error))


@app.exception_handler(StorageUnavailable)
def storage_error_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    LOGGER.error(
        "Storage unavailable while handling %s %s: %s", request.method, request.url.path, exc
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "storage_unavailable", "detail": "Storage is currently unavailable"},
    )


@app.get("/health", response_model=HealthResponse)
def health_check(records: SchoolRecords = Depends(get_records)) -> HealthResponse:
    return HealthResponse(status="ok", backend=records.backend, counts=records.counts())


__all__ = [
    "app",
    "error_body",
    "health_check",
]
