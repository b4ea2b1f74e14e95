"""Metric API routes."""

from __future__ import annotations

import re

import structlog
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from rollsum.api.deps import get_accumulator
from rollsum.api.schemas import RecordRequest, SumResponse
from rollsum.services.accumulator import Accumulator

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["metrics"])

CONTENT_TYPE = "application/json"
ALLOWED_METHODS = ("GET", "POST")

# keys are ASCII word characters only; paths must match in full
_SUM_PATH = re.compile(r"/metric/([A-Za-z0-9_]+)/sum")
_RECORD_PATH = re.compile(r"/metric/([A-Za-z0-9_]+)")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": f"Error: {message}"})


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    if err.get("type") == "missing" and loc == "value":
        return "JSON must contain key named 'value'"
    if err.get("type") == "json_invalid":
        return f"invalid JSON: {err.get('msg')}"
    return f"invalid JSON: {loc or 'body'}: {err.get('msg')}"


async def metric_method_guard(request: Request, call_next):
    """Answer 405 for any method other than GET/POST under /metric/."""
    if request.url.path.startswith("/metric/") and request.method not in ALLOWED_METHODS:
        return Response(status_code=405, headers={"Allow": ", ".join(ALLOWED_METHODS)})
    return await call_next(request)


@router.api_route(
    "/metric/{rest:path}",
    methods=list(ALLOWED_METHODS),
    include_in_schema=False,
)
async def metric_endpoint(
    request: Request,
    accumulator: Accumulator = Depends(get_accumulator),
):
    if request.headers.get("content-type") != CONTENT_TYPE:
        logger.debug("rejected_content_type", path=request.url.path)
        return _error(400, f"content-type MUST be {CONTENT_TYPE}")

    if request.method == "GET":
        return _get_sum(request.url.path, accumulator)
    return _post_record(request.url.path, await request.body(), accumulator)


def _get_sum(path: str, accumulator: Accumulator):
    match = _SUM_PATH.fullmatch(path)
    if match is None:
        return _error(404, "legal GET urls look like '/metric/{key}/sum'")

    total = accumulator.sum(match.group(1))
    return SumResponse(value=total)


def _post_record(path: str, body: bytes, accumulator: Accumulator):
    match = _RECORD_PATH.fullmatch(path)
    if match is None:
        return _error(404, "legal POST urls look like '/metric/{key}'")

    try:
        payload = RecordRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.debug("rejected_body", path=path, errors=exc.error_count())
        return _error(400, _validation_message(exc))

    accumulator.record(match.group(1), payload.value)
    return {}
