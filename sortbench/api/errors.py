from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError


logger = logging.getLogger(__name__)


@dataclass
class APIError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


def error_response(*, status_code: int, code: str, message: str, details: dict[str, Any] | None = None) -> JSONResponse:
    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return JSONResponse(status_code=int(status_code), content=payload)


def describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Render the first decoder error as `<loc>: <msg>` (e.g. `to_sort.0.1: Input should be ...`)."""
    if not errors:
        return "Invalid request body."
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "")
    msg = str(first.get("msg") or "Invalid request body.")
    ctx = first.get("ctx")
    if isinstance(ctx, dict) and ctx.get("error") and str(ctx["error"]) not in msg:
        msg = f"{msg}: {ctx['error']}"
    return f"{loc}: {msg}" if loc else msg


def _json_safe_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    # `ctx` may carry exception instances.
    out: list[dict[str, Any]] = []
    for e in errors:
        item = {k: v for k, v in e.items() if k not in {"ctx", "input", "url"}}
        item["loc"] = [p for p in e.get("loc", ())]
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            item["ctx"] = {k: str(v) for k, v in ctx.items()}
        out.append(item)
    return out


def invalid_argument(exc: ValidationError) -> APIError:
    """Map a request decode failure (bad JSON, wrong shape, non-integers) to a 400."""
    errors = list(exc.errors())
    return APIError(
        status_code=400,
        code="invalid_argument",
        message=describe_validation_errors(errors),
        details={"errors": _json_safe_errors(errors)},
    )


async def api_error_handler(req: Request, exc: APIError) -> JSONResponse:
    logger.debug("%s %s -> %d %s: %s", req.method, req.url.path, exc.status_code, exc.code, exc.message)
    return error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
    )


async def unhandled_error_handler(req: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", req.method, req.url.path)
    return error_response(
        status_code=500,
        code="internal",
        message="Internal server error.",
        details={"type": type(exc).__name__},
    )
