from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from sortbench.api.errors import invalid_argument
from sortbench.runtime.sorters import SortResult, sort_concurrent, sort_sequential


logger = logging.getLogger(__name__)

router = APIRouter()


class SortRequest(BaseModel):
    to_sort: list[list[StrictInt]] = Field(default_factory=list, description="Batch of integer arrays to sort.")

    @field_validator("to_sort", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        # `null` for the batch or for a sub-array means an empty array.
        if value is None:
            return []
        if isinstance(value, list):
            return [[] if arr is None else arr for arr in value]
        return value


class SortResponse(BaseModel):
    sorted_arrays: list[list[int]]
    time_ns: int = Field(ge=0, description="Wall-clock duration of the sort phase, in nanoseconds.")


async def _decode(request: Request) -> SortRequest:
    # The body is decoded as JSON whatever the Content-Type header says.
    raw = await request.body()
    try:
        return SortRequest.model_validate_json(raw)
    except ValidationError as e:
        raise invalid_argument(e) from e


async def _run(mode: str, sorter: Callable[[list[list[int]]], SortResult], request: Request) -> SortResponse:
    body = await _decode(request)
    result = await run_in_threadpool(sorter, body.to_sort)
    logger.debug("%s: sorted %d arrays in %d ns", mode, len(result.sorted_arrays), result.time_ns)
    return SortResponse(sorted_arrays=result.sorted_arrays, time_ns=result.time_ns)


@router.post("/process-single", response_model=SortResponse)
async def process_single(request: Request) -> SortResponse:
    return await _run("single", sort_sequential, request)


@router.post("/process-concurrent", response_model=SortResponse)
async def process_concurrent(request: Request) -> SortResponse:
    return await _run("concurrent", sort_concurrent, request)
