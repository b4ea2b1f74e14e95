"""API schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]


class RecordRequest(BaseModel):
    """POST body: `value` is recorded; any other member must also be an int64."""

    model_config = ConfigDict(extra="allow")

    __pydantic_extra__: dict[str, Int64]

    value: Int64


class SumResponse(BaseModel):
    value: int


class HealthResponse(BaseModel):
    status: str
    buckets: int
