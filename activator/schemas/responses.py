from typing import Any, Literal

from pydantic import BaseModel, Field


class CreatedOut(BaseModel):
    status: Literal["created"] = "created"


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class ErrorOut(BaseModel):
    error: str = Field(..., description="Human readable reason")
    details: Any = None


ERROR_RESPONSES = {
    code: {"model": ErrorOut} for code in (400, 403, 404, 429, 500, 502)
}
