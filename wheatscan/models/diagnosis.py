from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class DiagnosisSuccess(BaseModel):
    kind: Literal["success"] = "success"
    label: str | None = None  # None when the response carried no label

    @property
    def ok(self) -> bool:
        return True


class DiagnosisFailure(BaseModel):
    """The service answered non-2xx (``api``) or the call itself failed (``transport``)."""

    kind: Literal["failure"] = "failure"
    message: str
    category: Literal["api", "transport"] = "api"

    @property
    def ok(self) -> bool:
        return False


DiagnosisResult = Annotated[Union[DiagnosisSuccess, DiagnosisFailure], Field(discriminator="kind")]
