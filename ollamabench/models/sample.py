"""Timing sample models for ollamabench."""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

# Ollama reports nanosecond fractions; datetime holds microseconds
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


class TimingSample(BaseModel):
    """Telemetry of one completed generation request.

    All durations are nanoseconds as reported by the server.
    """

    model: str
    prompt: str
    created_at: datetime
    response: str = ""
    done: bool

    total_duration: int = Field(ge=0)
    load_duration: int = Field(default=0, ge=0)
    prompt_eval_count: int = Field(default=0, ge=0)
    prompt_eval_duration: int = Field(default=0, ge=0)
    eval_count: int = Field(ge=0)
    eval_duration: int = Field(ge=0)

    @field_validator("created_at", mode="before")
    @classmethod
    def _trim_fraction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _EXCESS_FRACTION.sub(r"\1", value, count=1)
        return value

    @field_validator("load_duration", "prompt_eval_count", "prompt_eval_duration", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @classmethod
    def from_response(cls, data: dict[str, Any], prompt: str) -> "TimingSample":
        """Build a sample from a raw /api/generate payload.

        Raises pydantic.ValidationError if the payload is malformed.
        """
        return cls.model_validate({**data, "prompt": prompt})
