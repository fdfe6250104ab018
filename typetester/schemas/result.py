"""Pydantic schemas for typing-test results. Wire names are camelCase."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResultSubmitSchema(BaseModel):
    """Raw submission. Values are coerced by the service, not validated here."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    wpm: Any = None
    raw_wpm: Any = None
    accuracy: Any = None
    consistency: Any = None
    chars_correct: Any = None
    chars_wrong: Any = None
    duration: Any = None
    char_errors: Any = None
    wpm_timeline: Any = None


class ResultOutSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int | None
    wpm: float
    raw_wpm: float
    accuracy: float
    consistency: float
    chars_correct: int
    chars_wrong: int
    duration: int
    char_errors: Any
    wpm_timeline: Any
    created_at: datetime


class ResultEnvelopeSchema(BaseModel):
    result: ResultOutSchema


class ResultListSchema(BaseModel):
    results: list[ResultOutSchema]
