"""Pydantic schema for per-user aggregate stats."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StatsOutSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    best_wpm: float = 0
    avg_wpm: int = 0
    avg10_wpm: int = Field(default=0, alias="avg10Wpm")
    best_accuracy: float = 0
    avg_accuracy: float = 0
    total_tests: int = 0
    total_time_seconds: int = 0
    total_chars_typed: int = 0
