"""Record types held by the course state (notation, assumptions, lectures, objectives)."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

BloomLevel = Literal["remember", "understand", "apply", "analyze", "evaluate", "create"]


class StateRecord(BaseModel):
    """Base model that reads and writes the camelCase keys of the state document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LearningObjective(StateRecord):
    id: str
    description: str
    level: BloomLevel = "understand"
    lecture_number: Optional[int] = Field(default=None, ge=1)


class NotationEntry(StateRecord):
    """One write to the notation registry."""

    symbol: str
    meaning: str
    introduced_in: int = Field(..., ge=1, description="Lecture number that introduced the symbol.")
    context: Optional[str] = None

    @field_validator("symbol", "meaning", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class Assumption(StateRecord):
    id: str
    description: str
    introduced_in: int = Field(..., ge=1)
    valid_from: int = Field(..., ge=1)
    valid_to: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_range(self) -> "Assumption":
        if self.valid_to is not None and self.valid_from > self.valid_to:
            raise ValueError(f"Assumption {self.id} has validFrom {self.valid_from} after validTo {self.valid_to}")
        return self

    def active_in(self, lecture_number: int) -> bool:
        return self.valid_from <= lecture_number and (self.valid_to is None or self.valid_to >= lecture_number)


class LectureMetadata(StateRecord):
    number: int = Field(..., ge=1)
    title: str = ""
    objectives: List[str] = Field(default_factory=list)
    prerequisites: List[str] = Field(default_factory=list)
    notation_introduced: List[str] = Field(default_factory=list)
    assumptions_introduced: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)

    @field_validator("notation_introduced", "assumptions_introduced", mode="after")
    @classmethod
    def dedupe(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))


__all__ = [
    "Assumption",
    "BloomLevel",
    "LearningObjective",
    "LectureMetadata",
    "NotationEntry",
    "StateRecord",
]
