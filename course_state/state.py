"""Course state aggregate: syllabus, notation log, assumptions and lecture metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field, field_serializer, field_validator

from econta.core.config import Language

from .models import (
    Assumption,
    BloomLevel,
    LearningObjective,
    LectureMetadata,
    NotationEntry,
    StateRecord,
)


@dataclass(frozen=True)
class NotationConflict:
    """A symbol whose history holds more than one distinct meaning."""

    symbol: str
    meanings: Tuple[str, ...]

    def describe(self) -> str:
        return f'Symbol "{self.symbol}" has conflicting meanings: {", ".join(self.meanings)}'


class CourseState(StateRecord):
    """
    Shared knowledge base checked for consistency after every run.

    The notation registry is kept as an append-only log of writes
    (``notation_log``). The live registry and the conflict report are both
    folds over that log, so a symbol that was redefined keeps its history
    even though readers only see the latest meaning.
    """

    course_name: str
    language: Language = "en"
    syllabus: str = ""
    learning_objectives: List[LearningObjective] = Field(default_factory=list)
    notation_log: List[NotationEntry] = Field(default_factory=list, alias="notationRegistry")
    assumptions: List[Assumption] = Field(default_factory=list)
    lectures: Dict[int, LectureMetadata] = Field(default_factory=dict)

    @field_validator("lectures", mode="before")
    @classmethod
    def coerce_lecture_pairs(cls, value: Any) -> Any:
        # The document stores the lecture map as [number, metadata] pairs.
        if not isinstance(value, list):
            return value
        pairs: Dict[int, Any] = {}
        for item in value:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise ValueError(f"lecture entry must be a [number, metadata] pair, got {item!r}")
            number, metadata = item
            pairs[int(number)] = metadata
        return pairs

    @field_serializer("lectures")
    def serialize_lecture_pairs(self, lectures: Dict[int, LectureMetadata], _info: Any) -> List[List[Any]]:
        return [[number, metadata.model_dump(by_alias=True, exclude_none=True)] for number, metadata in lectures.items()]

    # ------------------------------------------------------------------
    # Notation

    def register_notation(
        self,
        symbol: str,
        meaning: str,
        lecture_number: int,
        context: Optional[str] = None,
    ) -> NotationEntry:
        """Record a notation write; the latest write defines the live meaning."""

        entry = NotationEntry(symbol=symbol, meaning=meaning, introduced_in=lecture_number, context=context)
        history = self.notation_history(entry.symbol)
        if history and history[-1] == entry:
            return history[-1]
        self.notation_log.append(entry)
        return entry

    def notation_history(self, symbol: str) -> List[NotationEntry]:
        return [entry for entry in self.notation_log if entry.symbol == symbol]

    @property
    def notation_registry(self) -> List[NotationEntry]:
        """Live view: one entry per symbol, in first-registration order."""

        live: Dict[str, NotationEntry] = {}
        for entry in self.notation_log:
            current = live.get(entry.symbol)
            if current is None:
                live[entry.symbol] = entry
                continue
            live[entry.symbol] = current.model_copy(
                update={"meaning": entry.meaning, "context": entry.context or current.context}
            )
        return list(live.values())

    def notation_up_to_lecture(self, lecture_number: int) -> List[NotationEntry]:
        return [entry for entry in self.notation_registry if entry.introduced_in <= lecture_number]

    def find_notation_conflicts(self) -> List[NotationConflict]:
        meanings_by_symbol: Dict[str, List[str]] = {}
        for entry in self.notation_log:
            meanings = meanings_by_symbol.setdefault(entry.symbol, [])
            if entry.meaning not in meanings:
                meanings.append(entry.meaning)
        return [
            NotationConflict(symbol=symbol, meanings=tuple(meanings))
            for symbol, meanings in meanings_by_symbol.items()
            if len(meanings) > 1
        ]

    def verify_notation_consistency(self) -> Tuple[bool, List[str]]:
        conflicts = [conflict.describe() for conflict in self.find_notation_conflicts()]
        return not conflicts, conflicts

    # ------------------------------------------------------------------
    # Assumptions and objectives

    def register_assumption(
        self,
        description: str,
        introduced_in: int,
        valid_from: int,
        valid_to: Optional[int] = None,
    ) -> str:
        assumption = Assumption(
            id=f"assumption_{len(self.assumptions) + 1}",
            description=description,
            introduced_in=introduced_in,
            valid_from=valid_from,
            valid_to=valid_to,
        )
        self.assumptions.append(assumption)
        return assumption.id

    def active_assumptions(self, lecture_number: int) -> List[Assumption]:
        return [assumption for assumption in self.assumptions if assumption.active_in(lecture_number)]

    def add_learning_objective(
        self,
        description: str,
        *,
        level: BloomLevel = "understand",
        lecture_number: Optional[int] = None,
    ) -> LearningObjective:
        objective = LearningObjective(
            id=f"lo_{len(self.learning_objectives) + 1}",
            description=description,
            level=level,
            lecture_number=lecture_number,
        )
        self.learning_objectives.append(objective)
        return objective

    # ------------------------------------------------------------------
    # Lectures

    def update_lecture(self, metadata: LectureMetadata) -> None:
        """Store ``metadata`` under its number, replacing any earlier entry wholesale."""
        self.lectures[metadata.number] = metadata

    def get_lecture(self, lecture_number: int) -> Optional[LectureMetadata]:
        return self.lectures.get(lecture_number)

    def prerequisites_for(self, lecture_number: int) -> List[str]:
        """Objectives of every earlier lecture, in lecture order."""

        prereqs: List[str] = []
        for number in range(1, lecture_number):
            lecture = self.lectures.get(number)
            if lecture:
                prereqs.extend(lecture.objectives)
        return prereqs

    # ------------------------------------------------------------------

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    @classmethod
    def from_json(cls, payload: str) -> "CourseState":
        return cls.model_validate_json(payload)


__all__ = ["CourseState", "NotationConflict"]
