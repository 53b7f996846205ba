"""Shared course knowledge: notation, assumptions and lecture progression."""

from .models import Assumption, LearningObjective, LectureMetadata, NotationEntry
from .state import CourseState, NotationConflict
from .storage import CourseStateLoadError, CourseStateStore

__all__ = [
    "Assumption",
    "CourseState",
    "CourseStateLoadError",
    "CourseStateStore",
    "LearningObjective",
    "LectureMetadata",
    "NotationConflict",
    "NotationEntry",
]
