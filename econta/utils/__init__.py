"""Small text helpers shared by handlers and the orchestrator."""

from .text import extract_lecture_number, glossary_terms, sanitize_filename, truncate

__all__ = ["extract_lecture_number", "glossary_terms", "sanitize_filename", "truncate"]
