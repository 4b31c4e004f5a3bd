"""
Document Context

Responsibilities:
- Defines the CV document schema and its invariants (complete value, unique record ids)
- Issues unique record ids
- Holds the current document and publishes full replacements to subscribers
- Form-style field edits, photo attachment and completeness scoring

Owns: Document structure, replacement discipline
Never: Talks to a language model or renders pages
"""

from lumina.contexts.document.ids import IdGenerator
from lumina.contexts.document.model import (
    Document,
    Education,
    Experience,
    Message,
    PersonalInfo,
    Theme,
    changed_fields,
    load_document,
    save_document,
)
from lumina.contexts.document.scoring import ScoreReport, score_document
from lumina.contexts.document.store import DocumentStore

__all__ = [
    # Data structures
    "Document",
    "PersonalInfo",
    "Experience",
    "Education",
    "Theme",
    "Message",
    # Helpers
    "changed_fields",
    "load_document",
    "save_document",
    "IdGenerator",
    "DocumentStore",
    # Scoring
    "ScoreReport",
    "score_document",
]
