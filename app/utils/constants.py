"""Shared markers, regex patterns and scoring tables for study-plan text."""

import re

# Section markers of the stored event description.
OBJECTIVES_MARKER = "Learning objectives:"
METHODS_MARKER = "Study Methods:"
APPLICATION_MARKER = "Step-by-Step Application:"
RATIONALE_MARKER = "Why This Method Works:"
METHOD_SEPARATOR = "---"
STEP_BULLET = "•"

# Blank line that closes the objectives block.
SECTION_BREAK = "\n\n"

# Matches "(1)", "(12)" etc., the numbered objective prefix.
OBJECTIVE_INDEX_RE = re.compile(r"\(\d+\)")

# Standalone "---" line between two study methods.
METHOD_SEPARATOR_RE = re.compile(r"^[ \t]*---[ \t]*$", re.MULTILINE)

# Numbered-sentence split for generator "application" strings ("1. Do X 2. Do Y").
APPLICATION_STEP_RE = re.compile(r"\d+\.")

# Material types in catalog declaration order; ties keep this order.
MATERIAL_TYPES = ("summary", "flashcards", "quiz", "notes", "mindmap")

# Method name substring -> material types it supports most.
METHOD_TO_MATERIALS: dict[str, tuple[str, ...]] = {
    "Retrieval Practice": ("flashcards", "quiz"),
    "Active Recall": ("flashcards", "quiz"),
    "Spaced Practice": ("flashcards", "quiz"),
    "Interleaved Practice": ("quiz", "notes"),
    "Elaboration": ("notes", "mindmap"),
    "Dual Coding": ("mindmap", "notes"),
    "Concrete Examples": ("notes", "quiz"),
    "Self-Testing": ("quiz", "flashcards"),
    "Summary Creation": ("summary", "mindmap"),
}

METHOD_MATCH_SCORE = 5
CONTENT_TYPE_SCORE = 2
SUITABILITY_SCORE = 1
CONTENT_BONUS_SCORE = 3

# Score a type without method support must exceed to be recommended.
MIN_CONTENT_RECOMMEND_SCORE = 5
