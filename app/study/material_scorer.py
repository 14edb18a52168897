"""Rank study-material types for a calendar event."""

from __future__ import annotations

import logging
from typing import Iterable

from app.schemas.materials import MaterialOption, ScoredMaterial
from app.schemas.study_plan import StudyMethod
from app.study.plan_codec import decode
from app.utils.constants import (
    CONTENT_BONUS_SCORE,
    CONTENT_TYPE_SCORE,
    METHOD_MATCH_SCORE,
    METHOD_TO_MATERIALS,
    MIN_CONTENT_RECOMMEND_SCORE,
    SUITABILITY_SCORE,
)

logger = logging.getLogger(__name__)

MATERIAL_CATALOG: tuple[MaterialOption, ...] = (
    MaterialOption(
        material_type="summary",
        title="Study Summary",
        description="Condensed overview with key points and examples",
        suitable_for=("Review", "Main Points", "Key Ideas"),
        content_types=("overview", "review", "main points", "key ideas"),
        reason="Excellent for final review and consolidation",
    ),
    MaterialOption(
        material_type="flashcards",
        title="Flashcards",
        description="Interactive flashcards for active recall and spaced repetition",
        suitable_for=("Key Terms", "Definitions", "Concepts", "Facts"),
        content_types=("definitions", "concepts", "terms", "facts"),
        reason="Great for memorizing key terms and concepts",
    ),
    MaterialOption(
        material_type="quiz",
        title="Practice Quiz",
        description="Self-assessment questions to test understanding",
        suitable_for=("Understanding Check", "Application", "Critical Thinking"),
        content_types=("analysis", "application", "examples", "case studies"),
        reason="Ideal for testing deep understanding and application",
    ),
    MaterialOption(
        material_type="notes",
        title="Smart Notes",
        description="Structured notes with key concepts and examples",
        suitable_for=("Complex Topics", "Processes", "Methods", "Steps"),
        content_types=("processes", "methods", "steps", "procedures"),
        reason="Best for organizing complex information and procedures",
    ),
    MaterialOption(
        material_type="mindmap",
        title="Mind Map",
        description="Visual representation of concepts and relationships",
        suitable_for=("Relationships", "Connections", "Big Picture"),
        content_types=("relationships", "connections", "systems", "hierarchies"),
        reason="Perfect for visualizing connections between concepts",
    ),
)

# (material type, trigger words, reason) applied when no method matched.
_CONTENT_BONUSES = (
    ("mindmap", ("relationship",), "Content involves many relationships between concepts"),
    ("quiz", ("understand", "apply"), "Content requires deep understanding and application"),
    ("flashcards", ("define", "term"), "Content contains many key terms and definitions"),
)


def build_content_text(
    title: str | None,
    description: str | None = None,
    subject_name: str | None = None,
) -> str:
    """Join the event text fields into one lower-cased string."""
    parts = [part for part in (title, description, subject_name) if part]
    return " ".join(parts).lower()


def _materials_for_method(method_name: str) -> set[str]:
    lowered = method_name.lower()
    materials: set[str] = set()
    for key, mapped in METHOD_TO_MATERIALS.items():
        if key.lower() in lowered:
            materials.update(mapped[:2])
    return materials


def _score_option(
    option: MaterialOption,
    content_text: str,
    method_materials: list[tuple[str, set[str]]],
) -> ScoredMaterial:
    score = 0
    reason = ""

    matched_methods = [name for name, materials in method_materials if option.material_type in materials]
    if matched_methods:
        score += METHOD_MATCH_SCORE * len(matched_methods)
        reason = f"Recommended for {' and '.join(matched_methods)} study methods"

    for keyword in option.content_types:
        if keyword in content_text:
            score += CONTENT_TYPE_SCORE

    for label in option.suitable_for:
        if label.lower() in content_text:
            score += SUITABILITY_SCORE

    if not reason:
        for material_type, triggers, bonus_reason in _CONTENT_BONUSES:
            if material_type == option.material_type and any(word in content_text for word in triggers):
                score += CONTENT_BONUS_SCORE
                reason = bonus_reason

    return ScoredMaterial(
        material_type=option.material_type,
        title=option.title,
        description=option.description,
        suitable_for=list(option.suitable_for),
        score=score,
        reason=reason or option.reason,
        method_based=bool(matched_methods),
    )


def score_materials(
    content_text: str | None,
    study_methods: Iterable[StudyMethod] | None = None,
    limit: int = 2,
) -> list[ScoredMaterial]:
    """Score every catalog type and flag at most ``limit`` as recommended.

    Parameters
    ----------
    content_text : str | None
        Lower-cased event text, see ``build_content_text``.
    study_methods : Iterable[StudyMethod] | None
        Methods decoded from the event description.
    limit : int
        How many of the top-ranked entries may be recommended.

    Returns
    -------
    list[ScoredMaterial]
        All five types, highest score first; ties keep catalog order.
    """
    content_text = (content_text or "").lower()
    method_materials = [
        (method.name, _materials_for_method(method.name)) for method in (study_methods or [])
    ]

    scored = [_score_option(option, content_text, method_materials) for option in MATERIAL_CATALOG]
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)

    for index, item in enumerate(ranked):
        qualifies = item.method_based or item.score > MIN_CONTENT_RECOMMEND_SCORE
        item.is_recommended = index < limit and qualifies

    logger.debug(
        "Material scores: %s",
        ", ".join(f"{item.material_type}={item.score}" for item in ranked),
    )
    return ranked


def recommend_for_event(
    title: str | None,
    description: str | None = None,
    subject_name: str | None = None,
    study_methods: Iterable[StudyMethod] | None = None,
    limit: int = 2,
) -> list[ScoredMaterial]:
    """Rank materials for an event, decoding its study methods when not given."""
    if study_methods is None:
        study_methods = decode(description).study_methods
    content_text = build_content_text(title, description, subject_name)
    return score_materials(content_text, study_methods, limit=limit)
