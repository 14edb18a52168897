"""Schemas for study-material recommendations."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.study_plan import StudyMethod

MaterialType = Literal["summary", "flashcards", "quiz", "notes", "mindmap"]


class MaterialOption(BaseModel):
    """Static catalog entry for one material type."""

    material_type: MaterialType
    title: str
    description: str
    suitable_for: tuple[str, ...]
    content_types: tuple[str, ...]
    reason: str

    model_config = {"frozen": True}


class ScoredMaterial(BaseModel):
    material_type: MaterialType
    title: str
    description: str
    suitable_for: list[str] = Field(default_factory=list)
    score: int = 0
    reason: str = ""
    method_based: bool = False
    is_recommended: bool = False


class RecommendationRequest(BaseModel):
    """Event fields used to rank materials.

    When ``study_methods`` is omitted they are decoded from ``description``.
    """

    title: str = ""
    description: str | None = None
    subject_name: str | None = None
    study_methods: list[StudyMethod] | None = None


class RecommendationResponse(BaseModel):
    materials: list[ScoredMaterial] = Field(default_factory=list)
    recommended: list[MaterialType] = Field(default_factory=list)
