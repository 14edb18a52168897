"""FastAPI application exposing the study-plan codec and material ranking."""

from contextlib import asynccontextmanager
import logging
from typing import Literal

from fastapi import FastAPI, HTTPException

from app.config import settings
from app.schemas.materials import RecommendationRequest, RecommendationResponse
from app.schemas.study_plan import (
    DecodeRequest,
    DecodedPlanResponse,
    DescriptionResponse,
    StudyPlan,
)
from app.schemas.suggestion import SuggestionsRequest, SuggestionsResponse
from app.study.material_scorer import recommend_for_event
from app.study.plan_codec import (
    decode,
    dump_plan_json,
    encode,
    is_study_description,
    load_plan_json,
    split_overview_sentences,
)
from app.study.rendering import render_markdown
from app.study.suggestions import describe_suggestions, parse_suggestions

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger("app").setLevel(settings.log_level.upper())
    yield


app = FastAPI(title=settings.app_title, version=settings.app_version, lifespan=lifespan)


def _check_size(text: str | None) -> None:
    if text and len(text) > settings.max_description_chars:
        raise HTTPException(status_code=413, detail="Description too large")


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/study-plans/encode", response_model=DescriptionResponse)
def encode_plan(plan: StudyPlan, storage: Literal["text", "json"] = "text"):
    """Pack a study plan into the event description field."""
    if storage == "json":
        description = dump_plan_json(plan)
    else:
        description = encode(plan)
    _check_size(description)
    logger.info(
        "Encoded plan: objectives=%d methods=%d storage=%s",
        len(plan.learning_objectives),
        len(plan.study_methods),
        storage,
    )
    return DescriptionResponse(description=description)


@app.post("/study-plans/decode", response_model=DecodedPlanResponse)
def decode_plan(request: DecodeRequest):
    """Recover the structured plan from a stored description.

    JSON descriptions written with ``storage=json`` are loaded as such; any
    other text goes through the marker-based decoder.
    """
    _check_size(request.description)
    plan = None
    if request.description.lstrip().startswith("{"):
        try:
            plan = load_plan_json(request.description, title=request.title)
        except ValueError:
            logger.info("Description looks like JSON but is not a plan; decoding as text")
    if plan is None:
        plan = decode(request.description, title=request.title)

    return DecodedPlanResponse(
        plan=plan,
        is_study_event=is_study_description(request.description) or bool(plan.learning_objectives),
        overview_sentences=split_overview_sentences(plan.overview),
        markdown=render_markdown(plan),
    )


@app.post("/study-suggestions/descriptions", response_model=SuggestionsResponse)
def suggestion_descriptions(request: SuggestionsRequest):
    """Build stored descriptions for generated study suggestions."""
    if request.raw is not None:
        _check_size(request.raw)
        try:
            suggestions = parse_suggestions(request.raw)
        except ValueError as exc:
            logger.error("Suggestion payload could not be parsed")
            raise HTTPException(status_code=422, detail=str(exc)) from exc
    elif request.suggestions is not None:
        suggestions = request.suggestions
    else:
        raise HTTPException(status_code=422, detail="Provide either 'suggestions' or 'raw'")

    items = describe_suggestions(suggestions)
    logger.info("Built descriptions for %d suggestions", len(items))
    return SuggestionsResponse(items=items)


@app.post("/study-materials/recommendations", response_model=RecommendationResponse)
def material_recommendations(request: RecommendationRequest):
    """Rank study-material types for an event."""
    _check_size(request.description)
    materials = recommend_for_event(
        request.title,
        request.description,
        request.subject_name,
        study_methods=request.study_methods,
        limit=settings.recommendation_limit,
    )
    recommended = [item.material_type for item in materials if item.is_recommended]
    logger.info("Recommended materials: %s", ", ".join(recommended) or "none")
    return RecommendationResponse(materials=materials, recommended=recommended)
