# readapt/routes/assessments.py
from __future__ import annotations

from fastapi import APIRouter

from .. import schemas
from ..settings import get_settings

from readapt.ai.assist import assess
from readapt.engine.forms import enhanced_form_answers, quick_screen
from readapt.engine.scoring import score_trait
from readapt.engine.trait_config import TRAIT_CONFIG
from readapt.logging_config import log_event

router = APIRouter(prefix="/assessments", tags=["assessments"])
settings = get_settings()


def _response(result, source: str) -> schemas.AssessmentResponse:
    return schemas.AssessmentResponse(**result.to_dict(), source=source)


@router.get("/traits")
def list_traits():
    """Question sets and threshold tables, so forms can be rendered from config."""
    return {
        "scoring_table_version": settings.SCORING_TABLE_VERSION,
        "traits": [
            {
                "trait": cfg.trait_id,
                "confidence": cfg.confidence,
                "base_category": cfg.base_category,
                "thresholds": [{"min_score": s, "category": c} for s, c in cfg.thresholds],
                "categories": cfg.categories,
                "questions": [
                    {
                        "id": q.id,
                        "text": q.text,
                        "kind": q.kind.value,
                        "weight": q.weight,
                        "required": q.required,
                        "group": q.group,
                    }
                    for q in cfg.questions
                ],
            }
            for cfg in TRAIT_CONFIG.values()
        ],
    }


@router.post("/score", response_model=schemas.AssessmentResponse)
def score(inp: schemas.ScoreIn):
    result, source = assess(inp.answers, use_remote=inp.use_remote)
    return _response(result, source)


@router.post("/traits/{trait}/score", response_model=schemas.TraitScoreOut)
def score_single_trait(trait: str, inp: schemas.TraitScoreIn):
    out = score_trait(trait, inp.answers)
    return schemas.TraitScoreOut(trait=out.trait, **out.to_dict())


@router.post("/enhanced", response_model=schemas.AssessmentResponse)
def score_enhanced_form(inp: schemas.EnhancedFormIn):
    answers = enhanced_form_answers(
        reading_speed=inp.reading_speed,
        reading_answers=inp.reading_answers,
        attention_answers=inp.attention_answers,
        vision_difficulties=inp.vision_difficulties,
        lens_prescription=inp.lens_prescription,
        has_glasses=inp.has_glasses,
    )
    result, source = assess(answers, use_remote=inp.use_remote)
    return _response(result, source)


@router.post("/quick", response_model=schemas.TraitScoreOut)
def score_quick_form(inp: schemas.QuickFormIn):
    out = quick_screen(inp.answers)
    log_event("SCORED", "quick screen", {"category": out.category})
    return schemas.TraitScoreOut(trait=out.trait, **out.to_dict())
