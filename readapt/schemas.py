# readapt/schemas.py
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)

from .engine.scoring import AssessmentResult, ScoreResult
from .engine.trait_config import TRAIT_CONFIG, TRAIT_ORDER

# strict: "3" or "true" must fail here exactly as it fails in the engine
AnswerValue = Optional[Union[StrictBool, StrictInt, StrictFloat]]
AnswerSet = Dict[str, AnswerValue]


class ScoreIn(BaseModel):
    answers: Dict[str, AnswerSet]
    use_remote: bool = False


class TraitScoreIn(BaseModel):
    answers: AnswerSet


class ScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    raw_score: float = Field(..., ge=0.0, le=1.0)


class TraitScoreOut(ScoreOut):
    trait: str


class AssessmentOut(BaseModel):
    """
    Wire shape shared by the local engine and the remote scoring service.
    Validation here is what makes a remote answer a drop-in substitute.
    """
    scores: Dict[str, ScoreOut]
    recommendations: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _known_categories(self):
        for trait in TRAIT_ORDER:
            if trait.value not in self.scores:
                raise ValueError(f"missing score for {trait.value}")
        for tid, score in self.scores.items():
            cfg = TRAIT_CONFIG.get(tid)
            if cfg is None:
                raise ValueError(f"unknown trait {tid}")
            if score.category not in cfg.categories:
                raise ValueError(f"unknown category {score.category!r} for {tid}")
        return self

    def to_result(self) -> AssessmentResult:
        scores = tuple(
            ScoreResult(
                trait=t.value,
                category=self.scores[t.value].category,
                confidence=self.scores[t.value].confidence,
                raw_score=self.scores[t.value].raw_score,
            )
            for t in TRAIT_ORDER
        )
        return AssessmentResult(scores=scores, recommendations=tuple(self.recommendations))


class AssessmentResponse(AssessmentOut):
    source: Literal["local", "remote"] = "local"


class EnhancedFormIn(BaseModel):
    reading_speed: Optional[float] = Field(None, ge=0.0, le=1.0)
    reading_answers: Dict[str, int]
    attention_answers: List[int]
    vision_difficulties: List[str] = Field(default_factory=list)
    has_glasses: bool = False
    lens_prescription: Optional[float] = Field(None, ge=-10.0, le=10.0)
    use_remote: bool = False

    @field_validator("lens_prescription")
    @classmethod
    def _round_prescription(cls, v):
        if v is None:
            return v
        return round(v * 2) / 2  # slider steps are 0.5 diopters


class QuickFormIn(BaseModel):
    answers: Dict[str, Optional[str]]


class PreferencesOut(BaseModel):
    font_size: int
    line_height: float
    letter_spacing: float
    word_spacing: float
    highlight_keywords: bool
    syllable_breaks: bool
    sentence_chunking: bool
    tldr_mode: bool
    focus_mode: bool
    color_scheme: str
    contrast: float
    tts_rate: float
    tts_pitch: float


class AdaptTextIn(BaseModel):
    text: str = Field(..., min_length=1)
    preferences: PreferencesOut
    keywords: Optional[List[str]] = None


class AdaptTextOut(BaseModel):
    adapted_text: str
    plain_text: str
