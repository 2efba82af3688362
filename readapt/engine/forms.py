# readapt/engine/forms.py
"""
Thin adapters between the two questionnaire variants and the engine.

- enhanced form: reading slider + frequency answers, 18-item attention list,
  vision checklist and lens prescription (0 when no glasses are worn).
- quick form: five single-choice questions with string option values,
  scored as its own `QuickScreen` trait.

Neither adapter scores anything itself; all validation happens in
`score_trait` so both variants fail the same way.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import InvalidAnswer, UnknownQuestion
from .scoring import ScoreResult, score_trait
from .trait_config import (
    ATTENTION_CONFIG,
    TRAIT_CONFIG,
    VISION_CONFIG,
    QuestionKind,
    QuestionSpec,
    Trait,
    TraitConfig,
)


# -------------------------
# ENHANCED FORM
# -------------------------
VISION_LABELS: Dict[str, str] = {
    "Reading text appears blurry": "blurry_text",
    "Words seem to move or jump on the page": "moving_words",
    "I experience eye strain while reading": "eye_strain",
    "I need to hold text very close or far away": "reading_distance",
    "Bright lights cause discomfort": "light_sensitivity",
    "I have difficulty with contrast": "low_contrast",
}


def _vision_answers(selected: Iterable[str]) -> Dict[str, Any]:
    checklist = [q.id for q in VISION_CONFIG.questions if q.kind == QuestionKind.BINARY]
    picked = set()
    for item in selected:
        qid = VISION_LABELS.get(item, item)
        if qid not in checklist:
            raise UnknownQuestion(Trait.VISION.value, item)
        picked.add(qid)
    return {qid: int(qid in picked) for qid in checklist}


def enhanced_form_answers(
    reading_speed: Optional[float],
    reading_answers: Mapping[str, Any],
    attention_answers: List[int],
    vision_difficulties: Iterable[str],
    lens_prescription: Optional[float] = None,
    has_glasses: bool = False,
) -> Dict[str, Dict[str, Any]]:
    reading: Dict[str, Any] = dict(reading_answers)
    if reading_speed is not None:
        reading["reading_slowness"] = round(1.0 - float(reading_speed), 4)

    ids = ATTENTION_CONFIG.question_ids
    attention: Dict[str, Any] = {}
    for i, value in enumerate(attention_answers):
        # surplus items get placeholder ids so the engine rejects them by name
        key = ids[i] if i < len(ids) else f"item_{i + 1}"
        attention[key] = value

    vision = _vision_answers(vision_difficulties)
    # no glasses is the same answer as a 0 diopter prescription
    if has_glasses and lens_prescription is not None:
        vision["lens_prescription"] = float(lens_prescription)
    else:
        vision["lens_prescription"] = 0.0

    return {
        Trait.READING.value: reading,
        Trait.ATTENTION.value: attention,
        Trait.VISION.value: vision,
    }


# -------------------------
# QUICK FORM
# -------------------------
QUICK_TRAIT_ID = "QuickScreen"

# question id -> (options signalling difficulty, all options)
QUICK_OPTIONS: Dict[str, tuple] = {
    "reading_speed": (("very_slow", "slow"), ("very_slow", "slow", "average", "fast")),
    "word_recognition": (("often", "sometimes"), ("often", "sometimes", "rarely", "never")),
    "letter_confusion": (
        ("frequently", "occasionally"),
        ("frequently", "occasionally", "rarely", "never"),
    ),
    "attention_span": (
        ("few_minutes", "10_15_minutes"),
        ("few_minutes", "10_15_minutes", "30_minutes", "unlimited"),
    ),
    "visual_stress": (("very_often", "sometimes"), ("very_often", "sometimes", "rarely", "never")),
}

QUICK_CONFIG = TraitConfig(
    trait_id=QUICK_TRAIT_ID,
    questions=tuple(
        QuestionSpec(id=qid, text=qid.replace("_", " "), kind=QuestionKind.BINARY)
        for qid in QUICK_OPTIONS
    ),
    thresholds=((0.2, "mild"), (0.4, "moderate"), (0.6, "high")),
    base_category="none",
    # one flat confidence; the per-band 0.6/0.65/0.75/0.85 of the old quick form is dropped
    confidence=0.7,
)

QUICK_TRAIT_CONFIG: Dict[str, TraitConfig] = {QUICK_TRAIT_ID: QUICK_CONFIG}


def quick_form_answers(answers: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for qid, value in answers.items():
        if qid not in QUICK_OPTIONS:
            raise UnknownQuestion(QUICK_TRAIT_ID, qid)
        if value is None:
            continue
        flagged, allowed = QUICK_OPTIONS[qid]
        if value not in allowed:
            raise InvalidAnswer(QUICK_TRAIT_ID, qid, value)
        out[qid] = int(value in flagged)
    return out


def quick_screen(answers: Mapping[str, Optional[str]]) -> ScoreResult:
    return score_trait(QUICK_TRAIT_ID, quick_form_answers(answers), QUICK_TRAIT_CONFIG)


# -------------------------
# SECTION FLOW
# -------------------------
class AssessmentSection(str, Enum):
    INTRO = "intro"
    READING = "reading"
    ATTENTION = "attention"
    VISION = "vision"
    PROCESSING = "processing"


SECTION_FLOW = (
    AssessmentSection.INTRO,
    AssessmentSection.READING,
    AssessmentSection.ATTENTION,
    AssessmentSection.VISION,
)

SECTION_TRAIT = {
    AssessmentSection.READING: Trait.READING,
    AssessmentSection.ATTENTION: Trait.ATTENTION,
    AssessmentSection.VISION: Trait.VISION,
}


def next_section(current: AssessmentSection) -> AssessmentSection:
    if current == AssessmentSection.PROCESSING:
        return current
    idx = SECTION_FLOW.index(current)
    if idx == len(SECTION_FLOW) - 1:
        return AssessmentSection.PROCESSING
    return SECTION_FLOW[idx + 1]


def previous_section(current: AssessmentSection) -> AssessmentSection:
    if current in (AssessmentSection.INTRO, AssessmentSection.PROCESSING):
        return current
    return SECTION_FLOW[SECTION_FLOW.index(current) - 1]


def can_proceed(
    current: AssessmentSection,
    answers_by_trait: Mapping[str, Mapping[str, Any]],
    registry: Mapping[str, TraitConfig] | None = None,
) -> bool:
    """True when every required question of the section's trait is answered."""
    trait = SECTION_TRAIT.get(current)
    if trait is None:
        return True
    cfg = (registry or TRAIT_CONFIG)[trait.value]
    answers = answers_by_trait.get(trait.value) or {}
    return all(answers.get(qid) is not None for qid in cfg.required_ids)
