# readapt/engine/trait_config.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Trait(str, Enum):
    READING = "ReadingDifficulty"
    ATTENTION = "AttentionDifficulty"
    VISION = "VisualDifficulty"


# fixed evaluation order for scoring and recommendations
TRAIT_ORDER: Tuple[Trait, ...] = (Trait.READING, Trait.ATTENTION, Trait.VISION)


class QuestionKind(str, Enum):
    FREQUENCY = "frequency"  # 0..3: Never / Rarely / Sometimes / Often
    BINARY = "binary"        # checkbox, 0 or 1
    SLIDER = "slider"        # continuous 0..1
    SIGNED = "signed"        # -cap..cap, None = not applicable; scored and monotone by |value|


MAX_POINTS = {
    QuestionKind.FREQUENCY: 3,
    QuestionKind.BINARY: 1,
    QuestionKind.SLIDER: 1,
    QuestionKind.SIGNED: 1,
}


@dataclass(frozen=True)
class QuestionSpec:
    id: str
    text: str
    kind: QuestionKind = QuestionKind.FREQUENCY
    weight: float = 1.0
    required: bool = True
    group: Optional[str] = None
    cap: float = 10.0  # only used by SIGNED questions

    @property
    def max_points(self) -> float:
        return MAX_POINTS[self.kind]


@dataclass(frozen=True)
class TraitConfig:
    """
    Everything needed to score one trait, kept as data:

    - questions: declaration order is the order MissingAnswers reports ids in.
    - thresholds: ascending (min_score, category) pairs; a score equal to
      min_score lands in that category.
    - base_category: label below the first threshold.
    - subtypes: optional refinement of one band by question group.
    """
    trait_id: str
    questions: Tuple[QuestionSpec, ...]
    thresholds: Tuple[Tuple[float, str], ...]
    base_category: str
    confidence: float
    subtype_band: Optional[str] = None
    subtype_groups: Dict[str, str] = field(default_factory=dict)
    subtype_cutoff: float = 0.5

    @property
    def question_ids(self) -> List[str]:
        return [q.id for q in self.questions]

    @property
    def required_ids(self) -> List[str]:
        return [q.id for q in self.questions if q.required]

    @property
    def categories(self) -> List[str]:
        cats = [self.base_category] + [label for _, label in self.thresholds]
        cats += [label for label in self.subtype_groups.values() if label not in cats]
        return cats

    def question(self, question_id: str) -> Optional[QuestionSpec]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None


def _frequency(qid: str, text: str, group: str | None = None) -> QuestionSpec:
    return QuestionSpec(id=qid, text=text, group=group)


def _binary(qid: str, text: str) -> QuestionSpec:
    return QuestionSpec(id=qid, text=text, kind=QuestionKind.BINARY)


READING_CONFIG = TraitConfig(
    trait_id=Trait.READING.value,
    questions=(
        _frequency("word_recognition", "I have difficulty recognizing familiar words"),
        _frequency("reading_fluency", "I read more slowly than others my age"),
        _frequency("letter_confusion", "I confuse letters like b/d or p/q"),
        _frequency("spelling_difficulty", "I have trouble spelling words correctly"),
        _frequency("comprehension", "I need to read text multiple times to understand it"),
        # slider is stored as slowness (1 - speed vs peers) so higher always means harder
        QuestionSpec(
            id="reading_slowness",
            text="Reading speed compared to peers",
            kind=QuestionKind.SLIDER,
            weight=5.0,
            required=False,
        ),
    ),
    thresholds=((0.3, "mild"), (0.5, "moderate"), (0.7, "severe")),
    base_category="none",
    confidence=0.8,
)

_INATTENTIVE = (
    ("attention_to_detail", "I have difficulty paying attention to details"),
    ("sustained_attention", "I have trouble sustaining attention in tasks"),
    ("listening", "I don't seem to listen when spoken to directly"),
    ("follow_through", "I don't follow through on instructions"),
    ("organization", "I have difficulty organizing tasks and activities"),
    ("effort_avoidance", "I avoid tasks requiring sustained mental effort"),
    ("losing_things", "I lose things necessary for tasks"),
    ("distractibility", "I am easily distracted by external stimuli"),
    ("forgetfulness", "I am forgetful in daily activities"),
)

_HYPERACTIVE = (
    ("fidgeting", "I fidget with hands or feet"),
    ("leaving_seat", "I leave my seat when expected to remain seated"),
    ("restlessness", 'I feel restless or "on the go"'),
    ("quiet_leisure", "I have difficulty engaging in leisure activities quietly"),
    ("talkativeness", "I talk excessively"),
    ("blurting", "I blurt out answers before questions are completed"),
    ("waiting_turn", "I have difficulty waiting my turn"),
    ("interrupting", "I interrupt or intrude on others"),
    ("driven_by_motor", 'I act as if "driven by a motor"'),
)

ATTENTION_CONFIG = TraitConfig(
    trait_id=Trait.ATTENTION.value,
    questions=tuple(_frequency(q, t, "inattentive") for q, t in _INATTENTIVE)
    + tuple(_frequency(q, t, "hyperactive") for q, t in _HYPERACTIVE),
    thresholds=((0.4, "moderate"), (0.6, "severe")),
    base_category="normal",
    confidence=0.75,
    subtype_band="moderate",
    subtype_groups={"inattentive": "inattentive", "hyperactive": "hyperactive"},
)

VISION_CONFIG = TraitConfig(
    trait_id=Trait.VISION.value,
    questions=(
        _binary("blurry_text", "Reading text appears blurry"),
        _binary("moving_words", "Words seem to move or jump on the page"),
        _binary("eye_strain", "I experience eye strain while reading"),
        _binary("reading_distance", "I need to hold text very close or far away"),
        _binary("light_sensitivity", "Bright lights cause discomfort"),
        _binary("low_contrast", "I have difficulty with contrast"),
        QuestionSpec(
            id="lens_prescription",
            text="Prescription strength (diopters)",
            kind=QuestionKind.SIGNED,
            weight=2.0,
            required=False,
            cap=10.0,
        ),
    ),
    thresholds=((0.3, "mild"), (0.6, "low_vision")),
    base_category="normal",
    confidence=0.7,
)


TRAIT_CONFIG: Dict[str, TraitConfig] = {
    Trait.READING.value: READING_CONFIG,
    Trait.ATTENTION.value: ATTENTION_CONFIG,
    Trait.VISION.value: VISION_CONFIG,
}

