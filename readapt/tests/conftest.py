from __future__ import annotations

import pytest

from readapt.engine.trait_config import ATTENTION_CONFIG, READING_CONFIG, Trait

READING_IDS = [
    "word_recognition",
    "reading_fluency",
    "letter_confusion",
    "spelling_difficulty",
    "comprehension",
]

VISION_CHECKLIST = [
    "blurry_text",
    "moving_words",
    "eye_strain",
    "reading_distance",
    "light_sensitivity",
    "low_contrast",
]


def build_answers(
    *,
    reading: list[int] | None = None,
    reading_slowness: float | None = None,
    attention: list[int] | None = None,
    vision: list[int] | None = None,
    lens_prescription: float | None = None,
) -> dict[str, dict]:
    """Complete, valid answer set; every trait defaults to its lowest answers."""
    reading = reading if reading is not None else [0] * len(READING_IDS)
    attention = attention if attention is not None else [0] * len(ATTENTION_CONFIG.question_ids)
    vision = vision if vision is not None else [0] * len(VISION_CHECKLIST)

    reading_set = dict(zip(READING_IDS, reading))
    if reading_slowness is not None:
        reading_set["reading_slowness"] = reading_slowness

    vision_set = dict(zip(VISION_CHECKLIST, vision))
    vision_set["lens_prescription"] = lens_prescription

    return {
        Trait.READING.value: reading_set,
        Trait.ATTENTION.value: dict(zip(ATTENTION_CONFIG.question_ids, attention)),
        Trait.VISION.value: vision_set,
    }


@pytest.fixture
def answers_factory():
    return build_answers


@pytest.fixture
def baseline_answers() -> dict[str, dict]:
    return build_answers()


@pytest.fixture
def reading_ids() -> list[str]:
    assert READING_CONFIG.required_ids == READING_IDS
    return list(READING_IDS)
