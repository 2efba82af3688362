# readapt/engine/presets.py
from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from .scoring import AssessmentResult
from .trait_config import TRAIT_CONFIG, TRAIT_ORDER, Trait


@dataclass(frozen=True)
class ReadingPreferences:
    font_size: int = 18
    line_height: float = 1.6
    letter_spacing: float = 0.05
    word_spacing: float = 0.1
    highlight_keywords: bool = True
    syllable_breaks: bool = False
    sentence_chunking: bool = False
    tldr_mode: bool = False
    focus_mode: bool = False
    color_scheme: str = "warm"
    contrast: float = 1.0
    tts_rate: float = 1.0
    tts_pitch: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Every category a trait can produce needs an entry; "none"/"normal" are explicit no-ops.
PRESET_TABLE: Dict[str, Dict[str, Dict[str, Any]]] = {
    Trait.READING.value: {
        "none": {},
        "mild": {"letter_spacing": 0.07, "line_height": 1.7},
        "moderate": {"letter_spacing": 0.08, "word_spacing": 0.12, "line_height": 1.8},
        "severe": {
            "letter_spacing": 0.1,
            "word_spacing": 0.15,
            "line_height": 2.0,
            "syllable_breaks": True,
            "tts_rate": 0.8,
        },
    },
    Trait.ATTENTION.value: {
        "normal": {},
        "inattentive": {"sentence_chunking": True, "focus_mode": True},
        "hyperactive": {"sentence_chunking": True, "tldr_mode": True},
        "moderate": {"sentence_chunking": True, "tldr_mode": True, "focus_mode": True},
        "severe": {"sentence_chunking": True, "tldr_mode": True, "focus_mode": True, "tts_rate": 0.9},
    },
    Trait.VISION.value: {
        "normal": {},
        "mild": {"font_size": 20, "contrast": 1.2},
        "low_vision": {"font_size": 24, "contrast": 1.5, "color_scheme": "high_contrast"},
    },
}


def _check_table() -> None:
    for tid, cfg in TRAIT_CONFIG.items():
        entries = PRESET_TABLE[tid]
        for category in cfg.categories:
            if category not in entries:
                raise KeyError(f"Preset missing for {tid}:{category}")


_check_table()


def _merge(prefs: ReadingPreferences, overrides: Dict[str, Any]) -> ReadingPreferences:
    if not overrides:
        return prefs
    merged = dict(overrides)
    # two traits asking for a slower voice: keep the slowest
    if "tts_rate" in merged:
        merged["tts_rate"] = min(prefs.tts_rate, merged["tts_rate"])
    return replace(prefs, **merged)


def derive_preferences(result: AssessmentResult) -> ReadingPreferences:
    """
    Rendering preferences as a pure function of an assessment.
    Presets are applied in trait order, later traits overriding earlier ones.
    """
    prefs = ReadingPreferences()
    categories = result.categories()
    for trait in TRAIT_ORDER:
        category = categories.get(trait.value)
        if category is None:
            continue
        prefs = _merge(prefs, PRESET_TABLE[trait.value][category])
    return prefs
