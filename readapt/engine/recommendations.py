# readapt/engine/recommendations.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from .trait_config import TRAIT_ORDER, Trait


@dataclass(frozen=True)
class RecommendationRule:
    """
    Fires when every (trait, categories) condition holds.
    The first condition's trait decides where the bullets land in the output.
    """
    when: Tuple[Tuple[str, FrozenSet[str]], ...]
    bullets: Tuple[str, ...]

    @property
    def lead_trait(self) -> str:
        return self.when[0][0]

    def matches(self, categories: Dict[str, str]) -> bool:
        return all(categories.get(tid) in cats for tid, cats in self.when)


def _rule(*when: Tuple[Trait, Iterable[str]], bullets: Sequence[str]) -> RecommendationRule:
    return RecommendationRule(
        when=tuple((t.value, frozenset(cats)) for t, cats in when),
        bullets=tuple(bullets),
    )


READ = Trait.READING
ATTN = Trait.ATTENTION
VIS = Trait.VISION

ATTENTION_FLAGGED = ("inattentive", "hyperactive", "moderate", "severe")

# ---------- rule table (config, not code) ----------
RECOMMENDATION_RULES: Tuple[RecommendationRule, ...] = (
    # reading
    _rule((READ, ["severe"]), bullets=[
        "Use heavy letter and word spacing",
        "Enable syllable breakdown for complex words",
        "Use slower text-to-speech (0.8x speed)",
        "Apply high contrast color scheme",
    ]),
    _rule((READ, ["moderate"]), bullets=[
        "Increase letter spacing",
        "Enable keyword highlighting",
        "Offer optional syllable support",
    ]),
    _rule((READ, ["mild"]), bullets=[
        "Apply subtle spacing adjustments",
        "Customize font settings",
    ]),
    _rule((READ, ["moderate", "severe"]), (ATTN, ATTENTION_FLAGGED), bullets=[
        "Pair reading with text-to-speech playback",
    ]),
    _rule((READ, ["severe"]), (VIS, ["low_vision"]), bullets=[
        "Prefer audio-first reading for long passages",
    ]),
    # attention
    _rule((ATTN, ATTENTION_FLAGGED), bullets=[
        "Break text into smaller chunks",
        "Use focus mode with reduced distractions",
        "Enable TL;DR summaries for long content",
    ]),
    _rule((ATTN, ["inattentive"]), bullets=[
        "Enable keyword highlighting",
    ]),
    _rule((ATTN, ["hyperactive", "severe"]), bullets=[
        "Add frequent break reminders",
    ]),
    # vision
    _rule((VIS, ["low_vision"]), bullets=[
        "Use 150% font size scaling",
        "Apply high contrast color scheme",
        "Enable magnification tools",
    ]),
    _rule((VIS, ["mild"]), bullets=[
        "Use modest font size increases",
        "Improve contrast options",
    ]),
)

DEFAULT_RECOMMENDATIONS: Tuple[str, ...] = (
    "Use comfortable reading settings",
    "Consider text-to-speech",
    "Adjust display preferences",
)


def derive_recommendations(
    categories: Dict[str, str],
    rules: Sequence[RecommendationRule] = RECOMMENDATION_RULES,
    order: Sequence[str] | None = None,
) -> List[str]:
    """
    Ordered, de-duplicated bullets for the categories reached.

    Rules are grouped by lead trait in evaluation order (declaration order
    within a trait); repeated text keeps its first position.
    """
    trait_order = list(order) if order is not None else [t.value for t in TRAIT_ORDER]
    rank = {tid: i for i, tid in enumerate(trait_order)}
    ordered_rules = sorted(
        enumerate(rules),
        key=lambda pair: (rank.get(pair[1].lead_trait, len(rank)), pair[0]),
    )

    out: List[str] = []
    seen = set()
    for _, rule in ordered_rules:
        if not rule.matches(categories):
            continue
        for bullet in rule.bullets:
            if bullet not in seen:
                seen.add(bullet)
                out.append(bullet)

    if not out:
        return list(DEFAULT_RECOMMENDATIONS)
    return out
