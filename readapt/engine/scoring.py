# readapt/engine/scoring.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidAnswer, MissingAnswers, UnknownQuestion, UnknownTrait
from .recommendations import RECOMMENDATION_RULES, RecommendationRule, derive_recommendations
from .trait_config import TRAIT_CONFIG, TRAIT_ORDER, QuestionKind, QuestionSpec, Trait, TraitConfig


@dataclass(frozen=True)
class ScoreResult:
    trait: str
    category: str
    confidence: float
    raw_score: float  # normalized to [0, 1]

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "confidence": self.confidence,
            "raw_score": self.raw_score,
        }


@dataclass(frozen=True)
class AssessmentResult:
    scores: Tuple[ScoreResult, ...]
    recommendations: Tuple[str, ...]

    def score_for(self, trait: Trait | str) -> ScoreResult:
        tid = trait_id(trait)
        for s in self.scores:
            if s.trait == tid:
                return s
        raise KeyError(tid)

    def categories(self) -> Dict[str, str]:
        return {s.trait: s.category for s in self.scores}

    def to_dict(self) -> dict:
        return {
            "scores": {s.trait: s.to_dict() for s in self.scores},
            "recommendations": list(self.recommendations),
        }


def trait_id(trait: Trait | str) -> str:
    # str-mixin enums hash by member name, so registries are keyed by the plain value
    if isinstance(trait, Trait):
        return trait.value
    return str(trait)


def _resolve(trait: Trait | str, registry: Mapping[str, TraitConfig]) -> TraitConfig:
    tid = trait_id(trait)
    cfg = registry.get(tid)
    if cfg is None:
        raise UnknownTrait(tid)
    return cfg


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _points(cfg: TraitConfig, q: QuestionSpec, value: Any) -> float:
    """
    Difficulty points for one answer, in [0, q.max_points].
    Non-decreasing in the answer value for every kind except SIGNED,
    which is non-decreasing in magnitude.
    """
    if q.kind == QuestionKind.BINARY and isinstance(value, bool):
        return int(value)
    if not _is_number(value):
        raise InvalidAnswer(cfg.trait_id, q.id, value)

    if q.kind == QuestionKind.FREQUENCY:
        if float(value).is_integer() and 0 <= value <= 3:
            return int(value)
    elif q.kind == QuestionKind.BINARY:
        if value in (0, 1):
            return int(value)
    elif q.kind == QuestionKind.SLIDER:
        if 0.0 <= value <= 1.0:
            return float(value)
    elif q.kind == QuestionKind.SIGNED:
        if -q.cap <= value <= q.cap:
            return min(abs(float(value)), q.cap) / q.cap

    raise InvalidAnswer(cfg.trait_id, q.id, value)


def categorize(score: float, cfg: TraitConfig) -> str:
    """Ordered threshold lookup; a score exactly on a threshold takes the higher bucket."""
    category = cfg.base_category
    for min_score, label in cfg.thresholds:
        if score >= min_score:
            category = label
        else:
            break
    return category


def severity_rank(cfg: TraitConfig, category: str) -> int:
    if category == cfg.base_category:
        return 0
    for idx, (_, label) in enumerate(cfg.thresholds):
        if label == category:
            return idx + 1
    if category in cfg.subtype_groups.values() and cfg.subtype_band:
        return severity_rank(cfg, cfg.subtype_band)
    raise ValueError(f"{cfg.trait_id}: unknown category {category!r}")


def _validate(cfg: TraitConfig, answers: Mapping[str, Any]) -> Dict[str, float]:
    known = set(cfg.question_ids)
    for qid in answers:
        if qid not in known:
            raise UnknownQuestion(cfg.trait_id, qid)

    missing = [qid for qid in cfg.required_ids if answers.get(qid) is None]
    if missing:
        raise MissingAnswers(cfg.trait_id, missing)

    points: Dict[str, float] = {}
    for q in cfg.questions:
        value = answers.get(q.id)
        if value is None:
            # optional and not applicable: excluded from both sums
            continue
        points[q.id] = _points(cfg, q, value)
    return points


def _normalized(cfg: TraitConfig, points: Dict[str, float], group: Optional[str] = None) -> float:
    raw = 0.0
    maximum = 0.0
    for q in cfg.questions:
        if q.id not in points:
            continue
        if group is not None and q.group != group:
            continue
        raw += q.weight * points[q.id]
        maximum += q.weight * q.max_points
    if maximum <= 0:
        return 0.0
    return raw / maximum


def _refine(cfg: TraitConfig, category: str, points: Dict[str, float]) -> str:
    if not cfg.subtype_band or category != cfg.subtype_band:
        return category
    reached = [
        label
        for group, label in cfg.subtype_groups.items()
        if _normalized(cfg, points, group) >= cfg.subtype_cutoff
    ]
    if len(reached) == 1:
        return reached[0]
    return category


def score_trait(
    trait: Trait | str,
    answers: Mapping[str, Any],
    registry: Mapping[str, TraitConfig] = TRAIT_CONFIG,
) -> ScoreResult:
    cfg = _resolve(trait, registry)
    points = _validate(cfg, answers)

    score = _normalized(cfg, points)
    category = _refine(cfg, categorize(score, cfg), points)

    return ScoreResult(
        trait=cfg.trait_id,
        category=category,
        confidence=cfg.confidence,
        raw_score=score,
    )


def evaluation_order(registry: Mapping[str, TraitConfig]) -> List[str]:
    ordered = [t.value for t in TRAIT_ORDER if t.value in registry]
    return ordered + [tid for tid in registry if tid not in ordered]


def score_all(
    answers_by_trait: Mapping[Trait | str, Mapping[str, Any]],
    registry: Mapping[str, TraitConfig] = TRAIT_CONFIG,
    rules: Sequence[RecommendationRule] = RECOMMENDATION_RULES,
) -> AssessmentResult:
    by_id: Dict[str, Mapping[str, Any]] = {}
    for key, answers in answers_by_trait.items():
        tid = trait_id(key)
        if tid not in registry:
            raise UnknownTrait(tid)
        by_id[tid] = answers

    scores = tuple(
        score_trait(tid, by_id.get(tid, {}), registry)
        for tid in evaluation_order(registry)
    )
    categories = {s.trait: s.category for s in scores}

    return AssessmentResult(
        scores=scores,
        recommendations=tuple(derive_recommendations(categories, rules, evaluation_order(registry))),
    )
