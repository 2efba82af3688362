# readapt/engine/__init__.py
from .trait_config import Trait, TraitConfig, QuestionSpec, QuestionKind, TRAIT_CONFIG, TRAIT_ORDER
from .errors import ScoringError, MissingAnswers, UnknownTrait, UnknownQuestion, InvalidAnswer
from .scoring import ScoreResult, AssessmentResult, score_trait, score_all, categorize, severity_rank
from .presets import ReadingPreferences, derive_preferences
