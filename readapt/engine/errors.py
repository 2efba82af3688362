# readapt/engine/errors.py
from typing import Any, List


class ScoringError(ValueError):
    """
    Base for all engine validation failures.

    These are input/programmer errors: local, synchronous, never retryable.
    `code` is the stable identifier surfaced by the HTTP layer.
    """
    code = "SCORING_ERROR"

    def __init__(self, trait_id: str, message: str):
        super().__init__(message)
        self.trait_id = trait_id

    def to_payload(self) -> dict:
        return {"error": self.code, "detail": str(self), "trait": self.trait_id}


class MissingAnswers(ScoringError):
    code = "MISSING_ANSWERS"

    def __init__(self, trait_id: str, missing: List[str]):
        super().__init__(trait_id, f"{trait_id}: missing answers for {', '.join(missing)}")
        self.missing = list(missing)

    def to_payload(self) -> dict:
        return {**super().to_payload(), "missing": self.missing}


class UnknownTrait(ScoringError):
    code = "UNKNOWN_TRAIT"

    def __init__(self, trait_id: str):
        super().__init__(trait_id, f"No scoring configuration registered for trait {trait_id!r}")


class UnknownQuestion(ScoringError):
    code = "UNKNOWN_QUESTION"

    def __init__(self, trait_id: str, question_id: str):
        super().__init__(trait_id, f"{trait_id}: unknown question {question_id!r}")
        self.question_id = question_id

    def to_payload(self) -> dict:
        return {**super().to_payload(), "question": self.question_id}


class InvalidAnswer(ScoringError):
    code = "INVALID_ANSWER"

    def __init__(self, trait_id: str, question_id: str, value: Any):
        super().__init__(trait_id, f"{trait_id}: invalid value {value!r} for question {question_id!r}")
        self.question_id = question_id
        self.value = value

    def to_payload(self) -> dict:
        return {**super().to_payload(), "question": self.question_id}
