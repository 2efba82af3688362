# readapt/ai/remote_client.py
from typing import Any, Dict, Mapping

import requests
from pydantic import ValidationError

from readapt.engine.scoring import AssessmentResult, trait_id
from readapt.schemas import AssessmentOut
from readapt.settings import Settings, get_settings


class RemoteScoringUnavailable(RuntimeError):
    pass


def _payload(answers_by_trait: Mapping[Any, Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {trait_id(t): dict(answers) for t, answers in answers_by_trait.items()}


def request_remote_assessment(
    answers_by_trait: Mapping[Any, Mapping[str, Any]],
    settings: Settings | None = None,
) -> AssessmentResult:
    """
    One blocking call to the remote scoring service.

    Any transport error, non-2xx status, bad JSON or shape mismatch is
    reported as RemoteScoringUnavailable; callers fall back to local scoring.
    """
    settings = settings or get_settings()
    if not settings.remote_available:
        raise RemoteScoringUnavailable("Remote scoring disabled")

    url = f"{settings.REMOTE_URL}{settings.REMOTE_SCORE_PATH}"
    try:
        resp = requests.post(
            url,
            json={"answers": _payload(answers_by_trait)},
            timeout=settings.REMOTE_TIMEOUT_SECONDS,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise RemoteScoringUnavailable(f"{type(e).__name__}: {e}") from e

    try:
        return AssessmentOut.model_validate(data).to_result()
    except ValidationError as e:
        raise RemoteScoringUnavailable(f"Response shape mismatch: {e.error_count()} error(s)") from e
