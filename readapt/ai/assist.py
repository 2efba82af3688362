# readapt/ai/assist.py
"""
Facade used by the routes for anything that may touch the remote service.

Local scoring always runs first: it validates the answer set (so the remote
service never sees an incomplete one) and is the fallback result. There is
no retry; a failed remote call costs exactly one timeout.
"""

from dataclasses import replace
from typing import Any, Mapping, Tuple

from readapt.engine.recommendations import derive_recommendations
from readapt.engine.scoring import AssessmentResult, score_all
from readapt.logging_config import log_event, log_failure
from readapt.settings import Settings, get_settings

from .remote_client import RemoteScoringUnavailable, request_remote_assessment


def assess(
    answers_by_trait: Mapping[Any, Mapping[str, Any]],
    use_remote: bool = False,
    settings: Settings | None = None,
) -> Tuple[AssessmentResult, str]:
    settings = settings or get_settings()
    local = score_all(answers_by_trait)

    if not use_remote:
        log_event("SCORED", "local assessment", {"source": "local", "categories": local.categories()})
        return local, "local"

    try:
        remote = request_remote_assessment(answers_by_trait, settings)
    except RemoteScoringUnavailable as e:
        log_failure("REMOTE_SCORING_FALLBACK", {"error": str(e), "remote_url": settings.REMOTE_URL})
        log_event("SCORED", "local assessment", {"source": "local", "categories": local.categories()})
        return local, "local"

    # remote supplies categories only; bullets always come from the local rule table
    remote = replace(remote, recommendations=tuple(derive_recommendations(remote.categories())))
    log_event("SCORED", "remote assessment", {"source": "remote", "categories": remote.categories()})
    return remote, "remote"


__all__ = ["assess", "RemoteScoringUnavailable"]
