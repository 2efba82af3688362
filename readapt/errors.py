from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarHTTP
import logging

from .engine.errors import ScoringError

logger = logging.getLogger("readapt")


def install_error_handlers(app):
    @app.exception_handler(ScoringError)
    async def scoring_exc(_: Request, exc: ScoringError):
        # bad or incomplete answer sets: the caller should prompt, not retry
        logger.info(f"Rejected answer set: {exc.code} {exc}")
        return JSONResponse(exc.to_payload(), status_code=422)

    @app.exception_handler(StarHTTP)
    async def http_exc(_: Request, exc: StarHTTP):
        return JSONResponse({"error": f"HTTP_{exc.status_code}", "detail": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled(_: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse({"error": "INTERNAL_ERROR", "detail": "Unexpected error"}, status_code=500)
