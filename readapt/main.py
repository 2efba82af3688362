# readapt/main.py
from fastapi import FastAPI

from .errors import install_error_handlers
from .routes import adaptation, assessments
from .settings import get_settings

settings = get_settings()

app = FastAPI(title="ReadApt Scoring API", version=settings.APP_VERSION)
install_error_handlers(app)

app.include_router(assessments.router)
app.include_router(adaptation.router)


@app.get("/")
def health():
    return {
        "status": "ok",
        "service": "readapt-scoring",
        "version": settings.APP_VERSION,
        "remote_scoring": settings.remote_available,
    }
