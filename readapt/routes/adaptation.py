# readapt/routes/adaptation.py
from fastapi import APIRouter

from .. import schemas
from readapt.engine.presets import PRESET_TABLE, ReadingPreferences, derive_preferences
from readapt.engine.text_transform import adapt_text, strip_html

router = APIRouter(prefix="/adaptation", tags=["adaptation"])


@router.get("/presets")
def presets():
    return {"defaults": ReadingPreferences().to_dict(), "presets": PRESET_TABLE}


@router.post("/preferences", response_model=schemas.PreferencesOut)
def preferences(inp: schemas.AssessmentOut):
    return derive_preferences(inp.to_result()).to_dict()


@router.post("/adapt-text", response_model=schemas.AdaptTextOut)
def adapt(inp: schemas.AdaptTextIn):
    prefs = ReadingPreferences(**inp.preferences.model_dump())
    adapted = adapt_text(inp.text, prefs, inp.keywords)
    return {"adapted_text": adapted, "plain_text": strip_html(adapted)}
