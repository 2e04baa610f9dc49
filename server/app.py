from typing import List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ai.client import create_backend
from core.char_map import protect, restore
from core.config.converter_config import (
    DEFAULT_LANGUAGE_PAIR,
    DEFAULT_PARTICLES,
    DEFAULT_PLACEHOLDER,
    ConverterConfig,
)
from core.errors import TranslationUnavailable
from core.formatter import format_string
from core.logger import get_logger
from core.text_token import segment

logger = get_logger(__name__)

app = FastAPI(title="Romaji Converter")

# Allow CORS for dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SegmentRequest(BaseModel):
    text: str


class TokenModel(BaseModel):
    script: str
    text: str
    prefix: str


class FormatRequest(BaseModel):
    text: str
    language_pair: str = DEFAULT_LANGUAGE_PAIR
    substitutions: List[Tuple[str, str]] = []
    particles: List[str] = list(DEFAULT_PARTICLES)
    provider: str = "mock"
    model: str = "gpt-4o-mini"
    base_url: Optional[str] = None


class ProtectRequest(BaseModel):
    text: str
    placeholder: str = DEFAULT_PLACEHOLDER


class RestoreRequest(BaseModel):
    mapped_text: str
    recovery: List[str]
    placeholder: str = DEFAULT_PLACEHOLDER


@app.post("/api/segment")
async def segment_text(req: SegmentRequest):
    tokens = [TokenModel(script=t.script.value, text=t.text, prefix=t.prefix) for t in segment(req.text)]
    return {"tokens": tokens}


@app.post("/api/format")
def format_text(req: FormatRequest):
    config = ConverterConfig(
        language_pair=req.language_pair,
        substitutions=tuple(req.substitutions),
        particles=tuple(req.particles),
    )
    backend = create_backend(req.provider, model=req.model, base_url=req.base_url)
    try:
        result = format_string(req.text, config, backend.translate, backend.transliterate)
    except TranslationUnavailable as e:
        logger.error(f"Format failed for {req.text!r}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return {"result": result}


@app.post("/api/protect")
async def protect_text(req: ProtectRequest):
    if len(req.placeholder) != 1:
        raise HTTPException(status_code=422, detail="placeholder must be a single character")
    mapped_text, recovery = protect(req.text, req.placeholder)
    return {"mapped_text": mapped_text, "recovery": recovery}


@app.post("/api/restore")
async def restore_text(req: RestoreRequest):
    if len(req.placeholder) != 1:
        raise HTTPException(status_code=422, detail="placeholder must be a single character")
    return {"text": restore(req.mapped_text, req.recovery, req.placeholder)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
