"""
FastAPI endpoint for encoding detection.

Usage:
    python -m encoding_detection.api

The server will start on http://0.0.0.0:4321

Models are loaded once per process: from ENCDETECT_ART_DIR/model.npz when it
exists (see train_model.py), otherwise trained from the reference corpora.
"""

from __future__ import annotations

import base64
import threading

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from encoding_detection.model import EmptyInputError, detect
from encoding_detection.utils import MODEL_ARTIFACT_NAME, art_dir, load_models, train_from_corpora

HOST = "0.0.0.0"
PORT = 4321

# -----------------------------
# Lazy globals
# -----------------------------
_MODELS = None
_MODELS_LOCK = threading.Lock()


def get_models():
    """(model_utf8, model_win1251), built on first use and shared read-only after."""
    global _MODELS
    if _MODELS is not None:
        return _MODELS

    with _MODELS_LOCK:
        if _MODELS is None:
            artifact = art_dir() / MODEL_ARTIFACT_NAME
            if artifact.exists():
                _MODELS = load_models(artifact)
                print(f"[api.py] Loaded models from artifact: {artifact}", flush=True)
            else:
                _MODELS = train_from_corpora()
                print("[api.py] Trained models from reference corpora", flush=True)
    return _MODELS


def set_models(models) -> None:
    """Install an explicit (model_utf8, model_win1251) pair, or None to reload lazily."""
    global _MODELS
    with _MODELS_LOCK:
        _MODELS = models


class DetectRequest(BaseModel):
    text: str = Field(..., description="base64-encoded raw bytes of the text to classify")


class DetectResponse(BaseModel):
    encoding: str  # "UTF-8" | "Windows 1251"
    codec: str     # Python codec name: "utf-8" | "cp1251"


app = FastAPI(
    title="Encoding Detection API",
    description="Classify raw text bytes as UTF-8 or Windows-1251",
    version="1.0.0",
)


@app.get("/")
def index():
    return {"status": "running", "message": "Encoding Detection API"}


@app.get("/api")
def api_info():
    return {
        "service": "encoding-detection",
        "version": "1.0.0",
        "endpoints": {
            "/": "Health check",
            "/api": "API information",
            "/detect": "POST - Detect the encoding of base64-encoded bytes",
        },
    }


@app.post("/detect", response_model=DetectResponse)
def detect_endpoint(request: DetectRequest):
    try:
        text = base64.b64decode(request.text, validate=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 text: {e}")

    model_utf8, model_win1251 = get_models()
    try:
        encoding = detect(model_utf8, model_win1251, text)
    except EmptyInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DetectResponse(encoding=encoding.value, codec=encoding.codec)


def main() -> None:
    print(f"Starting server on http://{HOST}:{PORT}", flush=True)
    uvicorn.run(app, host=HOST, port=PORT, reload=False, log_level="info", access_log=False)


if __name__ == "__main__":
    main()
