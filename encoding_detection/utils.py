"""
Utility functions for encoding detection: configuration, file I/O, artifacts.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from encoding_detection.model import N_PAIRS, N_SYMBOLS, EncodingModel, train

DEFAULT_DATA_DIR = Path("data")
DEFAULT_ART_DIR = Path("artifacts")

UTF8_CORPUS_NAME = "war-and-peace-utf-8.txt"
WIN1251_CORPUS_NAME = "war-and-peace-windows-1251.txt"
MODEL_ARTIFACT_NAME = "model.npz"

ARTIFACT_SHAPES = {
    "utf8_unigram": (N_SYMBOLS,),
    "utf8_bigram": (N_PAIRS,),
    "win1251_unigram": (N_SYMBOLS,),
    "win1251_bigram": (N_PAIRS,),
}


# -----------------------------
# Config (env vars)
# -----------------------------
def data_dir() -> Path:
    return Path(os.getenv("ENCDETECT_DATA_DIR", str(DEFAULT_DATA_DIR)).strip())


def corpus_paths() -> Tuple[Path, Path]:
    """
    Reference corpus locations.

    ENCDETECT_UTF8_CORPUS / ENCDETECT_WIN1251_CORPUS override the individual
    files; otherwise both are looked up in ENCDETECT_DATA_DIR (default ./data).
    """
    base = data_dir()
    utf8 = os.getenv("ENCDETECT_UTF8_CORPUS", "").strip()
    win1251 = os.getenv("ENCDETECT_WIN1251_CORPUS", "").strip()
    return (
        Path(utf8) if utf8 else base / UTF8_CORPUS_NAME,
        Path(win1251) if win1251 else base / WIN1251_CORPUS_NAME,
    )


def art_dir() -> Path:
    return Path(os.getenv("ENCDETECT_ART_DIR", str(DEFAULT_ART_DIR)).strip())


def verbose() -> bool:
    return os.getenv("ENCDETECT_VERBOSE", "").strip().lower() in ("1", "true", "yes")


def log(msg: str, name: str = "encoding_detection") -> None:
    """Diagnostics on stderr, only when ENCDETECT_VERBOSE is enabled."""
    if verbose():
        print(f"[{name}] {msg}", file=sys.stderr, flush=True)


# -----------------------------
# File I/O
# -----------------------------
def read_file(path) -> bytes:
    """Read a whole file as raw bytes."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileNotFoundError(f"unable to open file '{path}'") from e


def load_corpora(utf8_path=None, win1251_path=None) -> Tuple[bytes, bytes]:
    default_utf8, default_win1251 = corpus_paths()
    utf8_path = Path(utf8_path) if utf8_path is not None else default_utf8
    win1251_path = Path(win1251_path) if win1251_path is not None else default_win1251

    log(f"Reading UTF-8 corpus: {utf8_path}")
    utf8_corpus = read_file(utf8_path)
    log(f"Reading Windows-1251 corpus: {win1251_path}")
    win1251_corpus = read_file(win1251_path)
    return utf8_corpus, win1251_corpus


def train_from_corpora(utf8_path=None, win1251_path=None) -> Tuple[EncodingModel, EncodingModel]:
    utf8_corpus, win1251_corpus = load_corpora(utf8_path, win1251_path)
    models = train(utf8_corpus, win1251_corpus)
    log(f"Trained on {len(utf8_corpus)} + {len(win1251_corpus)} bytes")
    return models


# -----------------------------
# Artifacts
# -----------------------------
def save_models(model_utf8: EncodingModel, model_win1251: EncodingModel, path) -> Path:
    path = Path(path)
    if path.suffix != ".npz":
        # np.savez appends the suffix itself
        path = path.with_name(path.name + ".npz")
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(
        path,
        utf8_unigram=model_utf8.unigram,
        utf8_bigram=model_utf8.bigram,
        win1251_unigram=model_win1251.unigram,
        win1251_bigram=model_win1251.bigram,
    )
    return path


def load_models(path: Optional[Path] = None) -> Tuple[EncodingModel, EncodingModel]:
    """
    Load the two models written by save_models().

    Raises:
        FileNotFoundError: artifact does not exist
        ValueError: missing key or wrong table shape
    """
    path = Path(path) if path is not None else art_dir() / MODEL_ARTIFACT_NAME
    if not path.exists():
        raise FileNotFoundError(
            f"Missing model artifact: {path}\n"
            f"Train with: encoding-detect-train --out {path}"
        )

    with np.load(path, allow_pickle=False) as data:
        tables = {}
        for key, shape in ARTIFACT_SHAPES.items():
            if key not in data.files:
                raise ValueError(f"{path} must contain key '{key}'")
            arr = data[key]
            if arr.shape != shape:
                raise ValueError(f"{path}: '{key}' has shape {arr.shape}, expected {shape}")
            tables[key] = arr

    return (
        EncodingModel(unigram=tables["utf8_unigram"], bigram=tables["utf8_bigram"]),
        EncodingModel(unigram=tables["win1251_unigram"], bigram=tables["win1251_bigram"]),
    )
