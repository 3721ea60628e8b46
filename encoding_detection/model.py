"""
Byte-statistics model for UTF-8 / Windows-1251 detection.

Keeps the detection contract:
    train(utf8_corpus: bytes, win1251_corpus: bytes) -> (EncodingModel, EncodingModel)
    detect(model_utf8, model_win1251, text: bytes) -> Encoding

Each EncodingModel holds two read-only tables:
- unigram: (256,)   float64, count(byte) / len(corpus)
- bigram:  (65536,) float64, count(prev << 8 | cur) / (len(corpus) - 1)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

N_SYMBOLS = 1 << 8
N_PAIRS = 1 << 16

# Probabilities at or below this are treated as unseen and add no penalty.
EPS = 1e-12


class EmptyInputError(ValueError):
    """Raised when a training corpus or a detection input has zero length."""


class Encoding(str, Enum):
    UTF_8 = "UTF-8"
    WINDOWS_1251 = "Windows 1251"

    @property
    def codec(self) -> str:
        return "utf-8" if self is Encoding.UTF_8 else "cp1251"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class EncodingModel:
    unigram: np.ndarray  # (256,)
    bigram: np.ndarray   # (65536,)

    def __post_init__(self):
        unigram = np.array(self.unigram, dtype=np.float64)
        bigram = np.array(self.bigram, dtype=np.float64)
        if unigram.shape != (N_SYMBOLS,):
            raise ValueError(f"unigram must have shape ({N_SYMBOLS},), got {unigram.shape}")
        if bigram.shape != (N_PAIRS,):
            raise ValueError(f"bigram must have shape ({N_PAIRS},), got {bigram.shape}")

        unigram.setflags(write=False)
        bigram.setflags(write=False)
        object.__setattr__(self, "unigram", unigram)
        object.__setattr__(self, "bigram", bigram)


# ------------------------------------------------------------
# Training
# ------------------------------------------------------------
def _as_array(data: bytes) -> np.ndarray:
    return np.frombuffer(bytes(data), dtype=np.uint8)


def _pair_index(arr: np.ndarray) -> np.ndarray:
    """Packed (previous << 8) | current index for every adjacent pair."""
    prev = arr[:-1].astype(np.intp)
    cur = arr[1:].astype(np.intp)
    return (prev << 8) | cur


def count_symbols_and_pairs(data: bytes) -> Tuple[np.ndarray, np.ndarray]:
    """
    Count single bytes and adjacent byte pairs.

    Returns:
        symbol_counts: (256,) int64
        pair_counts: (65536,) int64, indexed by (data[i-1] << 8) | data[i]
    """
    arr = _as_array(data)
    symbol_counts = np.bincount(arr, minlength=N_SYMBOLS).astype(np.int64)
    pair_counts = np.bincount(_pair_index(arr), minlength=N_PAIRS).astype(np.int64)
    return symbol_counts, pair_counts


def build_model(corpus: bytes) -> EncodingModel:
    """Normalize the counts of a single reference corpus into an EncodingModel."""
    n = len(corpus)
    if n == 0:
        raise EmptyInputError("empty corpus: cannot train on a zero-length byte sequence")

    symbol_counts, pair_counts = count_symbols_and_pairs(corpus)

    unigram = symbol_counts / float(n)
    if n > 1:
        bigram = pair_counts / float(n - 1)
    else:
        # a single byte has no pairs
        bigram = np.zeros(N_PAIRS, dtype=np.float64)

    return EncodingModel(unigram=unigram, bigram=bigram)


def train(utf8_corpus: bytes, win1251_corpus: bytes) -> Tuple[EncodingModel, EncodingModel]:
    """Build the UTF-8 and Windows-1251 models from their reference corpora."""
    return build_model(utf8_corpus), build_model(win1251_corpus)


# ------------------------------------------------------------
# Scoring / detection
# ------------------------------------------------------------
def score(model: EncodingModel, text: bytes) -> float:
    """
    Accumulated negative log-likelihood of `text` under `model`.

    The first byte contributes -ln P(b0). Every later position i contributes
    -(ln P(b[i]) + ln P(b[i-1], b[i])) only when both probabilities exceed EPS;
    otherwise it contributes nothing.
    """
    arr = _as_array(text)
    if arr.size == 0:
        raise EmptyInputError("empty input: nothing to score")

    total = 0.0

    p_first = model.unigram[arr[0]]
    if p_first > EPS:
        total -= float(np.log(p_first))

    if arr.size > 1:
        p_sym = model.unigram[arr[1:]]
        p_pair = model.bigram[_pair_index(arr)]
        seen = (p_sym > EPS) & (p_pair > EPS)
        if np.any(seen):
            total -= float(np.sum(np.log(p_sym[seen]) + np.log(p_pair[seen])))

    return total


def detect(model_utf8: EncodingModel, model_win1251: EncodingModel, text: bytes) -> Encoding:
    """
    Pick the encoding whose model gives `text` the higher score.

    Ties go to Windows-1251.
    """
    if len(text) == 0:
        raise EmptyInputError("empty input: cannot detect the encoding of a zero-length byte sequence")

    utf8_score = score(model_utf8, text)
    win1251_score = score(model_win1251, text)

    return Encoding.UTF_8 if utf8_score > win1251_score else Encoding.WINDOWS_1251
