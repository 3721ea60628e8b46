"""
UTF-8 / Windows-1251 detection from byte unigram and bigram statistics.
"""

from encoding_detection.model import (
    EPS,
    EmptyInputError,
    Encoding,
    EncodingModel,
    build_model,
    count_symbols_and_pairs,
    detect,
    score,
    train,
)

__all__ = [
    "EPS",
    "EmptyInputError",
    "Encoding",
    "EncodingModel",
    "build_model",
    "count_symbols_and_pairs",
    "detect",
    "score",
    "train",
]
