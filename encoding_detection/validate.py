"""Leakage-free local validation for encoding detection.

IMPORTANT:
- Models are trained ONLY on the leading part of each corpus
- The trailing validation part is NEVER seen during training
- Artifacts are NOT used
"""

from __future__ import annotations

import argparse
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from encoding_detection.model import Encoding, EncodingModel, detect, train
from encoding_detection.utils import load_corpora


def split_corpus(data: bytes, val_frac: float) -> Tuple[bytes, bytes]:
    """Leading (train) / trailing (validation) split of a corpus."""
    if not 0.0 < val_frac < 1.0:
        raise ValueError(f"val_frac must be in (0, 1), got {val_frac}")
    cut = len(data) - int(len(data) * val_frac)
    return data[:cut], data[cut:]


def chunk_bytes(data: bytes, size: int) -> List[bytes]:
    """Non-overlapping chunks of `size` bytes; a shorter tail is dropped."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [data[i:i + size] for i in range(0, len(data) - size + 1, size)]


def evaluate(
    model_utf8: EncodingModel,
    model_win1251: EncodingModel,
    samples: Iterable[Tuple[bytes, Encoding]],
) -> Dict:
    """
    Detect every (text, expected) sample.

    Returns:
        dict with n_samples, accuracy and a per-encoding {"n", "accuracy"} entry
    """
    hits: Dict[Encoding, List[bool]] = {e: [] for e in Encoding}
    for text, expected in samples:
        hits[expected].append(detect(model_utf8, model_win1251, text) == expected)

    all_hits = [h for e in Encoding for h in hits[e]]
    result = {
        "n_samples": len(all_hits),
        "accuracy": float(np.mean(all_hits)) if all_hits else float("nan"),
    }
    for e in Encoding:
        result[e.value] = {
            "n": len(hits[e]),
            "accuracy": float(np.mean(hits[e])) if hits[e] else float("nan"),
        }
    return result


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="encoding-detect-validate")
    ap.add_argument("--utf8-corpus", type=str, default=None)
    ap.add_argument("--win1251-corpus", type=str, default=None)
    ap.add_argument("--val-frac", type=float, default=0.15)
    ap.add_argument("--chunk-size", type=int, default=256)
    args = ap.parse_args(argv)

    print("Loading corpora...")
    utf8_corpus, win1251_corpus = load_corpora(args.utf8_corpus, args.win1251_corpus)

    utf8_train, utf8_val = split_corpus(utf8_corpus, args.val_frac)
    win_train, win_val = split_corpus(win1251_corpus, args.val_frac)

    print(f"Train bytes: utf-8={len(utf8_train)} windows-1251={len(win_train)}")
    print(f"Val bytes  : utf-8={len(utf8_val)} windows-1251={len(win_val)}")

    print("Training models...")
    model_utf8, model_win1251 = train(utf8_train, win_train)

    samples = [(c, Encoding.UTF_8) for c in chunk_bytes(utf8_val, args.chunk_size)]
    samples += [(c, Encoding.WINDOWS_1251) for c in chunk_bytes(win_val, args.chunk_size)]
    if not samples:
        raise ValueError(
            f"No validation chunks of {args.chunk_size} bytes. "
            f"Lower --chunk-size or raise --val-frac."
        )

    result = evaluate(model_utf8, model_win1251, samples)

    print("\n========== LEAKAGE-FREE VALIDATION ==========")
    print(f"Chunk size   : {args.chunk_size} bytes")
    for e in Encoding:
        r = result[e.value]
        print(f"{e.value:<13}: {r['accuracy']:.4f}  (n={r['n']})")
    print(f"Overall      : {result['accuracy']:.4f}  (n={result['n_samples']})")
    print("============================================\n")


if __name__ == "__main__":
    main()
