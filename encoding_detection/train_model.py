"""
Train both byte models and save them as a single artifact.

Artifact produced:
- artifacts/model.npz  (utf8_unigram, utf8_bigram, win1251_unigram, win1251_bigram)

Corpus locations default to ENCDETECT_DATA_DIR / ENCDETECT_*_CORPUS,
output directory to ENCDETECT_ART_DIR.

Run:
  encoding-detect-train
  encoding-detect-train --utf8-corpus a.txt --win1251-corpus b.txt --out /tmp/model.npz
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np

from encoding_detection.model import EPS, EncodingModel, train
from encoding_detection.utils import MODEL_ARTIFACT_NAME, art_dir, load_corpora, save_models


def _describe(name: str, model: EncodingModel) -> None:
    n_sym = int(np.count_nonzero(model.unigram > EPS))
    n_pair = int(np.count_nonzero(model.bigram > EPS))
    print(f"  {name:<13} bytes seen={n_sym:3d}/256  pairs seen={n_pair:5d}/65536")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(prog="encoding-detect-train")
    ap.add_argument("--utf8-corpus", type=str, default=None)
    ap.add_argument("--win1251-corpus", type=str, default=None)
    ap.add_argument("--out", type=str, default=None, help=f"Default: <ENCDETECT_ART_DIR>/{MODEL_ARTIFACT_NAME}")
    args = ap.parse_args(argv)

    print("Loading corpora...", flush=True)
    utf8_corpus, win1251_corpus = load_corpora(args.utf8_corpus, args.win1251_corpus)
    print(f"Corpora: utf-8={len(utf8_corpus)} bytes, windows-1251={len(win1251_corpus)} bytes")

    print("Training models...", flush=True)
    model_utf8, model_win1251 = train(utf8_corpus, win1251_corpus)
    _describe("UTF-8", model_utf8)
    _describe("Windows-1251", model_win1251)

    out = Path(args.out) if args.out else art_dir() / MODEL_ARTIFACT_NAME
    print(f"Saving artifact to: {out}")
    save_models(model_utf8, model_win1251, out)

    print("Done.")


if __name__ == "__main__":
    main()
