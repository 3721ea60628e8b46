#!/usr/bin/env python3
"""
Command-line encoding detector.

Usage:
    encoding-detect [FILE]

Trains both models from the reference corpora (see utils.corpus_paths), then
prints "UTF-8" or "Windows 1251" for FILE. Without FILE it only trains.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from encoding_detection.model import EmptyInputError, detect
from encoding_detection.utils import log, read_file, train_from_corpora


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="encoding-detect",
        description="Guess whether a text file is UTF-8 or Windows-1251.",
    )
    ap.add_argument("file", nargs="?", default=None, help="File to classify")
    return ap


def run(file_name: str, models) -> str:
    model_utf8, model_win1251 = models
    text = read_file(file_name)
    log(f"Detecting {file_name} ({len(text)} bytes)", name="detect.py")
    return str(detect(model_utf8, model_win1251, text))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        models = train_from_corpora()
        if args.file is not None:
            print(run(args.file, models))
    except (OSError, EmptyInputError) as e:
        raise SystemExit(f"encoding-detect: {e}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
