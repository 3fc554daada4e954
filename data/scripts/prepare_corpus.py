#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Prepare a tagged corpus (word<TAB>tag per line, blank line between sentences)
for HMM training:
- Build the word vocabulary (words seen >= min_count times + unknown-word classes)
- Print a compact corpus report
"""
from __future__ import annotations
import argparse
from collections import Counter
from pathlib import Path
from typing import Dict, List

from hmm_tagger.data.datasets import load_tagged_lines
from hmm_tagger.data.utils import build_vocab_from_corpus, write_vocab


# ---------------------------
# Stats
# ---------------------------

def corpus_stats(lines: List[str]) -> Dict[str, int]:
    words = Counter()
    tags = Counter()
    n_sents = 0
    in_sentence = False
    for ln in lines:
        fields = ln.split()
        if not fields:
            if in_sentence:
                n_sents += 1
            in_sentence = False
            continue
        if len(fields) != 2:
            continue
        words[fields[0]] += 1
        tags[fields[1]] += 1
        in_sentence = True
    if in_sentence:
        n_sents += 1
    return {
        "n_tokens": sum(words.values()),
        "n_types": len(words),
        "n_hapax": sum(1 for c in words.values() if c == 1),
        "n_tags": len(tags),
        "n_sentences": n_sents,
    }


def report_stats(stats: Dict[str, int], vocab_size: int) -> None:
    print("\n== Corpus ==")
    header = f"{'sentences':>10} {'tokens':>9} {'types':>8} {'hapax':>8} {'tags':>6} {'vocab':>8}"
    print(header)
    print("-" * len(header))
    print(f"{stats['n_sentences']:>10} {stats['n_tokens']:>9} {stats['n_types']:>8} "
          f"{stats['n_hapax']:>8} {stats['n_tags']:>6} {vocab_size:>8}")


# ---------------------------
# Main
# ---------------------------

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--train_path", type=Path, default=Path("data/WSJ_02-21.pos"))
    ap.add_argument("--vocab_path", type=Path, default=Path("data/hmm_vocab.txt"))
    ap.add_argument("--min_count", type=int, default=2)
    args = ap.parse_args(argv)

    lines = load_tagged_lines(args.train_path)
    word2id, _ = build_vocab_from_corpus(lines, min_count=args.min_count)
    write_vocab(args.vocab_path, word2id)

    stats = corpus_stats(lines)
    if stats["n_tokens"] == 0:
        print(f"[WARN] No tagged tokens found in {args.train_path}")
    report_stats(stats, len(word2id))
    print(f"\nVocabulary written to {args.vocab_path}  (size={len(word2id)}, min_count={args.min_count})")
    return stats


if __name__ == "__main__":
    main()
