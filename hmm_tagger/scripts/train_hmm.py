import argparse
from collections import Counter
from pathlib import Path

from hmm_tagger.data.datasets import load_tagged_lines
from hmm_tagger.data.preprocess import START_TAG
from hmm_tagger.data.utils import build_vocab_from_file
from hmm_tagger.models.hmm import HMMTagger


def summarize(tagger: HMMTagger, top: int = 5):
    """Short text summary of a trained tagger."""
    lines = [
        f"Tags (incl. {START_TAG}): {tagger.n_tags}",
        f"Vocabulary size: {len(tagger.vocab)}",
        f"alpha: {tagger.alpha}",
        "",
        f"Top {top} tags by frequency:",
    ]
    for tag, c in Counter(tagger.tag_counts).most_common(top):
        lines.append(f"  {tag:>6} : {c}")

    starts = sorted(
        ((cur, c) for (prev, cur), c in tagger.transition_counts.items() if prev == START_TAG),
        key=lambda x: (-x[1], x[0]),
    )
    lines.append("")
    lines.append(f"Most common tags after {START_TAG}:")
    for tag, c in starts[:top]:
        lines.append(f"  {START_TAG} -> {tag}: {c}")
    return lines


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--train_path", type=Path, default=Path("data/WSJ_02-21.pos"))
    ap.add_argument("--vocab_path", type=Path, default=Path("data/hmm_vocab.txt"))
    ap.add_argument("--alpha", type=float, default=0.001)
    ap.add_argument("--outdir", type=Path, default=Path("outputs"))
    args = ap.parse_args(argv)

    word2id, _ = build_vocab_from_file(args.vocab_path)
    corpus = load_tagged_lines(args.train_path)
    print(f"[INFO] Training on {len(corpus)} lines, vocabulary size {len(word2id)}")

    tagger = HMMTagger(corpus, word2id, alpha=args.alpha)
    for ln in summarize(tagger):
        print(ln)

    args.outdir.mkdir(parents=True, exist_ok=True)
    outpath = args.outdir / "hmm.npz"
    tagger.save(outpath)
    print(f"[SAVED] {outpath}")
    return tagger


if __name__ == "__main__":
    main()
