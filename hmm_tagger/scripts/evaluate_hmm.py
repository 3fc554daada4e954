import argparse
from collections import Counter
from pathlib import Path

from hmm_tagger.data.datasets import load_tagged_lines, load_words, split_tagged_sentences
from hmm_tagger.data.preprocess import preprocess_words
from hmm_tagger.data.utils import build_vocab_from_file
from hmm_tagger.models.hmm import HMMTagger


def evaluate_sentences(tagger: HMMTagger, sentences):
    """
    Decode each (words, gold_tags) sentence and collect token-level stats:
    correct, total, accuracy, per_tag {tag: (correct, total)}, confusions Counter
    """
    correct = total = 0
    per_tag = {}
    confusions = Counter()
    for words, gold in sentences:
        pred = tagger.predict(words)
        for g, p in zip(gold, pred):
            ok = int(g == p)
            correct += ok
            total += 1
            c, n = per_tag.get(g, (0, 0))
            per_tag[g] = (c + ok, n + 1)
            if not ok:
                confusions[(g, p)] += 1
    return {
        "correct": correct,
        "total": total,
        "accuracy": correct / max(1, total),
        "per_tag": per_tag,
        "confusions": confusions,
    }


def tag_words(tagger: HMMTagger, raw_words):
    """Tag a raw word stream (blank line between sentences) -> word<TAB>tag lines."""
    out = []
    raw_sent, sent = [], []

    def flush():
        if sent:
            for raw, tag in zip(raw_sent, tagger.predict(sent)):
                out.append(f"{raw}\t{tag}")
            out.append("")
        raw_sent.clear()
        sent.clear()

    for raw, word in zip(raw_words, preprocess_words(raw_words, tagger.vocab)):
        if not raw.strip():
            flush()
            continue
        raw_sent.append(raw.strip())
        sent.append(word)
    flush()
    return out


def format_report(stats, top: int = 10):
    lines = [
        f"Accuracy: {stats['accuracy']:.4f} ({stats['correct']}/{stats['total']})",
        "",
        "Per-tag accuracy:",
        f"{'tag':<8} {'correct':>8} {'total':>8} {'acc':>7}",
    ]
    for tag in sorted(stats["per_tag"]):
        c, n = stats["per_tag"][tag]
        lines.append(f"{tag:<8} {c:>8} {n:>8} {c / n:>7.3f}")
    lines.append("")
    lines.append(f"Top {top} confusions (gold -> pred):")
    lines.append("-" * 40)
    for (g, p), c in stats["confusions"].most_common(top):
        lines.append(f"  {g:<6} -> {p:<6} {c:>6}")
    return lines


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--train_path", type=Path, default=Path("data/WSJ_02-21.pos"))
    ap.add_argument("--test_path", type=Path, default=Path("data/WSJ_24.pos"))
    ap.add_argument("--vocab_path", type=Path, default=Path("data/hmm_vocab.txt"))
    ap.add_argument("--model_path", type=Path, default=None, help="load a saved .npz model instead of training")
    ap.add_argument("--alpha", type=float, default=0.001)
    ap.add_argument("--words_path", type=Path, default=None, help="also tag a raw .words file")
    ap.add_argument("--top", type=int, default=10)
    ap.add_argument("--outdir", type=Path, default=Path("outputs"))
    args = ap.parse_args(argv)

    if args.model_path is not None:
        tagger = HMMTagger.load(args.model_path)
        print(f"[INFO] Loaded model from {args.model_path}")
    else:
        word2id, _ = build_vocab_from_file(args.vocab_path)
        tagger = HMMTagger(load_tagged_lines(args.train_path), word2id, alpha=args.alpha)
        print(f"[INFO] Trained model: {tagger.n_tags} tags, vocabulary size {len(word2id)}")

    sentences = split_tagged_sentences(load_tagged_lines(args.test_path), tagger.vocab)
    print(f"[INFO] Evaluating {len(sentences)} sentences from {args.test_path}")
    stats = evaluate_sentences(tagger, sentences)

    lines = format_report(stats, top=args.top)
    print("\n".join(lines))

    args.outdir.mkdir(parents=True, exist_ok=True)
    outpath = args.outdir / "hmm_report.txt"
    outpath.write_text("\n".join(lines), encoding="utf-8")
    print(f"[SAVED] {outpath}")

    if args.words_path is not None:
        tagged = tag_words(tagger, load_words(args.words_path))
        tagged_path = args.outdir / "tagged.pos"
        tagged_path.write_text("\n".join(tagged), encoding="utf-8")
        print(f"[SAVED] {tagged_path}")
    return stats


if __name__ == "__main__":
    main()
