from collections import Counter
from pathlib import Path

from hmm_tagger.data.preprocess import NEWLINE_WORD, UNK_CLASSES


def _index_words(words):
    words = sorted(set(words) | {NEWLINE_WORD} | set(UNK_CLASSES))
    word2id = {w: i for i, w in enumerate(words)}
    id2word = {i: w for i, w in enumerate(words)}
    return word2id, id2word


def build_vocab_from_file(vocab_path):
    """
    Load words from a vocab file (one per line).
    Ensures NEWLINE_WORD and the unknown-word classes are present.
    Returns: (word2id, id2word), ids dense and in sorted word order
    """
    words = []
    with open(vocab_path, encoding="utf-8") as f:
        for ln in f:
            ln = ln.strip()
            if ln:
                words.append(ln)
    return _index_words(words)


def build_vocab_from_corpus(lines, min_count=2):
    """Words seen at least min_count times in a word<TAB>tag corpus."""
    counts = Counter()
    for line in lines:
        fields = line.split()
        if fields:
            counts[fields[0]] += 1
    return _index_words(w for w, c in counts.items() if c >= min_count)


def write_vocab(path, word2id) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    words = sorted(word2id, key=word2id.get)
    path.write_text("\n".join(words), encoding="utf-8")
