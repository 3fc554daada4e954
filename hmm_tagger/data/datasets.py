from pathlib import Path

from hmm_tagger.data.preprocess import get_word_tag


def ensure_exists(path: Path) -> None:
    if not path.is_file():
        raise FileNotFoundError(f"Missing file: {path}")


def load_tagged_lines(path):
    """Raw lines of a word<TAB>tag corpus; blank lines are kept as sentence boundaries."""
    p = Path(path)
    ensure_exists(p)
    return p.read_text(encoding="utf-8").splitlines()


def load_words(path):
    p = Path(path)
    ensure_exists(p)
    return [ln.strip() for ln in p.read_text(encoding="utf-8").splitlines()]


def split_tagged_sentences(lines, vocab, preprocessor=get_word_tag):
    """Group tagged lines into (words, tags) sentences at blank boundary lines."""
    sentences = []
    words, tags = [], []
    for line in lines:
        if not line.strip():
            if words:
                sentences.append((words, tags))
            words, tags = [], []
            continue
        word, tag = preprocessor(line, vocab)
        words.append(word)
        tags.append(tag)
    if words:
        sentences.append((words, tags))
    return sentences
