import pytest

from hmm_tagger.data.datasets import load_tagged_lines, load_words, split_tagged_sentences
from hmm_tagger.data.preprocess import NEWLINE_WORD, UNK, UNK_CLASSES
from hmm_tagger.data.utils import build_vocab_from_corpus, build_vocab_from_file, write_vocab

CORPUS = "the\tDT\ndog\tNN\n\nthe\tDT\ncat\tNN\nsleeps\tVBZ\n"


@pytest.fixture
def corpus_path(tmp_path):
    p = tmp_path / "train.pos"
    p.write_text(CORPUS, encoding="utf-8")
    return p


def test_load_tagged_lines_keeps_boundaries(corpus_path):
    lines = load_tagged_lines(corpus_path)
    assert lines == ["the\tDT", "dog\tNN", "", "the\tDT", "cat\tNN", "sleeps\tVBZ"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_tagged_lines(tmp_path / "nope.pos")
    with pytest.raises(FileNotFoundError):
        load_words(tmp_path / "nope.words")


def test_load_words(tmp_path):
    p = tmp_path / "test.words"
    p.write_text("the\ndog \n\nruns\n", encoding="utf-8")
    assert load_words(p) == ["the", "dog", "", "runs"]


def test_split_tagged_sentences(corpus_path):
    vocab, _ = build_vocab_from_file_text(corpus_path.parent, ["the", "dog", "cat"])
    sentences = split_tagged_sentences(load_tagged_lines(corpus_path), vocab)
    assert sentences == [
        (["the", "dog"], ["DT", "NN"]),
        (["the", "cat", UNK], ["DT", "NN", "VBZ"]),
    ]


def build_vocab_from_file_text(tmp_dir, words):
    p = tmp_dir / "vocab.txt"
    p.write_text("\n".join(words), encoding="utf-8")
    return build_vocab_from_file(p)


def test_build_vocab_from_file_is_dense_and_sorted(tmp_path):
    word2id, id2word = build_vocab_from_file_text(tmp_path, ["dog", "the", "", "dog", "cat"])
    expected = sorted({"cat", "dog", "the", NEWLINE_WORD, *UNK_CLASSES})
    assert [id2word[i] for i in range(len(id2word))] == expected
    assert sorted(word2id.values()) == list(range(len(expected)))
    assert all(id2word[i] == w for w, i in word2id.items())


def test_build_vocab_from_corpus_min_count(corpus_path):
    lines = load_tagged_lines(corpus_path)
    word2id, _ = build_vocab_from_corpus(lines, min_count=2)
    assert "the" in word2id
    assert "dog" not in word2id
    word2id, _ = build_vocab_from_corpus(lines, min_count=1)
    assert {"the", "dog", "cat", "sleeps"} <= set(word2id)


def test_write_vocab_round_trips_through_file(tmp_path):
    word2id, _ = build_vocab_from_file_text(tmp_path, ["b", "a"])
    out = tmp_path / "out" / "vocab.txt"
    write_vocab(out, word2id)
    assert build_vocab_from_file(out)[0] == word2id
