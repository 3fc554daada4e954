import pytest

from hmm_tagger.data.preprocess import (
    NEWLINE_WORD,
    START_TAG,
    UNK,
    UNK_ADJ,
    UNK_ADV,
    UNK_DIGIT,
    UNK_NOUN,
    UNK_PUNCT,
    UNK_UPPER,
    UNK_VERB,
    assign_unk,
    get_word_tag,
    preprocess_words,
)
from hmm_tagger.errors import MalformedInputError

VOCAB = {"the": 0, "dog": 1, NEWLINE_WORD: 2}


@pytest.mark.parametrize("word,expected", [
    ("1987", UNK_DIGIT),
    ("a1-b", UNK_DIGIT),
    ("co-op", UNK_PUNCT),
    ("Paris", UNK_UPPER),
    ("happiness", UNK_NOUN),
    ("realize", UNK_VERB),
    ("hopeful", UNK_ADJ),
    ("backward", UNK_ADV),
    ("xyz", UNK),
])
def test_assign_unk(word, expected):
    assert assign_unk(word) == expected


def test_get_word_tag_known_word():
    assert get_word_tag("the\tDT\n", VOCAB) == ("the", "DT")


def test_get_word_tag_unknown_word_is_normalised():
    assert get_word_tag("Dogs\tNNS", VOCAB) == (UNK_UPPER, "NNS")


@pytest.mark.parametrize("line", ["", "\n", "   \t "])
def test_get_word_tag_boundary(line):
    assert get_word_tag(line, VOCAB) == (NEWLINE_WORD, START_TAG)


@pytest.mark.parametrize("line", ["dog", "dog NN extra"])
def test_get_word_tag_malformed(line):
    with pytest.raises(MalformedInputError):
        get_word_tag(line, VOCAB)


def test_preprocess_words():
    assert preprocess_words(["the", "Dog", "", "dog"], VOCAB) == ["the", UNK_UPPER, NEWLINE_WORD, "dog"]
