import string

from hmm_tagger.errors import MalformedInputError

START_TAG = "--s--"
NEWLINE_WORD = "--n--"

UNK_DIGIT = "--unk_digit--"
UNK_PUNCT = "--unk_punct--"
UNK_UPPER = "--unk_upper--"
UNK_NOUN = "--unk_noun--"
UNK_VERB = "--unk_verb--"
UNK_ADJ = "--unk_adj--"
UNK_ADV = "--unk_adv--"
UNK = "--unk--"

UNK_CLASSES = (UNK_DIGIT, UNK_PUNCT, UNK_UPPER, UNK_NOUN, UNK_VERB, UNK_ADJ, UNK_ADV, UNK)

PUNCT = set(string.punctuation)

NOUN_SUFFIX = ("action", "age", "ance", "cy", "dom", "ee", "ence", "er", "hood", "ion", "ism",
               "ist", "ity", "ling", "ment", "ness", "or", "ry", "scape", "ship", "ty")
VERB_SUFFIX = ("ate", "ify", "ise", "ize")
ADJ_SUFFIX = ("able", "ese", "ful", "i", "ian", "ible", "ic", "ish", "ive", "less", "ly", "ous")
ADV_SUFFIX = ("ward", "wards", "wise")


def assign_unk(word: str) -> str:
    """Map an out-of-vocabulary word to its unknown-word class."""
    if any(ch.isdigit() for ch in word):
        return UNK_DIGIT
    if any(ch in PUNCT for ch in word):
        return UNK_PUNCT
    if any(ch.isupper() for ch in word):
        return UNK_UPPER
    if word.endswith(NOUN_SUFFIX):
        return UNK_NOUN
    if word.endswith(VERB_SUFFIX):
        return UNK_VERB
    if word.endswith(ADJ_SUFFIX):
        return UNK_ADJ
    if word.endswith(ADV_SUFFIX):
        return UNK_ADV
    return UNK


def get_word_tag(line: str, vocab):
    """
    Split one corpus line into (word, tag).
    - blank line -> sentence boundary: (NEWLINE_WORD, START_TAG)
    - "word<TAB>tag" (any whitespace) -> word normalised against vocab
    """
    fields = line.split()
    if not fields:
        return NEWLINE_WORD, START_TAG
    if len(fields) != 2:
        raise MalformedInputError(f"Bad line (need word<TAB>tag): {line!r}")
    word, tag = fields
    if word not in vocab:
        word = assign_unk(word)
    return word, tag


def preprocess_words(words, vocab):
    """Normalise a raw word stream so every item can be looked up in vocab."""
    out = []
    for w in words:
        w = w.strip()
        if not w:
            out.append(NEWLINE_WORD)
        elif w in vocab:
            out.append(w)
        else:
            out.append(assign_unk(w))
    return out
