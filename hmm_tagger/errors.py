class HMMTaggerError(Exception):
    """Base class for tagger failures."""


class MalformedInputError(HMMTaggerError, ValueError):
    """Training data that cannot be turned into (word, tag) counts."""


class UnknownWordError(HMMTaggerError, KeyError):
    def __init__(self, word, position):
        super().__init__(word)
        self.word = word
        self.position = position

    def __str__(self):
        return f"Word {self.word!r} at position {self.position} is not in the vocabulary"


class LengthMismatchError(HMMTaggerError, ValueError):
    """score() called with word and tag sequences of different lengths."""
