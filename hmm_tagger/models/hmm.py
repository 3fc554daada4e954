from collections import Counter
from types import MappingProxyType

import numpy as np

from hmm_tagger.data.preprocess import START_TAG, get_word_tag
from hmm_tagger.errors import LengthMismatchError, MalformedInputError, UnknownWordError


def _read_only(arr):
    arr = np.array(arr, dtype=float)
    arr.flags.writeable = False
    return arr


def _check_vocab(vocab):
    if not vocab:
        raise MalformedInputError("Vocabulary is empty")
    if sorted(vocab.values()) != list(range(len(vocab))):
        raise ValueError("Vocabulary indices must be unique and cover [0, len(vocab))")


class HMMTagger:
    """
    First-order HMM tagger:
      - one counting pass over the tagged corpus: (prev_tag, tag), (tag, word), tag
      - add-alpha smoothed transitions A [T, T] and emissions B [T, V]
      - Viterbi decoding in log-space, ties resolved towards the lowest tag index

    Tags are kept in sorted order; a tag's position is its row in A and B.
    Nothing is mutated after construction and every decode call allocates its
    own trellis, so one tagger can serve predict()/score() from several
    threads at once without locking.
    """

    def __init__(self, training_corpus, vocab, alpha=0.001, preprocessor=get_word_tag):
        if alpha <= 0:
            raise ValueError(f"alpha must be positive, got {alpha}")
        _check_vocab(vocab)
        self.alpha = alpha
        self.vocab = MappingProxyType(dict(vocab))

        self._transition_counts = Counter()  # (prev_tag, tag) -> count
        self._emission_counts = Counter()    # (tag, word) -> count
        self._tag_counts = Counter()         # tag -> count
        self._count(training_corpus, preprocessor)

        if START_TAG not in self._tag_counts:
            raise MalformedInputError(
                f"Training corpus has no {START_TAG!r} boundary lines; cannot estimate start transitions"
            )
        tags = sorted(self._tag_counts)
        self._set_parameters(tags, self._transition_matrix(tags), self._emission_matrix(tags))

    @classmethod
    def from_parameters(cls, tags, vocab, transition_matrix, emission_matrix, alpha=0.001):
        """Build a decoding-only tagger from externally estimated matrices."""
        tags = list(tags)
        if tags != sorted(set(tags)):
            raise ValueError("tags must be unique and sorted")
        if START_TAG not in tags:
            raise ValueError(f"tags must include the sentence-start tag {START_TAG!r}")
        _check_vocab(vocab)
        A = np.asarray(transition_matrix, dtype=float)
        B = np.asarray(emission_matrix, dtype=float)
        if A.shape != (len(tags), len(tags)):
            raise ValueError(f"transition matrix shape {A.shape} != {(len(tags), len(tags))}")
        if B.shape != (len(tags), len(vocab)):
            raise ValueError(f"emission matrix shape {B.shape} != {(len(tags), len(vocab))}")

        tagger = cls.__new__(cls)
        tagger.alpha = alpha
        tagger.vocab = MappingProxyType(dict(vocab))
        tagger._transition_counts = Counter()
        tagger._emission_counts = Counter()
        tagger._tag_counts = Counter()
        tagger._set_parameters(tags, A, B)
        return tagger

    # ------------------------
    # Parameter estimation
    # ------------------------

    def _count(self, training_corpus, preprocessor):
        prev_tag = START_TAG
        for line in training_corpus:
            word, tag = preprocessor(line, self.vocab)
            self._transition_counts[(prev_tag, tag)] += 1
            self._emission_counts[(tag, word)] += 1
            self._tag_counts[tag] += 1
            prev_tag = tag

    def _transition_matrix(self, tags):
        # A[i, j] = (count(t_i -> t_j) + alpha) / (alpha * T + count(t_i))
        tag2id = {t: i for i, t in enumerate(tags)}
        n_tags = len(tags)
        counts = np.zeros((n_tags, n_tags))
        for (prev, cur), c in self._transition_counts.items():
            counts[tag2id[prev], tag2id[cur]] = c
        totals = np.array([self._tag_counts[t] for t in tags], dtype=float)
        return (counts + self.alpha) / (self.alpha * n_tags + totals)[:, None]

    def _emission_matrix(self, tags):
        # B[i, w] = (count(t_i -> w) + alpha) / (alpha * V + count(t_i))
        tag2id = {t: i for i, t in enumerate(tags)}
        n_words = len(self.vocab)
        counts = np.zeros((len(tags), n_words))
        for (tag, word), c in self._emission_counts.items():
            # words outside the vocabulary (e.g. the boundary word) have no column
            if word in self.vocab:
                counts[tag2id[tag], self.vocab[word]] = c
        totals = np.array([self._tag_counts[t] for t in tags], dtype=float)
        return (counts + self.alpha) / (self.alpha * n_words + totals)[:, None]

    def _set_parameters(self, tags, A, B):
        self.tags = tuple(tags)
        self.tag2id = MappingProxyType({t: i for i, t in enumerate(self.tags)})
        self.start_idx = self.tag2id[START_TAG]
        self.transition_matrix = _read_only(A)
        self.emission_matrix = _read_only(B)
        # externally sourced matrices may hold exact zeros -> -inf
        with np.errstate(divide="ignore"):
            self._log_A = _read_only(np.log(self.transition_matrix))
            self._log_B = _read_only(np.log(self.emission_matrix))

    @property
    def transition_counts(self):
        return MappingProxyType(self._transition_counts)

    @property
    def emission_counts(self):
        return MappingProxyType(self._emission_counts)

    @property
    def tag_counts(self):
        return MappingProxyType(self._tag_counts)

    @property
    def n_tags(self):
        return len(self.tags)

    # ------------------------
    # Viterbi decoding
    # ------------------------

    def _word_ids(self, sentence):
        ids = []
        for pos, word in enumerate(sentence):
            try:
                ids.append(self.vocab[word])
            except KeyError:
                raise UnknownWordError(word, pos) from None
        return ids

    def _initialize(self, word_ids):
        """
        returns best_probs [T, L] (log-probs) and best_paths [T, L] (backpointers)
        with column 0 filled from the start-tag transitions
        """
        best_probs = np.zeros((self.n_tags, len(word_ids)))
        best_paths = np.zeros((self.n_tags, len(word_ids)), dtype=np.int64)

        start_row = self.transition_matrix[self.start_idx]
        first = self._log_A[self.start_idx] + self._log_B[:, word_ids[0]]
        best_probs[:, 0] = np.where(start_row == 0.0, -np.inf, first)
        return best_probs, best_paths

    def _forward(self, word_ids, best_probs, best_paths):
        for t in range(1, len(word_ids)):
            # scores[k, j] = best_probs[k, t-1] + ln A[k, j] + ln B[j, w_t]
            scores = best_probs[:, t - 1][:, None] + self._log_A + self._log_B[:, word_ids[t]][None, :]
            # argmax keeps the first maximum, i.e. the lowest previous-tag index
            best_paths[:, t] = scores.argmax(axis=0)
            best_probs[:, t] = scores.max(axis=0)
        return best_probs, best_paths

    def _backward(self, best_probs, best_paths):
        m = best_probs.shape[1]
        z = int(best_probs[:, m - 1].argmax())
        predictions = [self.tags[z]]
        for t in range(m - 1, 0, -1):
            z = int(best_paths[z, t])
            predictions.append(self.tags[z])
        predictions.reverse()
        return predictions

    def predict(self, sentence):
        """Most probable tag sequence for a list of in-vocabulary words."""
        if len(sentence) == 0:
            raise ValueError("Cannot decode an empty sentence")
        word_ids = self._word_ids(sentence)
        best_probs, best_paths = self._initialize(word_ids)
        best_probs, best_paths = self._forward(word_ids, best_probs, best_paths)
        return self._backward(best_probs, best_paths)

    def score(self, test_words, test_tags):
        """Per-token accuracy of predict(test_words) against test_tags."""
        if len(test_words) != len(test_tags):
            raise LengthMismatchError(
                f"test_words has {len(test_words)} items but test_tags has {len(test_tags)}"
            )
        predictions = self.predict(test_words)
        correct = sum(p == g for p, g in zip(predictions, test_tags))
        return correct / len(predictions)

    # ------------------------
    # Persistence
    # ------------------------

    def save(self, path):
        words = sorted(self.vocab, key=self.vocab.get)
        np.savez_compressed(
            path,
            tags=np.array(self.tags),
            words=np.array(words),
            transition_matrix=self.transition_matrix,
            emission_matrix=self.emission_matrix,
            alpha=np.array(self.alpha),
        )

    @classmethod
    def load(cls, path):
        with np.load(path) as data:
            tags = [str(t) for t in data["tags"]]
            vocab = {str(w): i for i, w in enumerate(data["words"])}
            return cls.from_parameters(
                tags,
                vocab,
                data["transition_matrix"],
                data["emission_matrix"],
                alpha=float(data["alpha"]),
            )
