"""Unit tests for the co-occurrence matrix (keyrank.co_occurrence.CoOccurrence)."""

import numpy as np
import pytest

from keyrank.co_occurrence import CoOccurrence

VOCAB = ["cat", "dog", "mouse"]
DOCS = [["cat", "chased", "dog"], ["dog", "chased", "mouse"]]


def test_cat_and_dog_related_within_two_positions(mapper) -> None:
    # "cat" and "dog" sit two positions apart, so radius 2 is the smallest
    # window that relates them (see DESIGN.md, decision 5).
    co = CoOccurrence(DOCS, VOCAB, window_size=2, mapper=mapper)

    assert co.get_relation("cat", "dog") > 0
    assert co.get_relation("cat", "mouse") == 0.0


def test_radius_one_skips_words_two_apart(mapper) -> None:
    co = CoOccurrence(DOCS, VOCAB, window_size=1, mapper=mapper)

    assert co.get_relation("cat", "dog") == 0.0
    assert co.get_relation("cat", "mouse") == 0.0
    assert not co.get_matrix().any()


def test_unknown_term_is_absent_not_zero() -> None:
    co = CoOccurrence(DOCS, VOCAB, window_size=2)

    assert co.get_relation("cat", "unknown_term") is None
    assert co.get_relation("unknown_term", "cat") is None
    assert co.get_matrix_row("unknown_term") is None
    assert co.get_relations("unknown_term") is None


def test_normalised_counts(mapper) -> None:
    # a-b co-occur twice from each side, a-c once.
    co = CoOccurrence(["a b a c"], ["a", "b", "c"], window_size=1, mapper=mapper)

    assert co.get_matrix().max() == 1.0
    assert co.get_relation("a", "b") == 1.0
    assert co.get_relation("a", "c") == 0.5
    assert co.get_relation("b", "c") == 0.0
    assert co.get_relations("a") == [("b", 1.0), ("c", 0.5)]
    assert co.get_relations("b") == [("a", 1.0)]


def test_matrix_is_symmetric(mapper) -> None:
    docs = [
        "graph rank word graph score",
        "word score rank rank graph",
        "score word graph",
    ]
    vocab = ["graph", "rank", "word", "score"]
    co = CoOccurrence(docs, vocab, window_size=2, mapper=mapper)

    matrix = co.get_matrix()
    assert np.array_equal(matrix, matrix.T)
    for a in vocab:
        for b in vocab:
            assert co.get_relation(a, b) == co.get_relation(b, a)


def test_no_cooccurrence_leaves_zero_matrix() -> None:
    co = CoOccurrence(["cat", "dog"], VOCAB, window_size=3)

    assert co.get_matrix().shape == (3, 3)
    assert not co.get_matrix().any()
    assert co.get_relations("cat") == []


def test_labels_follow_vocabulary_order() -> None:
    co = CoOccurrence([], ["b", "a", "b", "c"], window_size=1)

    assert len(co) == 3
    assert co.get_label("b") == 0
    assert co.get_label("a") == 1
    assert co.get_label("c") == 2
    assert co.get_label("z") is None
    assert co.get_word(1) == "a"
    assert co.get_word(3) is None
    assert co.get_word(-1) is None
    assert dict(co.get_labels()) == {"b": 0, "a": 1, "c": 2}


def test_matrix_row_is_a_copy() -> None:
    co = CoOccurrence(["a b"], ["a", "b"], window_size=1)

    row = co.get_matrix_row("a")
    assert row.tolist() == [0.0, 1.0]
    row[1] = 5.0
    assert co.get_relation("a", "b") == 1.0


def test_matrix_is_read_only() -> None:
    co = CoOccurrence(["a b"], ["a", "b"], window_size=1)

    with pytest.raises(ValueError):
        co.get_matrix()[0, 0] = 1.0
    with pytest.raises(TypeError):
        co.get_labels()["c"] = 2


def test_serial_and_threaded_results_identical() -> None:
    from keyrank.parallel import SerialMapper, ThreadPoolMapper

    docs = [" ".join(["alpha", "beta", "gamma", "delta"][i % 4] for i in range(n, n + 30)) for n in range(12)]
    vocab = ["alpha", "beta", "gamma", "delta"]
    serial = CoOccurrence(docs, vocab, window_size=3, mapper=SerialMapper())
    threaded = CoOccurrence(docs, vocab, window_size=3, mapper=ThreadPoolMapper(4))

    assert np.array_equal(serial.get_matrix(), threaded.get_matrix())


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        CoOccurrence(DOCS, VOCAB, window_size=-1)


def test_from_documents_cleans_raw_text() -> None:
    raw = ["The cat chased the dog.", "The dog, chased the mouse!"]
    co = CoOccurrence.from_documents(raw, VOCAB, window_size=2)
    expected = CoOccurrence(["cat chased dog", "dog chased mouse"], VOCAB, window_size=2)

    assert np.array_equal(co.get_matrix(), expected.get_matrix())
