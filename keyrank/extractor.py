from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

import spacy
from spacy.lang.en.stop_words import STOP_WORDS
from spacy.tokens import Doc, Span

_logger = logging.getLogger(__name__)

# ── spaCy pipeline: rule-based tokenizer + sentence boundaries, no model ──
nlp = spacy.blank("en")
nlp.add_pipe("sentencizer")

SPECIAL_CHAR_RE = re.compile(r"('s|,|\.)")

PUNCTUATION = frozenset(
    "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"
    "¡¿«»‘’‚‛“”„‟–—―…·•§¶†‡′″"
)


def is_punctuation(word: str, punctuation: frozenset[str]) -> bool:
    # spaCy keeps runs like "--" or ":)" as a single token.
    return all(ch in punctuation for ch in word)


def process_word(
    word: str,
    stopwords: frozenset[str],
    punctuation: frozenset[str],
) -> str | None:
    """Cleans a single token; returns ``None`` when it should be dropped."""
    word = SPECIAL_CHAR_RE.sub("", word.strip()).lower()
    if is_punctuation(word, punctuation) or word in stopwords:
        return None
    return word


class _Cleaner:
    def __init__(
        self,
        stopwords: Iterable[str] | None,
        punctuation: Iterable[str] | None,
    ) -> None:
        self.stopwords = frozenset(STOP_WORDS if stopwords is None else stopwords)
        self.punctuation = frozenset(PUNCTUATION if punctuation is None else punctuation)

    def _clean(self, tokens: Doc | Span) -> Iterator[str]:
        for tok in tokens:
            word = process_word(tok.text, self.stopwords, self.punctuation)
            if word is not None:
                yield word

    def _join(self, tokens: Doc | Span) -> str:
        return " ".join(self._clean(tokens))


class Tokenizer(_Cleaner):
    """Splits raw text into cleaned words, sentences, phrases and paragraphs.

    Cleaning strips possessive ``'s``, commas and periods, lowercases, and
    drops stopwords and punctuation-only tokens. ``stopwords`` defaults to
    spaCy's English list; pass an empty iterable to keep every word.
    """

    def __init__(
        self,
        text: str,
        stopwords: Iterable[str] | None = None,
        punctuation: Iterable[str] | None = None,
    ) -> None:
        super().__init__(stopwords, punctuation)
        self.text = text
        self._doc = nlp(text)

    def split_into_words(self) -> list[str]:
        return list(self._clean(self._doc))

    def split_into_sentences(self) -> list[str]:
        sentences = (self._join(sent) for sent in self._doc.sents)
        return [s for s in sentences if s]

    def split_into_phrases(self, length: int | None = None) -> list[str]:
        """Runs of consecutive non-stopwords.

        A stopword or the end of a sentence ends the current phrase; other
        punctuation is skipped without ending it. With *length*, a phrase is
        also cut once it reaches that many words.
        """
        if length is not None and length < 1:
            raise ValueError(f"length must be >= 1, got {length}")

        phrases: list[str] = []
        for sent in self._doc.sents:
            phrase: list[str] = []
            for tok in sent:
                word = SPECIAL_CHAR_RE.sub("", tok.text.strip()).lower()
                if not is_punctuation(word, self.punctuation):
                    if word in self.stopwords:
                        if phrase:
                            phrases.append(" ".join(phrase))
                            phrase = []
                    else:
                        phrase.append(word)
                if length is not None and len(phrase) >= length:
                    phrases.append(" ".join(phrase))
                    phrase = []
            if phrase:
                phrases.append(" ".join(phrase))
        return phrases

    def split_into_paragraphs(self) -> list[str]:
        paragraphs: list[str] = []
        for line in self.text.splitlines():
            if not line.strip():
                continue
            paragraphs.append(self._join(nlp(line)))
        return paragraphs


class DocumentProcessor(_Cleaner):
    """Cleans a batch of raw documents into whitespace-joined token strings."""

    def __init__(
        self,
        documents: Iterable[str],
        stopwords: Iterable[str] | None = None,
        punctuation: Iterable[str] | None = None,
    ) -> None:
        super().__init__(stopwords, punctuation)
        self.documents = list(documents)

    def process_documents(self) -> list[str]:
        processed = [self._join(doc) for doc in nlp.pipe(self.documents)]
        _logger.debug("Processed %d documents", len(processed))
        return processed
