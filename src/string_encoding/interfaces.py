"""Abstract interfaces for string encoding.

This module defines the contracts that allow swapping the tokenizer and
the encoding algorithm used by the StringEncoding orchestrator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Iterator, Optional

from string_encoding.errors import OutOfVocabularyError, OutputShapeError

if TYPE_CHECKING:
    from string_encoding.dictionary import StringEncodingDictionary
    from string_encoding.outputs import OutputSink


@dataclass
class TextCursor:
    """Mutable read position over a single input string."""

    text: str
    position: int = 0

    @property
    def remaining(self) -> str:
        return self.text[self.position:]

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.text)


class Tokenizer(ABC):
    """Abstract interface for splitting text into tokens.

    Implementations read from a cursor and advance it. At the end of
    input they return a sentinel that ``is_token_empty`` recognises.
    """

    @abstractmethod
    def next_token(self, cursor: TextCursor) -> str:
        """Return the next token and advance the cursor past it.

        Args:
            cursor: Read position over the input text.

        Returns:
            The next token, or the empty sentinel at end of input.
        """
        pass

    @abstractmethod
    def is_token_empty(self, token: str) -> bool:
        """Return True if the token is the end-of-input sentinel."""
        pass

    def tokenize(self, text: str) -> Iterator[str]:
        """Yield every token of ``text`` using a fresh cursor."""
        cursor = TextCursor(text)
        token = self.next_token(cursor)
        while not self.is_token_empty(token):
            yield token
            token = self.next_token(cursor)


class EncodingPolicy(ABC):
    """Abstract interface for string encoding algorithms.

    A policy turns the labels of one input string into a row of the
    output. Policies whose ``one_pass_encoding`` flag is set can also
    build the dictionary and emit labels in a single traversal, which
    is only valid for ragged output.

    Strict policies (``unknown_token`` unset) reject tokens that are not
    in the dictionary with OutOfVocabularyError. Permissive policies
    reserve ``unknown_token`` when the dictionary is built and map
    every unseen token to its label.
    """

    name: ClassVar[str] = ""
    one_pass_encoding: ClassVar[bool] = False

    def __init__(self, unknown_token: Optional[str] = None) -> None:
        self.unknown_token = unknown_token

    def initialize_dictionary(
        self,
        corpus: Iterable[str],
        tokenizer: Tokenizer,
        dictionary: "StringEncodingDictionary",
    ) -> None:
        """Add every token of the corpus to the dictionary.

        Args:
            corpus: Strings to read tokens from.
            tokenizer: Tokenizer used to split each string.
            dictionary: Dictionary to grow.
        """
        if self.unknown_token is not None:
            dictionary.add_token(self.unknown_token)
        for text in corpus:
            for token in tokenizer.tokenize(text):
                dictionary.add_token(token)

    def resolve_labels(
        self,
        text: str,
        tokenizer: Tokenizer,
        dictionary: "StringEncodingDictionary",
        row: int,
    ) -> list[int]:
        """Look up the labels of one string without growing the dictionary.

        Raises:
            OutOfVocabularyError: If a token is absent and the policy is
                strict (or its unknown token is missing from the dictionary).
        """
        labels = []
        for token in tokenizer.tokenize(text):
            if dictionary.has_token(token):
                labels.append(dictionary.label(token))
            elif (
                self.unknown_token is not None
                and dictionary.has_token(self.unknown_token)
            ):
                labels.append(dictionary.label(self.unknown_token))
            else:
                raise OutOfVocabularyError(token, row)
        return labels

    def reset(self) -> None:
        """Forget statistics accumulated by a previous encode call."""
        pass

    def preprocess_row(self, row: int, labels: list[int]) -> None:
        """Accumulate statistics for one row before the output is allocated."""
        pass

    @abstractmethod
    def init_output(
        self,
        output: "OutputSink",
        num_rows: int,
        max_num_tokens: int,
        dictionary_size: int,
    ) -> None:
        """Allocate the output for a batch.

        Args:
            output: Sink to allocate.
            num_rows: Number of input strings.
            max_num_tokens: Largest token count of any input string.
            dictionary_size: Dictionary size when encoding started.
        """
        pass

    @abstractmethod
    def encode_row(self, output: "OutputSink", row: int, labels: list[int]) -> None:
        """Write the encoding of one input string into row ``row``."""
        pass

    def encode_one_pass(
        self,
        text: str,
        tokenizer: Tokenizer,
        dictionary: "StringEncodingDictionary",
    ) -> list[int]:
        """Tokenize, grow the dictionary and return labels in one traversal."""
        raise OutputShapeError(
            f"{type(self).__name__} does not support one-pass encoding"
        )

    def get_params(self) -> dict[str, Any]:
        """Constructor parameters, used to persist and rebuild the policy."""
        return {"unknown_token": self.unknown_token}

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"
