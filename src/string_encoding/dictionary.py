"""Bidirectional token/label dictionary."""

from __future__ import annotations

from string_encoding.errors import LabelNotFoundError
from string_encoding.models import DictionaryState


class StringEncodingDictionary:
    """Maps distinct tokens to integer labels and back.

    Labels are handed out in first-seen order starting at 1. Label 0 is
    never assigned and stands for "no token" in padded outputs.
    """

    FIRST_LABEL = 1

    def __init__(self) -> None:
        self._labels: dict[str, int] = {}
        self._tokens: dict[int, str] = {}

    def add_token(self, token: str) -> int:
        """Return the label of ``token``, inserting it if it is new."""
        label = self._labels.get(token)
        if label is None:
            label = len(self._labels) + self.FIRST_LABEL
            self._labels[token] = label
            self._tokens[label] = token
        return label

    def has_token(self, token: str) -> bool:
        return token in self._labels

    def label(self, token: str) -> int:
        """Return the label of a token already in the dictionary.

        Raises:
            LabelNotFoundError: If the token was never added. Check with
                ``has_token`` first or use ``add_token``.
        """
        try:
            return self._labels[token]
        except KeyError:
            raise LabelNotFoundError(f"Token not in dictionary: {token!r}") from None

    def token(self, label: int) -> str:
        """Return the token that owns ``label``."""
        try:
            return self._tokens[label]
        except KeyError:
            raise LabelNotFoundError(f"Label not in dictionary: {label}") from None

    def size(self) -> int:
        return len(self._labels)

    def clear(self) -> None:
        self._labels.clear()
        self._tokens.clear()

    def tokens(self) -> list[str]:
        """All tokens ordered by label."""
        return [self._tokens[label] for label in sorted(self._tokens)]

    @property
    def mapping(self) -> dict[str, int]:
        """Copy of the token to label mapping."""
        return dict(self._labels)

    def to_state(self) -> DictionaryState:
        return DictionaryState(tokens=self.tokens())

    @classmethod
    def from_state(cls, state: DictionaryState) -> "StringEncodingDictionary":
        """Rebuild a dictionary so every token gets back its original label."""
        dictionary = cls()
        for token in state.tokens:
            dictionary.add_token(token)
        return dictionary

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, token: object) -> bool:
        return token in self._labels

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringEncodingDictionary):
            return NotImplemented
        return self._labels == other._labels

    def __repr__(self) -> str:
        return f"StringEncodingDictionary(size={self.size()})"
