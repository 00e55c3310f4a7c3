"""Tokenizer adapters.

This module exposes third-party tokenizers through the Tokenizer
contract so their tokens can be given dictionary labels.
"""

from __future__ import annotations

import tiktoken

from string_encoding.interfaces import TextCursor, Tokenizer


class TiktokenTokenizer(Tokenizer):
    """Tokenizer yielding the text spans of tiktoken BPE tokens.

    This implementation uses OpenAI's tiktoken library, so the token
    boundaries match what GPT models see. Tokens that split a multi-byte
    character are merged into one span, so concatenating the tokens of
    a string always gives back the string.
    """

    def __init__(self, encoding: str = "cl100k_base") -> None:
        """Initialize the tokenizer with a specific encoding.

        Args:
            encoding: The tiktoken encoding to use. Common options:
                - "cl100k_base" (GPT-4, GPT-3.5-turbo)
                - "p50k_base" (Codex, text-davinci-002)
                - "r50k_base" (GPT-3 models like davinci)
        """
        self.encoding_name = encoding
        self._encoder = tiktoken.get_encoding(encoding)
        self._cached_text: str | None = None
        self._boundaries: dict[int, int] = {}

    def _compute_boundaries(self, text: str) -> dict[int, int]:
        """Map each token start offset in ``text`` to its end offset."""
        tokens = self._encoder.encode(text, disallowed_special=())
        _, offsets = self._encoder.decode_with_offsets(tokens)
        starts = sorted(set(offsets) | {0})
        ends = starts[1:] + [len(text)]
        return {start: end for start, end in zip(starts, ends) if start < end}

    def _span_boundaries(self, text: str) -> dict[int, int]:
        """Boundaries of ``text``, cached for the text being walked."""
        if text != self._cached_text:
            self._boundaries = self._compute_boundaries(text)
            self._cached_text = text
        return self._boundaries

    def next_token(self, cursor: TextCursor) -> str:
        if cursor.exhausted:
            return ""
        boundaries = self._span_boundaries(cursor.text)
        end = boundaries.get(cursor.position)
        if end is None:
            # Cursor moved off a token boundary; tokenize what is left
            end = cursor.position + self._compute_boundaries(cursor.remaining)[0]
        token = cursor.text[cursor.position:end]
        cursor.position = end
        return token

    def is_token_empty(self, token: str) -> bool:
        return not token

    def __repr__(self) -> str:
        return f"TiktokenTokenizer(encoding={self.encoding_name!r})"
