"""Delimiter-splitting tokenizer used by the test suite."""

from string_encoding.interfaces import TextCursor, Tokenizer


class SplitTokenizer(Tokenizer):
    """Splits on any delimiter character, skipping empty tokens."""

    def __init__(self, delimiters: str = " \t\n") -> None:
        self.delimiters = set(delimiters)

    def next_token(self, cursor: TextCursor) -> str:
        text = cursor.text
        while cursor.position < len(text) and text[cursor.position] in self.delimiters:
            cursor.position += 1
        start = cursor.position
        while cursor.position < len(text) and text[cursor.position] not in self.delimiters:
            cursor.position += 1
        return text[start:cursor.position]

    def is_token_empty(self, token: str) -> bool:
        return not token


word_alphabet = "abcdefghij"
