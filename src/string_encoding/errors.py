"""Exception hierarchy for string encoding."""


class StringEncodingError(Exception):
    """Base exception for string encoding errors."""
    pass


class OutOfVocabularyError(StringEncodingError):
    """A token without a label was met while encoding against a fixed dictionary."""

    def __init__(self, token: str, row: int):
        self.token = token
        self.row = row
        super().__init__(
            f"Token {token!r} in row {row} is not in the dictionary; "
            f"call create_map() on a corpus that contains it first"
        )


class LabelNotFoundError(StringEncodingError, KeyError):
    """Dictionary lookup of a token or label that was never inserted."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class OutputShapeError(StringEncodingError, ValueError):
    """The requested output shape cannot be produced by the chosen pipeline."""
    pass


class UnknownPolicyError(StringEncodingError, KeyError):
    """No encoding policy is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
