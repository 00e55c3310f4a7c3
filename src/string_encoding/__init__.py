"""Pluggable string-to-numeric encoding."""

from .config import EncodingConfig
from .dictionary import StringEncodingDictionary
from .encoding import StringEncoding
from .errors import (
    LabelNotFoundError,
    OutOfVocabularyError,
    OutputShapeError,
    StringEncodingError,
    UnknownPolicyError,
)
from .interfaces import EncodingPolicy, TextCursor, Tokenizer
from .logging_ import setup_logging, setup_logging_from_config
from .outputs import DenseOutput, OutputShape, OutputSink, RaggedOutput, SparseOutput
from .persistence import load_encoding, save_encoding
from .policies import (
    BagOfWordsEncodingPolicy,
    DictionaryEncodingPolicy,
    TfIdfEncodingPolicy,
    TfType,
    get_policy,
    list_policies,
    register_policy,
)
from .tokenization import TiktokenTokenizer

__all__ = [
    "EncodingConfig",
    "StringEncodingDictionary",
    "StringEncoding",
    "LabelNotFoundError",
    "OutOfVocabularyError",
    "OutputShapeError",
    "StringEncodingError",
    "UnknownPolicyError",
    "EncodingPolicy",
    "TextCursor",
    "Tokenizer",
    "setup_logging",
    "setup_logging_from_config",
    "DenseOutput",
    "OutputShape",
    "OutputSink",
    "RaggedOutput",
    "SparseOutput",
    "load_encoding",
    "save_encoding",
    "BagOfWordsEncodingPolicy",
    "DictionaryEncodingPolicy",
    "TfIdfEncodingPolicy",
    "TfType",
    "get_policy",
    "list_policies",
    "register_policy",
    "TiktokenTokenizer",
]
