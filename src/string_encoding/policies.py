"""Encoding policies and the policy registry.

Add new policies without changing the orchestrator by registering
them here.
"""

from __future__ import annotations

import math
from collections import Counter
from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from string_encoding.dictionary import StringEncodingDictionary
from string_encoding.errors import UnknownPolicyError
from string_encoding.interfaces import EncodingPolicy, Tokenizer
from string_encoding.models import PolicyState
from string_encoding.outputs import OutputSink


class DictionaryEncodingPolicy(EncodingPolicy):
    """Encodes each string as the sequence of its token labels.

    Fixed-width output has one column per token position, up to the
    longest string of the batch; shorter rows are padded with 0.
    Ragged output holds the label sequences themselves. This policy
    supports one-pass encoding.
    """

    name = "dictionary"
    one_pass_encoding = True

    def init_output(
        self,
        output: OutputSink,
        num_rows: int,
        max_num_tokens: int,
        dictionary_size: int,
    ) -> None:
        output.allocate(num_rows, max_num_tokens)

    def encode_row(self, output: OutputSink, row: int, labels: list[int]) -> None:
        if output.shape.fixed_width:
            for col, label in enumerate(labels):
                output.set(row, col, label)
        else:
            output.extend(row, labels)

    def encode_one_pass(
        self,
        text: str,
        tokenizer: Tokenizer,
        dictionary: StringEncodingDictionary,
    ) -> list[int]:
        return [dictionary.add_token(token) for token in tokenizer.tokenize(text)]


class BagOfWordsEncodingPolicy(EncodingPolicy):
    """Encodes each string as token counts, one column per dictionary label.

    The count of the token with label ``l`` lands in column ``l - 1``.
    Ragged output holds a full count vector per string.
    """

    name = "bag_of_words"

    def __init__(self, unknown_token: Optional[str] = None) -> None:
        super().__init__(unknown_token=unknown_token)
        self.dictionary_size = 0

    def init_output(
        self,
        output: OutputSink,
        num_rows: int,
        max_num_tokens: int,
        dictionary_size: int,
    ) -> None:
        self.dictionary_size = dictionary_size
        output.allocate(num_rows, dictionary_size)

    def row_values(self, row: int, labels: list[int]) -> dict[int, float]:
        """Map label to cell value for one row."""
        return dict(Counter(labels))

    def encode_row(self, output: OutputSink, row: int, labels: list[int]) -> None:
        values = self.row_values(row, labels)
        if output.shape.fixed_width:
            for label, value in values.items():
                output.set(row, label - 1, value)
        else:
            vector = [0] * self.dictionary_size
            for label, value in values.items():
                vector[label - 1] = value
            output.extend(row, vector)


class TfType(str, Enum):
    """Term frequency variants for TF-IDF.

    LOG_NORMALIZATION is ``log(1 + count)``, which stays finite for every
    count. It is not the sublinear ``1 + log(count)`` variant.
    """

    RAW_COUNT = "raw_count"
    BINARY = "binary"
    SUM_NORMALIZATION = "sum_normalization"
    LOG_NORMALIZATION = "log_normalization"


class TfIdfEncodingPolicy(BagOfWordsEncodingPolicy):
    """Encodes each string as TF-IDF weights, one column per dictionary label.

    Document frequencies are counted over the batch being encoded.
    With ``smooth_idf`` the inverse document frequency is
    ``log((1 + N) / (1 + df)) + 1``, otherwise ``log(N / df) + 1``,
    where N is the number of strings in the batch.
    """

    name = "tfidf"

    def __init__(
        self,
        tf_type: Union[TfType, str] = TfType.RAW_COUNT,
        smooth_idf: bool = True,
        unknown_token: Optional[str] = None,
    ) -> None:
        super().__init__(unknown_token=unknown_token)
        self.tf_type = TfType(tf_type)
        self.smooth_idf = smooth_idf
        self.num_rows = 0
        self.document_frequency: Counter = Counter()
        self.row_lengths: Dict[int, int] = {}

    def reset(self) -> None:
        self.num_rows = 0
        self.document_frequency = Counter()
        self.row_lengths = {}

    def preprocess_row(self, row: int, labels: list[int]) -> None:
        self.num_rows += 1
        self.row_lengths[row] = len(labels)
        self.document_frequency.update(set(labels))

    def term_frequency(self, count: int, row_length: int) -> float:
        if self.tf_type is TfType.BINARY:
            return 1.0 if count > 0 else 0.0
        if self.tf_type is TfType.SUM_NORMALIZATION:
            return count / row_length
        if self.tf_type is TfType.LOG_NORMALIZATION:
            return math.log(1 + count)
        return float(count)

    def inverse_document_frequency(self, label: int) -> float:
        df = self.document_frequency[label]
        if self.smooth_idf:
            return math.log((1 + self.num_rows) / (1 + df)) + 1
        return math.log(self.num_rows / df) + 1

    def row_values(self, row: int, labels: list[int]) -> dict[int, float]:
        row_length = self.row_lengths.get(row, len(labels))
        return {
            label: self.term_frequency(count, row_length)
            * self.inverse_document_frequency(label)
            for label, count in Counter(labels).items()
        }

    def get_params(self) -> dict[str, Any]:
        params = super().get_params()
        params.update(tf_type=self.tf_type.value, smooth_idf=self.smooth_idf)
        return params


_POLICIES: Dict[str, Type[EncodingPolicy]] = {
    DictionaryEncodingPolicy.name: DictionaryEncodingPolicy,
    BagOfWordsEncodingPolicy.name: BagOfWordsEncodingPolicy,
    TfIdfEncodingPolicy.name: TfIdfEncodingPolicy,
}


def register_policy(policy_cls: Type[EncodingPolicy]) -> Type[EncodingPolicy]:
    """Register a policy class under its ``name``.

    Usable as a class decorator. Registered policies can be selected
    from configuration and restored from saved state.
    """
    if not policy_cls.name:
        raise ValueError(f"{policy_cls.__name__} must define a non-empty name")
    if policy_cls.name in _POLICIES:
        raise ValueError(f"Encoding policy '{policy_cls.name}' already registered")
    _POLICIES[policy_cls.name] = policy_cls
    return policy_cls


def list_policies() -> list[str]:
    """List all registered policy names."""
    return list(_POLICIES.keys())


def get_policy(name: str) -> Type[EncodingPolicy]:
    """Get policy class by name."""
    if name not in _POLICIES:
        raise UnknownPolicyError(
            f"Unknown encoding policy: {name}. "
            f"Available: {list(_POLICIES)}. "
            f"Register with register_policy()"
        )
    return _POLICIES[name]


def create_policy(name: str, **params: Any) -> EncodingPolicy:
    return get_policy(name)(**params)


def policy_to_state(policy: EncodingPolicy) -> PolicyState:
    return PolicyState(name=policy.name, params=policy.get_params())


def policy_from_state(state: PolicyState) -> EncodingPolicy:
    return create_policy(state.name, **state.params)
