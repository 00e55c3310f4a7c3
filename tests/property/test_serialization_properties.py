"""Property-based tests for persistence round-trips.

These tests verify that a StringEncoding can be saved and restored
without loss of information.
"""

import json

from hypothesis import given, settings, strategies as st
import numpy as np
import pytest

from string_encoding.encoding import StringEncoding
from string_encoding.models import DictionaryState, EncodingState, PolicyState
from string_encoding.persistence import load_encoding, save_encoding
from string_encoding.policies import (
    BagOfWordsEncodingPolicy,
    DictionaryEncodingPolicy,
    TfIdfEncodingPolicy,
    TfType,
)

from split_tokenizer import SplitTokenizer, word_alphabet


tokenizer = SplitTokenizer()

word = st.text(alphabet=word_alphabet, min_size=1, max_size=4)
sentence = st.lists(word, max_size=8).map(" ".join)
corpus_strategy = st.lists(sentence, max_size=6)


@st.composite
def policy_strategy(draw: st.DrawFn):
    """Generate any built-in policy."""
    unknown = draw(st.none() | st.just("<unk>"))
    kind = draw(st.sampled_from(["dictionary", "bag_of_words", "tfidf"]))
    if kind == "dictionary":
        return DictionaryEncodingPolicy(unknown_token=unknown)
    if kind == "bag_of_words":
        return BagOfWordsEncodingPolicy(unknown_token=unknown)
    return TfIdfEncodingPolicy(
        tf_type=draw(st.sampled_from(list(TfType))),
        smooth_idf=draw(st.booleans()),
        unknown_token=unknown,
    )


# **Feature: string-encoding, Property 9: State round-trip**
class TestStateRoundTrip:
    """Property 9: State round-trip.

    *For any* policy and corpus, serializing the orchestrator state to JSON
    and restoring it SHALL give the same policy parameters and labels.
    """

    @given(policy_strategy(), corpus_strategy)
    @settings(max_examples=100)
    def test_state_json_round_trip(self, policy, corpus) -> None:
        encoding = StringEncoding(policy)
        encoding.create_map(corpus, tokenizer)
        json_str = encoding.to_state().model_dump_json()
        restored = StringEncoding.from_state(EncodingState.model_validate_json(json_str))
        assert type(restored.policy) is type(policy)
        assert restored.policy.get_params() == policy.get_params()
        assert restored.dictionary.mapping == encoding.dictionary.mapping

    @given(corpus_strategy, corpus_strategy)
    @settings(max_examples=50)
    def test_restored_encoder_continues_label_space(self, first, second) -> None:
        encoding = StringEncoding()
        encoding.encode(first, "ragged", tokenizer)
        restored = StringEncoding.from_state(encoding.to_state())
        assert restored.encode(second, "ragged", tokenizer) == encoding.encode(
            second, "ragged", tokenizer
        )


class TestSaveLoad:
    """save_encoding / load_encoding on disk."""

    def test_save_and_load(self, tmp_path) -> None:
        encoding = StringEncoding(BagOfWordsEncodingPolicy())
        encoding.create_map(["a b a", "b c"], tokenizer)
        path = save_encoding(encoding, tmp_path / "nested" / "encoder.json")
        assert path.exists()

        restored = load_encoding(path)
        np.testing.assert_array_equal(
            restored.encode(["a b a", "b c"], "dense", tokenizer),
            [[2, 1, 0], [0, 1, 1]],
        )

    def test_saved_file_holds_policy_and_dictionary(self, tmp_path) -> None:
        encoding = StringEncoding()
        encoding.create_map(["héllo wörld"], tokenizer)
        path = save_encoding(encoding, tmp_path / "encoder.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"format_version", "policy", "dictionary"}
        assert data["policy"]["name"] == "dictionary"
        assert data["dictionary"]["tokens"] == ["héllo", "wörld"]

    def test_missing_file_raises_error(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError, match="Encoding state not found"):
            load_encoding(tmp_path / "missing.json")

    def test_empty_file_raises_error(self, tmp_path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("")
        with pytest.raises(ValueError, match="Empty encoding state file"):
            load_encoding(empty)

    def test_invalid_file_raises_error(self, tmp_path) -> None:
        invalid = tmp_path / "invalid.json"
        invalid.write_text('{"policy": {"name": ""}}')
        with pytest.raises(ValueError, match="Invalid encoding state"):
            load_encoding(invalid)


# **Feature: string-encoding, Property 10: Schema validation rejects invalid state**
class TestSchemaValidationRejectsInvalid:
    """Property 10: Schema validation rejects invalid state."""

    @given(st.lists(st.text(max_size=5), min_size=1, max_size=10))
    @settings(max_examples=100)
    def test_duplicate_tokens_rejected(self, tokens: list[str]) -> None:
        with pytest.raises(ValueError, match="unique"):
            DictionaryState(tokens=tokens + [tokens[0]])

    def test_unsupported_format_version_rejected(self) -> None:
        with pytest.raises(ValueError, match="unsupported format_version"):
            EncodingState(format_version="0.1", policy=PolicyState(name="dictionary"))

    def test_missing_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            EncodingState.model_validate({"dictionary": {"tokens": []}})
