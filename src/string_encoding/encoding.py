"""StringEncoding orchestration: dictionary building and encode dispatch."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional, Union

from .dictionary import StringEncodingDictionary
from .errors import OutOfVocabularyError, OutputShapeError
from .interfaces import EncodingPolicy, Tokenizer
from .logging_ import setup_logging_from_config
from .models import EncodingState
from .outputs import OutputShape, OutputSink, make_output
from .policies import (
    DictionaryEncodingPolicy,
    policy_from_state,
    policy_to_state,
)

if TYPE_CHECKING:
    from .config import EncodingConfig


log = logging.getLogger("string_encoding.encoding")


class StringEncoding:
    """Translates strings into numbers with a pluggable encoding policy.

    The StringEncoding owns:
    1. A dictionary mapping tokens to labels
    2. An encoding policy deciding what each output row contains

    Both persist across calls. ``encode`` picks between two pipelines:
    the fused one-pass path (one-pass policy, ragged output), which
    grows the dictionary while encoding, and the generic path, which
    encodes against the dictionary as it stood when the call started.
    """

    def __init__(
        self,
        policy: Optional[EncodingPolicy] = None,
        dictionary: Optional[StringEncodingDictionary] = None,
    ):
        """Initialize the orchestrator.

        Args:
            policy: Encoding policy (defaults to DictionaryEncodingPolicy)
            dictionary: Pre-seeded dictionary (defaults to an empty one)
        """
        self._policy = policy if policy is not None else DictionaryEncodingPolicy()
        self._dictionary = (
            dictionary if dictionary is not None else StringEncodingDictionary()
        )

    @classmethod
    def from_config(
        cls,
        config: "EncodingConfig",
        configure_logging: bool = False,
    ) -> "StringEncoding":
        """Build an orchestrator with the policy named in the configuration.

        The logging section is only applied when ``configure_logging`` is
        set; otherwise callers keep control of handlers and call
        ``setup_logging_from_config`` themselves.
        """
        if configure_logging:
            setup_logging_from_config(config.logging)
        return cls(policy=config.policy.build())

    @property
    def dictionary(self) -> StringEncodingDictionary:
        return self._dictionary

    @dictionary.setter
    def dictionary(self, dictionary: StringEncodingDictionary) -> None:
        self._dictionary = dictionary

    @property
    def policy(self) -> EncodingPolicy:
        return self._policy

    @policy.setter
    def policy(self, policy: EncodingPolicy) -> None:
        self._policy = policy

    @property
    def is_empty(self) -> bool:
        return self._dictionary.size() == 0

    def create_map(self, corpus: Union[str, Iterable[str]], tokenizer: Tokenizer) -> None:
        """Add every token of the corpus to the dictionary.

        Existing tokens keep their labels. Stale tokens are not removed;
        call ``clear()`` first for a fresh build.

        Args:
            corpus: A single string or an iterable of strings
            tokenizer: Tokenizer used to split the corpus
        """
        if isinstance(corpus, str):
            corpus = [corpus]
        before = self._dictionary.size()
        self._policy.initialize_dictionary(corpus, tokenizer, self._dictionary)
        log.debug(
            "Dictionary built with %s: %d -> %d tokens",
            type(self._policy).__name__, before, self._dictionary.size(),
        )

    def clear(self) -> None:
        """Empty the dictionary."""
        self._dictionary.clear()

    def encode(
        self,
        inputs: Union[str, Iterable[str]],
        output: Union[OutputShape, str, OutputSink],
        tokenizer: Tokenizer,
        one_pass: Optional[bool] = None,
    ) -> Any:
        """Encode strings and return the filled output.

        Args:
            inputs: A single string or strings to encode, one output row
                each, in order
            output: Output shape (or its name) or a sink to fill
            tokenizer: Tokenizer used to split each string
            one_pass: None picks the pipeline automatically; True demands
                the fused path; False forces the generic path

        Returns:
            numpy array for dense output, scipy CSR matrix for sparse
            output, list of lists for ragged output (or whatever a
            custom sink returns)

        Raises:
            OutputShapeError: If the fused path is demanded for a policy
                or shape that cannot use it
            OutOfVocabularyError: If a strict policy meets an unknown
                token on the generic path
        """
        sink = make_output(output)
        if isinstance(inputs, str):
            inputs = [inputs]
        inputs = list(inputs)

        if one_pass and (
            not self._policy.one_pass_encoding or sink.shape.fixed_width
        ):
            raise OutputShapeError(
                f"One-pass encoding requires a one-pass policy and ragged output; "
                f"got {type(self._policy).__name__} with {sink.shape.value} output"
            )

        use_one_pass = (
            one_pass is not False
            and self._policy.one_pass_encoding
            and not sink.shape.fixed_width
        )
        log.debug(
            "Encoding %d strings into %s output (%s path)",
            len(inputs), sink.shape.value, "one-pass" if use_one_pass else "generic",
        )

        if use_one_pass:
            self._encode_one_pass(inputs, sink, tokenizer)
        else:
            self._encode_generic(inputs, sink, tokenizer)
        return sink.result()

    def _encode_one_pass(
        self,
        inputs: list[str],
        sink: OutputSink,
        tokenizer: Tokenizer,
    ) -> None:
        sink.allocate(len(inputs), 0)
        for row, text in enumerate(inputs):
            labels = self._policy.encode_one_pass(text, tokenizer, self._dictionary)
            sink.extend(row, labels)

    def _encode_generic(
        self,
        inputs: list[str],
        sink: OutputSink,
        tokenizer: Tokenizer,
    ) -> None:
        dictionary_size = self._dictionary.size()
        self._policy.reset()

        # Resolve every row before allocating so a rejected token leaves
        # the sink untouched.
        rows: list[list[int]] = []
        for row, text in enumerate(inputs):
            try:
                labels = self._policy.resolve_labels(
                    text, tokenizer, self._dictionary, row
                )
            except OutOfVocabularyError as e:
                log.warning("Rejected out-of-vocabulary token %r in row %d", e.token, e.row)
                raise
            self._policy.preprocess_row(row, labels)
            rows.append(labels)

        max_num_tokens = max((len(labels) for labels in rows), default=0)
        self._policy.init_output(sink, len(rows), max_num_tokens, dictionary_size)
        for row, labels in enumerate(rows):
            self._policy.encode_row(sink, row, labels)

    def decode(self, labels: Iterable[int]) -> list[str]:
        """Map a label sequence back to its tokens; padding label 0 is skipped."""
        return [self._dictionary.token(label) for label in labels if label != 0]

    def copy(self) -> "StringEncoding":
        """Return an independent deep copy of policy and dictionary."""
        return copy.deepcopy(self)

    def to_state(self) -> EncodingState:
        return EncodingState(
            policy=policy_to_state(self._policy),
            dictionary=self._dictionary.to_state(),
        )

    @classmethod
    def from_state(cls, state: EncodingState) -> "StringEncoding":
        return cls(
            policy=policy_from_state(state.policy),
            dictionary=StringEncodingDictionary.from_state(state.dictionary),
        )

    def __repr__(self) -> str:
        return f"StringEncoding(policy={self._policy!r}, dictionary={self._dictionary!r})"
