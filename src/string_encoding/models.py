"""Persisted state models for string encoding.

This module defines the serializable snapshots of the orchestrator:
- DictionaryState: tokens of a dictionary, ordered by label
- PolicyState: registered policy name and its constructor parameters
- EncodingState: the complete {policy, dictionary} pair
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


FORMAT_VERSION = "1.0"


class DictionaryState(BaseModel):
    """Snapshot of a dictionary.

    The label of each token is its position in ``tokens`` plus one, so
    the order of the list is the label assignment order.
    """

    tokens: list[str] = Field(default_factory=list)

    @field_validator("tokens")
    @classmethod
    def validate_unique_tokens(cls, v: list[str]) -> list[str]:
        if len(set(v)) != len(v):
            raise ValueError("dictionary tokens must be unique")
        return v


class PolicyState(BaseModel):
    """Snapshot of an encoding policy."""

    name: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class EncodingState(BaseModel):
    """Complete persisted state of a StringEncoding orchestrator."""

    format_version: str = Field(default=FORMAT_VERSION)
    policy: PolicyState
    dictionary: DictionaryState = Field(default_factory=DictionaryState)

    @field_validator("format_version")
    @classmethod
    def validate_format_version(cls, v: str) -> str:
        if v != FORMAT_VERSION:
            raise ValueError(f"unsupported format_version: {v!r}")
        return v
