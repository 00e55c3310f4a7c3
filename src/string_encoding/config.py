"""Configuration management for string encoding.

This module handles loading and validating configuration from YAML files,
providing type-safe access to the policy and logging settings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from string_encoding.interfaces import EncodingPolicy
from string_encoding.policies import create_policy, list_policies


class PolicyConfig(BaseModel):
    """Configuration for the encoding policy.

    ``name`` selects any registered policy. ``params`` holds the extra
    constructor arguments of that policy (``tf_type`` and ``smooth_idf``
    for tfidf, say).
    """

    name: str = "dictionary"
    unknown_token: Optional[str] = None
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if v not in list_policies():
            raise ValueError(
                f"unknown encoding policy: {v!r}; available: {list_policies()}"
            )
        return v

    @field_validator("unknown_token")
    @classmethod
    def validate_unknown_token(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v:
            raise ValueError("unknown_token cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_params(self) -> "PolicyConfig":
        try:
            self.build()
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid params for policy {self.name!r}: {e}") from e
        return self

    def build(self) -> EncodingPolicy:
        """Construct the configured policy."""
        return create_policy(self.name, unknown_token=self.unknown_token, **self.params)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    log_dir: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown logging level: {v}")
        return level


class EncodingConfig(BaseModel):
    """Complete configuration for a StringEncoding.

    This is the top-level configuration object that contains all
    settings for the policy and logging.
    """

    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EncodingConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Validated EncodingConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ValueError: If the config is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            raise ValueError(f"Empty config file: {path}")

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid configuration in {path}: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary for serialization."""
        return self.model_dump(mode="json")
