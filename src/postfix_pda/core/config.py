"""
Configuration models.

Parses ``postfix.toml`` and provides typed settings for the tokenizer,
the evaluator and result rendering. Every key is optional.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .tokenizer import DEFAULT_SENTINEL, OPERATORS, RADIX_POINT, CharClassifier, get_classifier

CONFIG_FILENAME = "postfix.toml"


class ConfigError(ValueError):
    """Raised when postfix.toml cannot be read or holds invalid values."""


class EvaluatorConfig(BaseModel):
    """Settings for scanning and evaluation."""

    model_config = ConfigDict(extra="forbid")

    sentinel: str = DEFAULT_SENTINEL
    strict: bool = False
    classifier: Literal["ascii", "unicode"] = "ascii"

    @field_validator("sentinel")
    @classmethod
    def _check_sentinel(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("sentinel must be exactly one character")
        if value in OPERATORS or value == RADIX_POINT or value.isdecimal() or value.isspace():
            raise ValueError(f"sentinel {value!r} collides with expression syntax")
        return value

    def get_classifier(self) -> CharClassifier:
        return get_classifier(self.classifier)


class OutputConfig(BaseModel):
    """Settings for rendering results."""

    model_config = ConfigDict(extra="forbid")

    precision: int = Field(default=6, ge=1, le=17)
    use_locale: bool = True
    verbose: bool = False


class PostfixConfig(BaseModel):
    """Complete configuration."""

    model_config = ConfigDict(extra="ignore")

    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(toml_path: Path | None = None) -> PostfixConfig:
    """
    Load configuration from a TOML file.

    Args:
        toml_path: Path to the file; defaults to ``postfix.toml`` in the
            current directory

    Returns:
        PostfixConfig with parsed values, or defaults if the file is missing

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid
    """
    path = toml_path if toml_path is not None else Path.cwd() / CONFIG_FILENAME
    if not path.exists():
        return PostfixConfig()

    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    try:
        return PostfixConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
