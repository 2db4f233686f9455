"""Tests for postfix.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from postfix_pda.core.config import ConfigError, PostfixConfig, load_config
from postfix_pda.core.tokenizer import ASCII_CLASSIFIER, UNICODE_CLASSIFIER


class TestLoadConfig:
    """load_config reads and validates postfix.toml."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "postfix.toml")
        assert config == PostfixConfig()
        assert config.evaluator.sentinel == ";"
        assert config.evaluator.strict is False
        assert config.output.precision == 6

    def test_defaults_to_current_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "postfix.toml").write_text('[evaluator]\nsentinel = "="\n')
        monkeypatch.chdir(tmp_path)
        assert load_config().evaluator.sentinel == "="

    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text(
            """
[evaluator]
sentinel = "#"
strict = true
classifier = "unicode"

[output]
precision = 10
use_locale = false
verbose = true
"""
        )
        config = load_config(path)
        assert config.evaluator.sentinel == "#"
        assert config.evaluator.strict is True
        assert config.evaluator.get_classifier() is UNICODE_CLASSIFIER
        assert config.output.precision == 10
        assert config.output.use_locale is False
        assert config.output.verbose is True

    def test_partial_section(self, tmp_path: Path) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text("[output]\nprecision = 3\n")
        config = load_config(path)
        assert config.output.precision == 3
        assert config.evaluator.get_classifier() is ASCII_CLASSIFIER

    @pytest.mark.parametrize("sentinel", ["+", ".", "7", " ", "ab", ""])
    def test_rejects_bad_sentinel(self, tmp_path: Path, sentinel: str) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text(f'[evaluator]\nsentinel = "{sentinel}"\n')
        with pytest.raises(ConfigError):
            load_config(path)

    def test_rejects_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text("[evaluator]\nradix = ','\n")
        with pytest.raises(ConfigError, match="radix"):
            load_config(path)

    def test_rejects_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text("[evaluator\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_rejects_precision_out_of_range(self, tmp_path: Path) -> None:
        path = tmp_path / "postfix.toml"
        path.write_text("[output]\nprecision = 0\n")
        with pytest.raises(ConfigError):
            load_config(path)
