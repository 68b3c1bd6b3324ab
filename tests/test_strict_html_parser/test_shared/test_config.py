"""Tests for parser configuration."""

import json
import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from strict_html_parser.shared.config import STRICT_MAX_DEPTH, ParserConfig


class TestParserConfig:
    """Test ParserConfig defaults, presets and validation."""

    def test_defaults(self) -> None:
        config = ParserConfig()
        assert config.max_depth is None
        assert config.analyze is True
        assert config.allow_trailing_input is True
        assert config.correlation_id is None
        assert config.enable_diagnostics is True

    def test_lenient_is_default(self) -> None:
        assert ParserConfig.lenient() == ParserConfig()

    def test_strict_preset(self) -> None:
        config = ParserConfig.strict()
        assert config.max_depth == STRICT_MAX_DEPTH
        assert config.allow_trailing_input is False
        assert config.analyze is True

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_invalid_max_depth(self, max_depth: int) -> None:
        with pytest.raises(ValueError, match="max_depth must be > 0 or None"):
            ParserConfig(max_depth=max_depth)

    def test_replace_revalidates(self) -> None:
        with pytest.raises(ValueError):
            replace(ParserConfig(), max_depth=0)


class TestConfigSerialization:
    """Test dictionary and file round trips."""

    def test_to_dict(self) -> None:
        assert ParserConfig.strict().to_dict() == {
            "max_depth": STRICT_MAX_DEPTH,
            "analyze": True,
            "allow_trailing_input": False,
            "correlation_id": None,
            "enable_diagnostics": True,
        }

    def test_from_dict(self) -> None:
        config = ParserConfig.from_dict({"max_depth": 8, "analyze": False})
        assert config.max_depth == 8
        assert config.analyze is False
        assert config.allow_trailing_input is True

    def test_from_dict_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="Unknown configuration keys: color, size"):
            ParserConfig.from_dict({"size": 1, "color": "red"})

    def test_from_file(self) -> None:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump({"max_depth": 4, "allow_trailing_input": False}, f)
            path = Path(f.name)

        try:
            config = ParserConfig.from_file(path)
            assert config.max_depth == 4
            assert config.allow_trailing_input is False
        finally:
            path.unlink()

    def test_from_file_requires_object(self) -> None:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump([1, 2], f)
            path = Path(f.name)

        try:
            with pytest.raises(ValueError, match="JSON object"):
                ParserConfig.from_file(path)
        finally:
            path.unlink()
