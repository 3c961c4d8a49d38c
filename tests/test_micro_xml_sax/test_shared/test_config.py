"""Tests for scanner configuration."""

from dataclasses import FrozenInstanceError

import pytest

from micro_xml_sax.shared.config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
)


class TestParserConfig:
    """Tests for ParserConfig."""

    def test_defaults(self):
        """Test default values."""
        config = ParserConfig()
        assert config.catch_exceptions is False
        assert config.reject_trailing_content is True
        assert config.correlation_id is None
        assert config.logging_level == "WARNING"
        assert config.enable_metrics is True
        assert config.name is None

    def test_invalid_logging_level(self):
        """Test logging level validation."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig(logging_level="VERBOSE")
        assert exc_info.value.field_name == "logging_level"
        assert "DEBUG" in exc_info.value.suggestions

    def test_non_bool_flag(self):
        """Test that flags must be real booleans."""
        with pytest.raises(ConfigValidationError, match="catch_exceptions"):
            ParserConfig(catch_exceptions="yes")

    def test_validation_error_is_config_error(self):
        """Test the exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)

    def test_immutable(self):
        """Test that configurations cannot be modified."""
        with pytest.raises(FrozenInstanceError):
            ParserConfig().catch_exceptions = True

    def test_override(self):
        """Test creating modified copies."""
        base = ParserConfig()
        modified = base.override(catch_exceptions=True, correlation_id="req-1")
        assert modified.catch_exceptions is True
        assert modified.correlation_id == "req-1"
        assert base.catch_exceptions is False

    def test_override_validates(self):
        """Test that overrides go through validation."""
        with pytest.raises(ConfigValidationError):
            ParserConfig().override(logging_level="LOUD")

    def test_override_unknown_field(self):
        """Test rejection of unknown override fields."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration fields") as exc_info:
            ParserConfig().override(max_depth=10)
        assert exc_info.value.field_name == "max_depth"


class TestSerialization:
    """Tests for dictionary and JSON conversion."""

    def test_dict_round_trip(self):
        """Test conversion to and from dictionaries."""
        config = ParserConfig(catch_exceptions=True, correlation_id="abc")
        data = config.to_dict()
        assert data["catch_exceptions"] is True
        assert ParserConfig.from_dict(data) == config

    def test_from_dict_ignores_unknown_keys(self):
        """Test that unrelated keys are dropped."""
        config = ParserConfig.from_dict({"enable_metrics": False, "colour": "blue"})
        assert config.enable_metrics is False

    def test_from_dict_requires_mapping(self):
        """Test rejection of non-object data."""
        with pytest.raises(ConfigValidationError):
            ParserConfig.from_dict(["catch_exceptions"])

    def test_json_round_trip(self):
        """Test conversion to and from JSON."""
        config = ParserConfig.lenient()
        assert ParserConfig.from_json(config.to_json()) == config

    def test_invalid_json(self):
        """Test that malformed JSON raises a configuration error."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            ParserConfig.from_json("{not json")


class TestPresets:
    """Tests for preset configurations."""

    def test_strict(self):
        """Test the strict preset."""
        config = ParserConfig.strict()
        assert config.name == "strict"
        assert config.catch_exceptions is False
        assert config.reject_trailing_content is True

    def test_fault_tolerant(self):
        """Test the fault tolerant preset."""
        config = ParserConfig.fault_tolerant()
        assert config.catch_exceptions is True
        assert config.reject_trailing_content is True

    def test_lenient(self):
        """Test the lenient preset."""
        config = ParserConfig.lenient()
        assert config.catch_exceptions is True
        assert config.reject_trailing_content is False

    def test_lookup_by_name(self):
        """Test preset lookup."""
        assert ParserConfig.preset("lenient") == ParserConfig.lenient()

    def test_unknown_preset(self):
        """Test rejection of unknown preset names."""
        with pytest.raises(ConfigValidationError) as exc_info:
            ParserConfig.preset("paranoid")
        assert exc_info.value.suggestions == ["fault_tolerant", "lenient", "strict"]
