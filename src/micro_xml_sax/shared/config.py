"""Configuration for the SAX scanner.

A single immutable :class:`ParserConfig` controls the few behaviours of the
scanner that are a caller's choice rather than part of the grammar: whether
internal faults are absorbed into the error taxonomy, whether content after
the root element is rejected, and how the scanner logs.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Immutable scanner configuration.

    Thread-safe due to frozen dataclass implementation; one instance may be
    shared by any number of parsers.

    Attributes:
        catch_exceptions: Convert exceptions raised while scanning (including
            ones raised by observer callbacks) into an ``error`` call and a
            failed result instead of letting them propagate
        reject_trailing_content: Report anything but whitespace, comments and
            processing instructions after the root element as a
            TRAILING_CONTENT error. On by default, so ``<a/>junk`` fails;
            set it to False (or use the ``lenient`` preset) to stop silently
            once the root element closes, which accepts such documents
        correlation_id: Id attached to every log record of the parse
        logging_level: Level the command-line driver configures logging with
        enable_metrics: Collect timing and event counts on the result
        name: Optional preset name
    """

    catch_exceptions: bool = False
    reject_trailing_content: bool = True
    correlation_id: Optional[str] = None
    logging_level: str = "WARNING"
    enable_metrics: bool = True
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS,
            )
        for flag in ("catch_exceptions", "reject_trailing_content", "enable_metrics"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigValidationError(
                    f"{flag} must be a bool", field_name=flag
                )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> ParserConfig().override(catch_exceptions=True).catch_exceptions
            True
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys.

        Args:
            data: Dictionary containing configuration data

        Returns:
            ParserConfig instance created from dictionary
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a JSON object")
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "ParserConfig":
        """Default behaviour: faults propagate, trailing content is rejected."""
        return cls(name="strict")

    @classmethod
    def fault_tolerant(cls) -> "ParserConfig":
        """Absorb internal faults into the error taxonomy."""
        return cls(catch_exceptions=True, name="fault_tolerant")

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Absorb faults and ignore whatever follows the root element."""
        return cls(
            catch_exceptions=True,
            reject_trailing_content=False,
            name="lenient",
        )

    @classmethod
    def preset(cls, preset_name: str) -> "ParserConfig":
        """Look up a preset by name."""
        presets = {
            "strict": cls.strict,
            "fault_tolerant": cls.fault_tolerant,
            "lenient": cls.lenient,
        }
        if preset_name not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {preset_name}",
                suggestions=sorted(presets),
            )
        return presets[preset_name]()
