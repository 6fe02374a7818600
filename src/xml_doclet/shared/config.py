"""Configuration for XML doclet generation.

This module provides the immutable configuration object shared by the driver,
the walker and the command-line front end, together with the configuration
error types reported before generation starts.
"""

import difflib
import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_OUTPUT_DIR = "."
DEFAULT_OUTPUT_FILENAME = "javadoc.xml"
DEFAULT_ENCODING = "UTF-8"
DEFAULT_XML_VERSION = "1.0"

INVALID_CHAR_STRATEGIES = ("replacement", "removal")


def parse_bool(value: Optional[str]) -> bool:
    """Parse an option value the way the doclet options always have.

    Only the string "true" (case-insensitive) is true; anything else,
    including None, is false.
    """
    return value is not None and value.strip().lower() == "true"


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
class DocletConfig:
    """Settings for one generation run.

    Thread-safe due to frozen dataclass implementation. Validation of values
    happens on construction; the existence of the output directory is only
    checked by validate_output_dir(), right before generation.
    """

    output_dir: str = DEFAULT_OUTPUT_DIR
    filename: str = DEFAULT_OUTPUT_FILENAME
    escape_characters: bool = True
    encoding: str = DEFAULT_ENCODING
    xml_version: str = DEFAULT_XML_VERSION
    sort_elements: bool = False
    remove_partial_output: bool = True
    invalid_char_strategy: str = "replacement"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize and validate configuration values."""
        output_dir = str(self.output_dir).rstrip("/") or "/"
        object.__setattr__(self, "output_dir", output_dir)

        if not self.filename:
            raise ConfigValidationError("filename must not be empty", "filename")
        if self.encoding.upper() != DEFAULT_ENCODING:
            raise ConfigValidationError(
                f"Unsupported encoding: {self.encoding}", "encoding", [DEFAULT_ENCODING]
            )
        if self.xml_version != DEFAULT_XML_VERSION:
            raise ConfigValidationError(
                f"Unsupported XML version: {self.xml_version}",
                "xml_version",
                [DEFAULT_XML_VERSION],
            )
        if self.invalid_char_strategy not in INVALID_CHAR_STRATEGIES:
            raise ConfigValidationError(
                f"invalid_char_strategy must be one of {INVALID_CHAR_STRATEGIES}",
                "invalid_char_strategy",
                list(INVALID_CHAR_STRATEGIES),
            )

    @property
    def output_path(self) -> Path:
        """Full path of the generated document."""
        return Path(self.output_dir) / self.filename

    def validate_output_dir(self) -> None:
        """Raise ConfigValidationError unless the output directory exists."""
        if not Path(self.output_dir).is_dir():
            raise ConfigValidationError(
                f"Invalid output directory: {self.output_dir}", "output_dir"
            )

    def override(self, **kwargs: Any) -> "DocletConfig":
        """Create a new configuration with specific overrides.

        None values are ignored so that unset command-line options leave
        file-provided values alone.

        Example:
            >>> config = DocletConfig()
            >>> config.override(filename="api.xml", escape_characters=None).filename
            'api.xml'
        """
        known = {f.name for f in fields(self)}
        overrides = {}
        for key, value in kwargs.items():
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    key,
                    difflib.get_close_matches(key, sorted(known)),
                )
            if value is not None:
                overrides[key] = value
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocletConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigValidationError: On unknown keys or invalid values
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "DocletConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "DocletConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(text)
