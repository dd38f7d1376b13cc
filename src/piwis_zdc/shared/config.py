"""Configuration for locating and binding ZDC session exports.

The defaults describe the exports written by the diagnostic tester: one file
per session directory whose name carries the ``IExIL`` marker.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

DEFAULT_MARKER = "IExIL"
DEFAULT_EXTENSION = ".xml"
DEFAULT_MAX_NESTING_DEPTH = 64


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
class LoaderConfig:
    """Settings for the directory scan and the schema binder.

    Thread-safe due to frozen dataclass implementation.
    """

    # Directory scan
    marker: str = DEFAULT_MARKER
    extension: str = DEFAULT_EXTENSION
    allow_multiple_matches: bool = False

    # Binding
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    # XML parser hardening
    resolve_entities: bool = False
    huge_tree: bool = False

    def __post_init__(self) -> None:
        """Validate loader configuration."""
        if not self.marker:
            raise ValueError("marker cannot be empty")
        if not self.extension.startswith("."):
            raise ValueError("extension must start with '.'")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be > 0")

    def override(self, **kwargs: Any) -> "LoaderConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = LoaderConfig()
            >>> config.override(allow_multiple_matches=True).allow_multiple_matches
            True
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than ignored.

        Raises:
            ConfigValidationError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field '{key}'",
                    field_name=key,
                    suggestions=sorted(known),
                )
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "LoaderConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def strict(cls) -> "LoaderConfig":
        """Preset that refuses ambiguous directories (the default behavior)."""
        return cls()

    @classmethod
    def lenient(cls) -> "LoaderConfig":
        """Preset that picks the first matching export when several exist."""
        return cls(allow_multiple_matches=True)
