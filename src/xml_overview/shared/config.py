"""Configuration for the overview pipeline.

OverviewConfig is immutable so a single instance can be shared by every stage
of a conversion; use override() to derive variants.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

from .errors import OverviewError

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(OverviewError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class OverviewConfig:
    """Settings consumed by the scanner, tree builder, minimizer and renderer."""

    # Rendering
    verbose: bool = False
    max_depth: Optional[int] = None
    minimize: bool = True
    strip_root: bool = True

    # Tree building
    require_balanced_tags: bool = True
    validate_closing_names: bool = False

    # Input handling
    normalize_line_endings: bool = True

    # Diagnostics
    logging_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigValidationError(
                    "max_depth must be an integer or None", field_name="max_depth"
                )
            if self.max_depth < 1:
                raise ConfigValidationError(
                    "max_depth must be >= 1 or None",
                    field_name="max_depth",
                    suggestions=["Leave max_depth unset to render the whole tree"],
                )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "OverviewConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = OverviewConfig().override(verbose=True, max_depth=3)
        """
        unknown = set(kwargs) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}"
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverviewConfig":
        """Create configuration from dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            OverviewConfig instance created from dictionary

        Raises:
            ConfigValidationError: If the mapping names unknown fields or holds
                invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {sorted(unknown)}",
                suggestions=sorted(known),
            )
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "OverviewConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "OverviewConfig":
        """Permissive closing tags, balanced elements, compact output."""
        return cls()

    @classmethod
    def strict(cls) -> "OverviewConfig":
        """Reject closing tags whose name does not match the open element."""
        return cls(validate_closing_names=True, require_balanced_tags=True)

    @classmethod
    def verbose_preset(cls) -> "OverviewConfig":
        """Keep comments and annotate how many siblings were collapsed."""
        return cls(verbose=True, logging_level="DEBUG")
