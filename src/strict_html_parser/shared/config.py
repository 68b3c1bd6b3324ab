"""Configuration classes for strict HTML parsing.

The grammar itself has no options; this module configures the layers around
it: the nesting depth guard, whether the structural analyzer runs, and how
trailing input after the top-level element is treated.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

STRICT_MAX_DEPTH = 100


@dataclass
class ParserConfig:
    """Configuration for a parse operation."""

    max_depth: Optional[int] = None
    analyze: bool = True
    allow_trailing_input: bool = True
    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth is not None and self.max_depth <= 0:
            raise ValueError("max_depth must be > 0 or None")

    @classmethod
    def lenient(cls) -> "ParserConfig":
        """Create the default configuration: unbounded depth, trailing input kept."""
        return cls()

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration that rejects trailing content and deep nesting."""
        return cls(max_depth=STRICT_MAX_DEPTH, allow_trailing_input=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from a dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            New ParserConfig

        Raises:
            ValueError: If the mapping contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from a JSON file."""
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a JSON object")
        return cls.from_dict(data)
