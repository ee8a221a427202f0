"""Conversion options threaded through every recursive conversion step."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from block_convert.exceptions import ConfigurationError

# Accepted camelCase spellings, as sent by JSON clients.
_CAMEL_ALIASES = {
    "preserveClasses": "preserve_classes",
    "preserveIds": "preserve_ids",
    "preserveStyles": "preserve_styles",
    "fallbackToHtmlBlock": "fallback_to_html_block",
    "generateUniqueIds": "generate_unique_ids",
    "semanticMapping": "semantic_mapping",
    "skipContentAttribute": "skip_content_attribute",
}


@dataclass(frozen=True)
class ConversionContext:
    """Immutable conversion options.

    Rules that need different behaviour for their subtree derive a copy
    with :meth:`derive` and pass that to their children.
    """

    preserve_classes: bool = True
    preserve_ids: bool = True
    preserve_styles: bool = False
    fallback_to_html_block: bool = True
    generate_unique_ids: bool = True
    semantic_mapping: bool = True
    # Internal: set by navigation rules for their subtree.
    skip_content_attribute: bool = False

    def derive(self, **changes: Any) -> ConversionContext:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, bool]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ConversionContext:
        """Create from a dictionary of options.

        Both snake_case and camelCase keys are accepted.

        Args:
            data: Option values keyed by name.

        Returns:
            A new context with defaults for missing keys.

        Raises:
            ConfigurationError: If an unknown option name is given.
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values: dict[str, bool] = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(
                    f"Unknown conversion option '{key}'. Available: {sorted(known)}"
                )
            values[name] = bool(value)
        return cls(**values)
