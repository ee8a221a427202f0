"""Exception hierarchy for block-convert."""

from __future__ import annotations


class BlockConvertError(Exception):
    """Base class for all block-convert errors."""


class ConfigurationError(BlockConvertError):
    """Raised when conversion options or packaged defaults cannot be loaded."""


class RuleError(BlockConvertError):
    """Raised when a rule cannot be registered."""


class DispatchError(BlockConvertError):
    """Raised when no registered rule accepts an element.

    A registry always carries a universal fallback rule, so this signals a
    broken rule table rather than bad input.
    """

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__(f"No rule matched element <{tag_name}>; is the fallback rule registered?")


class ConversionError(BlockConvertError):
    """Raised when a rule fails while converting an element it claimed."""

    def __init__(self, rule_name: str, tag_name: str, message: str) -> None:
        self.rule_name = rule_name
        self.tag_name = tag_name
        super().__init__(f"{rule_name} failed to convert <{tag_name}>: {message}")
