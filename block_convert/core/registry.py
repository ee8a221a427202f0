"""Priority-ordered registry of conversion rules."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from bs4.element import Tag

from block_convert.core.context import ConversionContext
from block_convert.core.rule import ChildDispatcher, Rule
from block_convert.exceptions import RuleError

logger = logging.getLogger(__name__)


def rule_name(rule: Rule) -> str:
    """Display name of a rule."""
    return getattr(rule, "name", None) or type(rule).__name__


class RuleRegistry:
    """Ordered collection of rules, highest priority first.

    Rules with equal priority keep their registration order. Once
    :meth:`freeze` is called the registry rejects further registrations.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._rules: list[Rule] = []
        self._dispatcher: ChildDispatcher | None = None
        self._frozen = False

    def attach(self, dispatcher: ChildDispatcher) -> None:
        """Set the child dispatcher handed to registered rules."""
        self._dispatcher = dispatcher
        for rule in self._rules:
            self._bind(rule)

    def register(self, rule: Rule) -> None:
        """Register a rule and re-sort by priority.

        Args:
            rule: Rule to add.

        Raises:
            RuleError: If the rule lacks ``matches``/``convert`` or the
                registry is frozen.
        """
        if self._frozen:
            raise RuleError(f"Cannot register {rule_name(rule)}: registry is frozen")
        if not callable(getattr(rule, "matches", None)) or not callable(getattr(rule, "convert", None)):
            raise RuleError("Invalid rule: must implement matches() and convert()")

        self._bind(rule)
        self._rules.append(rule)
        # list.sort is stable, so ties keep registration order.
        self._rules.sort(key=lambda r: -getattr(r, "priority", 0))
        logger.debug("Registered %s (priority %s)", rule_name(rule), getattr(rule, "priority", 0))

    def _bind(self, rule: Rule) -> None:
        bind = getattr(rule, "bind", None)
        if self._dispatcher is not None and callable(bind):
            bind(self._dispatcher)

    def freeze(self) -> None:
        """Reject any further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """Whether registration has been closed."""
        return self._frozen

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Registered rules in dispatch order."""
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def dispatch(self, element: Tag, context: ConversionContext) -> Rule | None:
        """Find the first rule that matches an element.

        Returns:
            The matching rule, or None when no rule matches.
        """
        for rule in self._rules:
            if rule.matches(element, context):
                return rule
        return None

    def stats(self) -> dict[str, Any]:
        """Summarize the registered rules."""
        return {
            "total_providers": len(self._rules),
            "providers": [
                {
                    "name": rule_name(rule),
                    "priority": getattr(rule, "priority", 0),
                    "supported_elements": list(getattr(rule, "supported_elements", ())),
                }
                for rule in self._rules
            ],
        }
