"""HTML to block markup conversion facade."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from block_convert.config import DefaultAttributes, load_default_attributes
from block_convert.core.block import Block, BlockStats
from block_convert.core.context import ConversionContext
from block_convert.core.dialects import resolve_dialect
from block_convert.core.html_utils import parse_html, sanitize_html
from block_convert.core.registry import RuleRegistry
from block_convert.core.serializer import serialize_blocks
from block_convert.core.transformer import TreeTransformer
from block_convert.exceptions import BlockConvertError, DispatchError

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class ConversionResult:
    """Outcome of one HTML to block markup conversion.

    ``markup`` is the minified markup, kept under its historical name.
    """

    success: bool
    blocks: list[Block] = field(default_factory=list)
    markup: str = ""
    unminified_markup: str = ""
    minified_markup: str = ""
    original_html: str = ""
    stats: BlockStats | None = None
    error: str | None = None
    timestamp: str = field(default_factory=_utc_timestamp)

    @classmethod
    def failure(cls, error: str, original_html: str = "") -> ConversionResult:
        """Build a failed result."""
        return cls(success=False, error=error, original_html=original_html)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary with camelCase keys."""
        data: dict[str, Any] = {
            "success": self.success,
            "timestamp": self.timestamp,
        }
        if self.success:
            data.update({
                "blocks": [block.to_dict() for block in self.blocks],
                "markup": self.markup,
                "unminifiedMarkup": self.unminified_markup,
                "minifiedMarkup": self.minified_markup,
                "originalHtml": self.original_html,
                "stats": self.stats.to_dict() if self.stats else None,
            })
        else:
            data["error"] = self.error
        return data


class HtmlToBlocksConverter:
    """Converts HTML fragments to block markup in one dialect.

    The dialect's rules are registered once at construction; the registry
    is frozen afterwards, so one converter can serve many conversions.
    """

    def __init__(self, dialect: str | None = None, defaults: DefaultAttributes | None = None) -> None:
        """Initialize the converter.

        Args:
            dialect: Output dialect name. Unknown names use the default dialect.
            defaults: Default-attribute table. Defaults to the packaged table.
        """
        self._dialect = resolve_dialect(dialect)
        self.defaults = defaults or load_default_attributes()

        self.registry = RuleRegistry()
        for rule in self._dialect.build_rules(self.defaults):
            self.registry.register(rule)
        self.registry.freeze()
        self.transformer = TreeTransformer(self.registry, self._dialect.wrap_text)

        stats = self.registry.stats()
        logger.info(
            "Initialized %s dialect with %d rules", self._dialect.name, stats["total_providers"]
        )

    @property
    def dialect(self) -> str:
        """Name of the active dialect."""
        return self._dialect.name

    def convert(
        self, html: str, options: ConversionContext | dict[str, Any] | None = None
    ) -> ConversionResult:
        """Convert an HTML fragment to block markup.

        Never raises for bad input; failures come back as a result with
        ``success`` False.

        Args:
            html: HTML fragment.
            options: Conversion options as a context or a dict of option values.

        Returns:
            The conversion result.
        """
        if not html or not isinstance(html, str) or not html.strip():
            return ConversionResult.failure("Invalid HTML input: expected a non-empty string")

        if isinstance(options, ConversionContext):
            context = options
        else:
            try:
                context = ConversionContext.from_dict(options)
            except BlockConvertError as e:
                return ConversionResult.failure(str(e), original_html=html)

        root = parse_html(sanitize_html(html))
        if root is None:
            return ConversionResult.failure("Failed to parse HTML", original_html=html)

        try:
            blocks = self.transformer.transform(root, context)
        except DispatchError as e:
            logger.error("Rule table invariant violated: %s", e)
            return ConversionResult.failure(str(e), original_html=html)
        except BlockConvertError as e:
            logger.error("Conversion failed: %s", e)
            return ConversionResult.failure(str(e), original_html=html)

        serialized = serialize_blocks(blocks)
        return ConversionResult(
            success=True,
            blocks=blocks,
            markup=serialized.minified,
            unminified_markup=serialized.unminified,
            minified_markup=serialized.minified,
            original_html=html,
            stats=BlockStats.from_blocks(blocks),
        )

    def provider_stats(self) -> dict[str, Any]:
        """Registered rules in dispatch order."""
        return self.registry.stats()
