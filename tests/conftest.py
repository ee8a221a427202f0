"""Pytest fixtures for block-convert tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from bs4.element import Tag

from block_convert.config import DefaultAttributes, load_default_attributes
from block_convert.core.context import ConversionContext
from block_convert.core.converter import HtmlToBlocksConverter
from block_convert.core.html_utils import parse_html

HERO_HTML = '<div class="hero"><h1>Welcome</h1><p>Get started</p></div>'


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for tests."""
    return tmp_path


@pytest.fixture
def defaults() -> DefaultAttributes:
    """Load the packaged default-attribute table."""
    return load_default_attributes()


@pytest.fixture
def context() -> ConversionContext:
    """Create a context with default options."""
    return ConversionContext()


@pytest.fixture
def hero_html() -> str:
    """A small hero section: container, heading and paragraph."""
    return HERO_HTML


@pytest.fixture
def converter(defaults: DefaultAttributes) -> HtmlToBlocksConverter:
    """Create a converter for the default dialect."""
    return HtmlToBlocksConverter(defaults=defaults)


@pytest.fixture
def generate_converter(defaults: DefaultAttributes) -> HtmlToBlocksConverter:
    """Create a converter for the generate dialect."""
    return HtmlToBlocksConverter("generate", defaults=defaults)


@pytest.fixture
def gutenberg_converter(defaults: DefaultAttributes) -> HtmlToBlocksConverter:
    """Create a converter for the gutenberg dialect."""
    return HtmlToBlocksConverter("gutenberg", defaults=defaults)


@pytest.fixture
def greenshift_converter(defaults: DefaultAttributes) -> HtmlToBlocksConverter:
    """Create a converter for the greenshift dialect."""
    return HtmlToBlocksConverter("greenshift", defaults=defaults)


@pytest.fixture
def first_element() -> Callable[[str], Tag]:
    """Parse a fragment and return its first element."""

    def parse(html: str) -> Tag:
        body = parse_html(html)
        assert body is not None
        element = body.find(True)
        assert element is not None
        return element

    return parse


@pytest.fixture
def blocks_dir(temp_dir: Path) -> Path:
    """Create a blocks directory with two block templates."""
    blocks = temp_dir / "blocks"
    (blocks / "hero").mkdir(parents=True)
    (blocks / "hero" / "template.html").write_text(HERO_HTML)
    (blocks / "cta").mkdir()
    (blocks / "cta" / "template.html").write_text(
        '<section class="cta"><h2>Ready?</h2><a class="btn" href="/signup">Sign up</a></section>'
    )
    # A directory without a template is not a block.
    (blocks / "assets").mkdir()
    return blocks
