"""Packaged defaults and user option files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from block_convert.core.context import ConversionContext
from block_convert.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


@dataclass(frozen=True)
class DefaultAttributes:
    """Read-only table of default attributes per block kind."""

    class_names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    exempt: frozenset[str] = frozenset()

    def default_class(self, block_name: str | None) -> str | None:
        """Get the dialect-default class for a block kind, ignoring exemptions."""
        if not block_name:
            return None
        return self.class_names.get(block_name)

    def class_name_for(self, block_name: str) -> str | None:
        """Get the className attribute a block kind should carry, if any."""
        if block_name in self.exempt:
            return None
        return self.class_names.get(block_name)

    @classmethod
    def from_dict(cls, data: dict) -> DefaultAttributes:
        """Create from a parsed defaults document."""
        class_names = data.get("class_names") or {}
        exempt = data.get("class_name_exempt") or []
        if not isinstance(class_names, dict) or not isinstance(exempt, list):
            raise ConfigurationError(
                "Defaults must map 'class_names' to a mapping and 'class_name_exempt' to a list"
            )
        return cls(
            class_names=MappingProxyType({str(k): str(v) for k, v in class_names.items()}),
            exempt=frozenset(str(name) for name in exempt),
        )


def _read_yaml(path: Path) -> dict:
    try:
        content = path.read_text()
        data = yaml.safe_load(content) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigurationError(f"Could not load {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data


def load_default_attributes(path: Path | str | None = None) -> DefaultAttributes:
    """Load the default-attribute table.

    Args:
        path: YAML file to load. Defaults to the packaged table.

    Returns:
        Immutable default-attribute table.
    """
    source = Path(path) if path else DEFAULTS_PATH
    defaults = DefaultAttributes.from_dict(_read_yaml(source))
    logger.debug("Loaded %d default class names from %s", len(defaults.class_names), source)
    return defaults


def load_options(path: Path | str) -> ConversionContext:
    """Load conversion options from a YAML file.

    The file may hold the options at the top level or under an
    ``options`` key.

    Args:
        path: Options file path.

    Returns:
        Conversion context built from the file.

    Raises:
        ConfigurationError: If the file is unreadable or names unknown options.
    """
    data = _read_yaml(Path(path))
    options = data.get("options", data)
    if not isinstance(options, dict):
        raise ConfigurationError(f"'options' in {path} must be a mapping")
    return ConversionContext.from_dict(options)
