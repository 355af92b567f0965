"""
Parser configuration.

Loaded from a ``specmodel.toml`` file:

    [parser]
    internal_prefix = "$"
    shared_annotation = "Shared"
    duplicate_fixtures = "error"
"""

import logging
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ConfigError, ErrorContext

logger = logging.getLogger(__name__)

CONFIG_FILE = "specmodel.toml"


class DuplicateFixturePolicy(str, Enum):
    """What to do when a fixture role is declared twice."""

    ERROR = "error"  # raise DuplicateFixtureError
    OVERWRITE = "overwrite"  # keep the last declaration, log a warning


@dataclass(frozen=True)
class ParserConfig:
    """Settings for classifying members of a specification class."""

    internal_prefix: str = "$"  # fields named with this prefix are ignored
    shared_annotation: str = "Shared"  # marks fields persisting across iterations
    duplicate_fixtures: DuplicateFixturePolicy = DuplicateFixturePolicy.ERROR


DEFAULT_CONFIG = ParserConfig()


def _text_option(parser: dict, key: str, default: str, path: Path) -> str:
    value = parser.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(
            f"Invalid {key} value {value!r}. Expected a non-empty string",
            ErrorContext(file=path, line=1, column=1),
        )
    return value


def load_config(path: Path) -> ParserConfig:
    """
    Load parser configuration from a TOML file.

    Missing keys fall back to the defaults.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or a
            value is invalid
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Cannot read config file: {e}", ErrorContext(file=path, line=1, column=1)
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=path, line=1, column=1)) from e

    parser = data.get("parser", {})
    if not isinstance(parser, dict):
        raise ConfigError("[parser] must be a table", ErrorContext(file=path, line=1, column=1))

    policy_value = parser.get("duplicate_fixtures", DEFAULT_CONFIG.duplicate_fixtures.value)
    try:
        policy = DuplicateFixturePolicy(policy_value)
    except ValueError:
        valid = ", ".join(p.value for p in DuplicateFixturePolicy)
        raise ConfigError(
            f"Invalid duplicate_fixtures value '{policy_value}'. Valid values: {valid}",
            ErrorContext(file=path, line=1, column=1),
        ) from None

    config = ParserConfig(
        internal_prefix=_text_option(
            parser, "internal_prefix", DEFAULT_CONFIG.internal_prefix, path
        ),
        shared_annotation=_text_option(
            parser, "shared_annotation", DEFAULT_CONFIG.shared_annotation, path
        ),
        duplicate_fixtures=policy,
    )
    logger.debug("Loaded parser config from %s: %s", path, config)
    return config


def find_config_file(start: Path) -> Path | None:
    """Walk up from ``start`` looking for ``specmodel.toml``."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None
