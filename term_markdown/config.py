"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import (
    ANSI_COLORS,
    DEFAULT_HEADING_COLOR,
    DEFAULT_LIST_INDENT,
    DEFAULT_MAX_FILE_SIZE,
)

CONFIG_TABLE = "term-markdown"
CONFIG_DOTFILE = ".term-markdown.toml"


@dataclass
class RenderConfig:
    """Configuration for turning Markdown into terminal lines.

    Attributes:
        heading_color: Foreground colour for headings of level 3 and deeper.
        list_indent: Characters repeated once per enclosing list before an
            item marker.
        strict: Raise on unsupported constructs instead of rendering their
            contents unstyled.
        strikethrough: Recognise ``~~text~~``.
        tasklists: Recognise ``- [ ]`` and ``- [x]`` task markers.
        footnotes: Recognise ``[^note]`` references and definitions.
        math: Recognise ``$inline$`` and ``$$display$$`` math.
        max_file_size: Maximum file size in bytes that will be read.

    Examples:
        RenderConfig(heading_color="cyan", strikethrough=True)
    """

    # Styling
    heading_color: str = DEFAULT_HEADING_COLOR
    list_indent: str = DEFAULT_LIST_INDENT

    # Behaviour
    strict: bool = False

    # Syntax extensions
    strikethrough: bool = False
    tasklists: bool = False
    footnotes: bool = False
    math: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`heading_color` must be one of: ...")
    """


def load_config(search_path: Path) -> RenderConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.term-markdown]`` table from `pyproject.toml` and the
    ``[term-markdown]`` or ``[tool.term-markdown]`` table from
    `.term-markdown.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RenderConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / CONFIG_DOTFILE,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return RenderConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> RenderConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RenderConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return RenderConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return RenderConfig()

    # TOML keys are often written with dashes
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return RenderConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RenderConfig) -> None:
    """Validate a `RenderConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the heading colour is unknown, the list indent is not
            made of spaces or tabs, a flag is not a boolean, or the file size
            limit is not a positive integer.

    Examples:
        validate_config(RenderConfig(heading_color="magenta"))
    """
    if config.heading_color not in ANSI_COLORS:
        raise ConfigError(f"`heading_color` must be one of: {', '.join(ANSI_COLORS)}")

    if not isinstance(config.list_indent, str) or config.list_indent.strip(" \t"):
        raise ConfigError("`list_indent` must contain only spaces or tabs")

    _ensure_booleans(
        {
            "strict": config.strict,
            "strikethrough": config.strikethrough,
            "tasklists": config.tasklists,
            "footnotes": config.footnotes,
            "math": config.math,
        }
    )

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: RenderConfig, **overrides: object) -> RenderConfig:
    """Apply override values to a `RenderConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RenderConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RenderConfig`.

    Examples:
        updated = apply_overrides(config, heading_color="green", strict=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RenderConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RenderConfig: Validated configuration ready for parsing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), heading_color="cyan")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")
