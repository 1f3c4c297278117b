from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from term_markdown.config import (
    ConfigError,
    RenderConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".term-markdown.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "cyan"
        list_indent = "\\t"
        strict = true
        strikethrough = true
        tasklists = true
        footnotes = true
        math = true
        max_file_size = 1
        """,
    )

    config = load_config(tmp_path)

    assert config == RenderConfig(
        heading_color="cyan",
        list_indent="\t",
        strict=True,
        strikethrough=True,
        tasklists=True,
        footnotes=True,
        math=True,
        max_file_size=1,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [term-markdown]
        heading_color = "magenta"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.heading_color == "magenta"


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.term-markdown]
        strict = true
        """,
    )

    assert load_config(tmp_path).strict is True


def test_dashed_keys_are_accepted(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading-color = "yellow"
        max-file-size = 2048
        """,
    )

    config = load_config(tmp_path)

    assert config.heading_color == "yellow"
    assert config.max_file_size == 2048


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "red"
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert config.heading_color == "red"


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "red"
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.term-markdown]
        """,
    )

    config = load_config(child)

    assert config.heading_color == RenderConfig().heading_color


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        math = true
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [project]
        name = "unrelated"
        """,
    )

    assert load_config(child).math is True


def test_load_config_returns_defaults_when_missing(tmp_path: Path):
    config = load_config(tmp_path)

    assert config == RenderConfig()


def test_load_config_skips_invalid_toml(tmp_path: Path):
    invalid_dir = tmp_path / "invalid"
    invalid_dir.mkdir()
    _write_pyproject(invalid_dir, "not = {valid")
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "green"
        """,
    )

    nested = invalid_dir / "child"
    nested.mkdir()
    config = load_config(nested)

    assert config.heading_color == "green"


def test_load_config_errors_on_unknown_key(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "green"
        unexpected = true
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_errors_on_non_table(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        term-markdown = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_partial_config_merges_with_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        tasklists = true
        """,
    )

    config = load_config(tmp_path)

    assert config.tasklists is True
    # Defaults preserved
    defaults = RenderConfig()
    assert config.heading_color == defaults.heading_color
    assert config.list_indent == defaults.list_indent


def test_apply_overrides_ignores_none():
    config = RenderConfig()

    assert apply_overrides(config, heading_color=None, strict=None) is config
    assert apply_overrides(config, strict=True).strict is True


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "red"
        strict = true
        """,
    )

    config = build_config(tmp_path, heading_color="cyan", strict=None)

    assert config.heading_color == "cyan"
    assert config.strict is True


def test_build_config_validates_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.term-markdown]
        heading_color = "orange"
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        RenderConfig(heading_color="orange"),
        RenderConfig(heading_color=""),
        RenderConfig(list_indent="--"),
        RenderConfig(list_indent=2),  # type: ignore[arg-type]
        RenderConfig(max_file_size=0),
        RenderConfig(max_file_size=-1),
    ],
)
def test_validate_config_rejects_invalid_values(config: RenderConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


@pytest.mark.parametrize(
    "config",
    [
        RenderConfig(strict="yes"),  # type: ignore[arg-type]
        RenderConfig(math=1),  # type: ignore[arg-type]
        RenderConfig(max_file_size="big"),  # type: ignore[arg-type]
        RenderConfig(max_file_size=True),
    ],
)
def test_validate_config_rejects_wrong_types(config: RenderConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_validate_config_accepts_empty_indent_and_tabs():
    validate_config(RenderConfig(list_indent=""))
    validate_config(RenderConfig(list_indent="\t"))
