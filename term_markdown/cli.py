"""
Displays a Markdown file in the terminal.
Links are collected into a numbered list and can be selected with a single key.
"""

from __future__ import annotations

import click

from . import __version__
from .config import ConfigError, build_config
from .constants import ANSI_COLORS, QUIT_KEYS
from .document import Document
from .exceptions import RenderError
from .filesystem import get_max_file_size, normalize_filepath, read_markdown
from .render import render_lines

__all__ = ["cli"]


def _echo_links(document: Document) -> None:
    for index, link in enumerate(document.links):
        click.echo(f"{index}: {link}")


def _select_interactively(document: Document) -> None:
    """Read single key presses until the user quits, echoing selected links."""
    click.echo("Press 0-9 to select a link, q to quit.")
    while True:
        try:
            key = click.getchar()
        except (EOFError, KeyboardInterrupt):
            break
        if not key or key in QUIT_KEYS:
            break
        link = document.handle_input(key)
        if link is None:
            click.echo(f"No link for key {key!r}")
        else:
            click.echo(link)


@click.command()
@click.version_option(version=__version__)
@click.option("--links", "show_links", is_flag=True, help="List links with their selection keys")
@click.option("--select", "select_key", metavar="KEY", help="Print the link selected by KEY")
@click.option("--interactive", "-i", is_flag=True, help="Select links with single key presses")
@click.option("--width", type=click.IntRange(min=0), help="Clip lines to this many columns")
@click.option("--height", type=click.IntRange(min=0), help="Show at most this many lines")
@click.option("--raw", is_flag=True, help="Print the input without parsing it")
@click.option("--no-color", is_flag=True, help="Disable terminal styling")
@click.option("--heading-color", type=click.Choice(ANSI_COLORS), help="Colour of level 3+ headings")
@click.option("--strict/--no-strict", default=None, help="Fail on unsupported constructs")
@click.option("--strikethrough/--no-strikethrough", default=None, help="Parse ~~strikethrough~~")
@click.option("--tasklists/--no-tasklists", default=None, help="Parse - [ ] task lists")
@click.option("--footnotes/--no-footnotes", default=None, help="Parse [^footnotes]")
@click.option("--math/--no-math", default=None, help="Parse $math$")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    show_links: bool = False,
    select_key: str | None = None,
    interactive: bool = False,
    width: int | None = None,
    height: int | None = None,
    raw: bool = False,
    no_color: bool = False,
    heading_color: str | None = None,
    strict: bool | None = None,
    strikethrough: bool | None = None,
    tasklists: bool | None = None,
    footnotes: bool | None = None,
    math: bool | None = None,
):
    """
    Entry point for displaying a Markdown file and selecting its links.

    Args:
        filepath: Path to the Markdown file to display.
        show_links: Print the link list instead of the document.
        select_key: Print the link selected by this key instead of the document.
        interactive: Display the document, then select links key by key.
        width: Number of columns to clip lines to.
        height: Number of lines to show.
        raw: Skip parsing and print the input as-is.
        no_color: Disable terminal styling.
        heading_color: Override for the colour of level 3+ headings.
        strict: Fail instead of warning on unsupported constructs.
        strikethrough: Enable strikethrough syntax.
        tasklists: Enable task list syntax.
        footnotes: Enable footnote syntax.
        math: Enable dollar math syntax.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is not a Markdown file or the
            configuration is invalid.
        click.ClickException: If the file cannot be read, the parse fails, or
            `--select` selects nothing.

    Examples:
        term-markdown README.md --links
        term-markdown README.md --select 0
    """
    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            path.parent,
            heading_color=heading_color,
            strict=strict,
            strikethrough=strikethrough,
            tasklists=tasklists,
            footnotes=footnotes,
            math=math,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        text = read_markdown(path, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = Document(
            text,
            config,
            warn=lambda message: click.echo(message, err=True),
            parse=not raw,
        )
    except RenderError as error:
        raise click.ClickException(f"{path}: {error}") from error

    if show_links or select_key is not None:
        if show_links:
            _echo_links(document)
        if select_key is not None:
            link = document.handle_input(select_key)
            if link is None:
                raise click.ClickException(f"No link for key {select_key!r}")
            click.echo(link)
        return

    for row in render_lines(document.get_lines(), width, height, color=not no_color):
        click.echo(row)

    if interactive:
        _echo_links(document)
        _select_interactively(document)


if __name__ == "__main__":
    cli()
