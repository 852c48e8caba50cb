import click

from checkignore.constants import Colors
from checkignore.constants import PATHSPEC_GLOB_CHARS


def with_color(color: Colors, text: str, bold: bool = False) -> str:
    """
    Wrap text in color & reset

    Color is only applied when stderr is a terminal (see Terminal.is_color).
    """
    from checkignore.state import get_state  # avoiding circular imports

    terminal = get_state().terminal
    if not terminal.is_color:
        return text
    return click.style(text, fg=color.value, bold=bold)


def is_glob_pathspec(pathspec: str) -> bool:
    return any(c in PATHSPEC_GLOB_CHARS for c in pathspec)
