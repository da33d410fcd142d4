"""Rich consoles for the tracksplice CLI.

Tables and notices go to stdout, warnings and errors to stderr.
"""

from rich.console import Console

LEVEL_STYLES = {
    "info": "green",
    "warning": "yellow",
    "error": "bold red",
}

_consoles: dict[bool, Console] = {}


def get_console(stderr: bool = False) -> Console:
    """Get the shared stdout (or stderr) console, creating it on first use."""
    console = _consoles.get(stderr)
    if console is None:
        console = Console(stderr=stderr, highlight=False, emoji=False)
        _consoles[stderr] = console
    return console


def echo(message: str, level: str = "info") -> None:
    """Print a user-facing message styled for its level.

    Messages are printed verbatim: square brackets in track names or URIs
    are not read as markup, and long lines are not wrapped.
    """
    to_stderr = level in ("warning", "error")
    get_console(stderr=to_stderr).print(
        message, style=LEVEL_STYLES.get(level), markup=False, soft_wrap=True
    )
