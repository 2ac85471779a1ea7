"""Logging setup using rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, handler: logging.Handler = None) -> None:
    """Send log records to the terminal through rich.

    Args:
        verbose: Log DEBUG and above instead of WARNING and above.
        handler: Handler to use instead of a rich handler on stderr.
    """
    if handler is None:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # urllib3 connection chatter is noise even in verbose mode
    logging.getLogger("urllib3").setLevel(logging.WARNING)
