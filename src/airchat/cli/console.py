"""Terminal output helpers: logging setup and paced reply printing."""

import logging
import time

from rich.console import Console
from rich.logging import RichHandler

# Seconds between words when printing a reply
DEFAULT_DELAY = 0.1


def setup_logging(verbose: bool = False) -> None:
    """Route library logging through Rich on stderr.

    Args:
        verbose: Show DEBUG records (default shows WARNING and above)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def typewrite(console: Console, text: str, delay: float = DEFAULT_DELAY) -> None:
    """Print text word by word, pausing between words.

    Line breaks in the text are kept. With ``delay <= 0`` the text is printed
    at once. Output is written raw, without Rich markup or highlighting.
    """
    if delay <= 0:
        console.out(text, highlight=False)
        return

    for i, line in enumerate(text.split("\n")):
        if i:
            console.out("", highlight=False)
        for word in line.split():
            console.out(word, end=" ", highlight=False)
            console.file.flush()
            time.sleep(delay)
    console.out("", highlight=False)
