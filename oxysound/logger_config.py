import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(verbose: bool = False):
    """Configure the root logger for the application.

    Logs go to stderr so that stdout only carries command output.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.INFO if verbose else logging.WARNING)

    # Only add our handler once, even if the CLI callback runs repeatedly
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
        logger.addHandler(handler)
