from __future__ import annotations

import logging
import sys

from rich.logging import RichHandler


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
    use_rich: bool = False,
) -> logging.Handler:
    """Attach a console handler called *handler_name* to *logger* once.

    Later calls only adjust the logger level, so repeated CLI invocations in
    one process do not print every record twice.
    """

    for handler in logger.handlers:
        if handler.name == handler_name:
            logger.setLevel(level)
            return handler

    if use_rich:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    handler.name = handler_name
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
