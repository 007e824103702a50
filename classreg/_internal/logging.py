# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Simple logging configuration using Python's standard logging with Rich.

Library modules only create loggers; handlers are installed by applications
(the classreg CLI calls setup_logging()).

Usage:
    from classreg._internal.logging import setup_logging

    # In CLI setup
    setup_logging(level="info")

    # In library code
    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Registered 'gzip' in 'Codec'")
"""

import logging

LEVEL_MAP = {
    'quiet': logging.ERROR,
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'normal': logging.WARNING,
    'info': logging.INFO,
    'verbose': logging.INFO,
    'debug': logging.DEBUG,
}


def setup_logging(level: str = "warning") -> None:
    """Configure Python logging with Rich handler.

    Maps string level ('quiet', 'error', 'warning', 'normal', 'info',
    'verbose', 'debug') to logging constants. Unknown levels fall back to
    WARNING.
    """
    from rich.logging import RichHandler

    log_level = LEVEL_MAP.get(level.lower(), logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=False,
            show_time=False
        )
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(log_level)
