# File: user_api/core/logging.py

import logging
import sys

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Send application logs to stdout with a plain, readable format.

    Safe to call more than once: the handler is only installed the first time.
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(handler)
    _configured = True

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
