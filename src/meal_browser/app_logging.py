"""Logging configuration helpers."""

import logging

# httpx logs every request at INFO; catalog calls already log their failures.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(debug: bool = False) -> None:
    """Route ``meal_browser`` logs to one stream handler.

    With ``debug`` the package logs discarded stale results and the
    transport loggers are left alone; otherwise they only report warnings.
    """
    logger = logging.getLogger("meal_browser")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if debug else logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
