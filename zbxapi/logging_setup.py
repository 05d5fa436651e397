"""
Logging configuration for zbxapi
"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_debug_handler: logging.Handler | None = None


def setup_logging(log_file: Path | None = None, debug: bool = False):
    """Setup zbxapi logging with transport library logs suppressed to WARNING"""
    logging.getLogger("curl_cffi").setLevel(logging.WARNING)

    zbx_logger = logging.getLogger("zbxapi")
    zbx_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        zbx_logger.addHandler(file_handler)


def enable_debug(status: bool):
    """Turn verbose tracing of the zbxapi logger on or off"""
    global _debug_handler

    zbx_logger = logging.getLogger("zbxapi")
    if status:
        zbx_logger.setLevel(logging.DEBUG)
        if _debug_handler is None and not logging.getLogger().handlers:
            _debug_handler = logging.StreamHandler()
            _debug_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            zbx_logger.addHandler(_debug_handler)
    else:
        zbx_logger.setLevel(logging.NOTSET)
        if _debug_handler is not None:
            zbx_logger.removeHandler(_debug_handler)
            _debug_handler = None
