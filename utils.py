# utils.py
import os
import logging

import requests
from requests.adapters import HTTPAdapter
from rich.console import Console
from rich.logging import RichHandler
from urllib3.util.retry import Retry

from config import HTTP_RETRIES, OUTPUT_DIR, LOG_TO_FILE, LOG_FILE, LOG_FORMAT, LOG_DATE_FMT


def get_session(retries: int = HTTP_RETRIES) -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET", "POST"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def setup_logger(name: str = "countries", verbose: bool = False) -> logging.Logger:
    """Create logger with a Rich console handler and an optional file handler."""
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    console_level = logging.DEBUG if verbose else logging.WARNING

    if logger.handlers:
        # already set up, only adjust console verbosity
        for handler in logger.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(console_level)
        return logger

    rh = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        level=console_level,
    )
    logger.addHandler(rh)

    if LOG_TO_FILE:
        os.makedirs(OUTPUT_DIR, exist_ok=True)
        fh = logging.FileHandler(os.path.join(OUTPUT_DIR, LOG_FILE), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FMT))
        logger.addHandler(fh)

    return logger
