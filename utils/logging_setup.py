# utils/logging_setup.py
import logging
import os
import sys

LOGGER_NAME = "payoutplanner"

# console stays short: stdout carries tables/JSON, log lines go to stderr
CONSOLE_FORMAT = "%(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s.%(module)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: str | None = None) -> logging.Logger:
    """
    Configure the `payoutplanner` logger once; later calls only change the level.
    The file handler (if any) always records DEBUG so evaluator traces survive
    a quiet console.
    """
    logger = logging.getLogger(LOGGER_NAME)
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(min(lvl, logging.DEBUG) if logfile else lvl)
    logger.propagate = False

    if logger.handlers:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler):
                h.setLevel(lvl)
        return logger

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(lvl)
    ch.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(ch)
    if logfile:
        folder = os.path.dirname(logfile)
        if folder:
            os.makedirs(folder, exist_ok=True)
        fh = logging.FileHandler(logfile, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(fh)
    return logger
