"""
pystochopt/logs/logger.py

Per-run logger writing to a log file and the console.
"""
import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(run_name: str, scenario: str, log_dir: str = "logs",
               level: int = logging.INFO, name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger that writes to `<log_dir>/<run_name>_<scenario>.log`.

    Handlers are attached to the `pystochopt` logger (or `name`) so that
    every module logger of the package propagates into the run log.
    Calling it again for the same file does not duplicate handlers.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, f"{run_name}_{scenario}.log"))

    logger = logging.getLogger(name or "pystochopt")
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == log_path
               for h in logger.handlers):
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger
