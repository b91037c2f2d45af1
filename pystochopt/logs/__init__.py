# pystochopt/logs/__init__.py

from .logger import get_logger
