# pystochopt/output/__init__.py

from .writer import EXPORT_COLUMNS, ExportWriter
