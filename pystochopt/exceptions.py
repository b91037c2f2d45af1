# pystochopt/exceptions.py

"""
Exception hierarchy for the stochastic scenario-tree indexing package.

All errors stem from caller-supplied input or missing external data, so
none of them are retried.
"""


class StochOptError(Exception):
    """Base class for all pystochopt errors."""
    pass


class OutOfRangeError(StochOptError, IndexError):
    """Raised when a (scenario, time) coordinate or flat index lies outside the tree."""
    pass


class InsufficientDataError(StochOptError, ValueError):
    """Raised when a historical source is shorter than a scenario's sampling window."""
    pass


class SourceFormatError(StochOptError, ValueError):
    """Raised when a tabular source contains an unparsable field."""

    def __init__(self, message: str, source: str = None, row: int = None):
        self.source = source
        self.row = row
        context = []
        if source is not None:
            context.append(f"source={source}")
        if row is not None:
            context.append(f"row={row}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class SourceNotFoundError(StochOptError, FileNotFoundError):
    """Raised when a tabular source cannot be opened."""
    pass


class DegenerateConfigurationError(StochOptError, ValueError):
    """Raised for a branching factor of 0, a non-positive stage length or a negative epsilon."""
    pass
