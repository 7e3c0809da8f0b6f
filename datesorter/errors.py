class DateSorterError(Exception):
    """Base error for the project."""

class InvalidPathError(DateSorterError):
    pass

class ConfigurationError(DateSorterError):
    pass

class TimestampReadError(DateSorterError):
    """Raised when a file's timestamps cannot be read."""

class DestinationError(DateSorterError):
    """Raised when a file cannot be placed relative to the source root."""

class MoveError(DateSorterError):
    pass
