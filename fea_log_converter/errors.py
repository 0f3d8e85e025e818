"""Exception types raised by the converter."""


class ConverterError(Exception):
    """Base class for all converter errors."""


class ConfigError(ConverterError):
    """Raised when the configuration is missing or invalid. Fatal for a run."""


class UndetectableFormatError(ConverterError):
    """Raised when a file's first line matches none of the boundary patterns."""

    def __init__(self, filename: str, first_line: str | None):
        self.filename = filename
        self.first_line = first_line
        super().__init__(f"Cannot determine log record type from first line of {filename}")


class RecordParseError(ConverterError):
    """Raised when a logical record cannot be turned into an event."""

    def __init__(self, reason: str, record: str):
        self.reason = reason
        self.record = record
        super().__init__(reason)
