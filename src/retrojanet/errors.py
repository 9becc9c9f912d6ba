"""
Exceptions raised by the converter. Everything here is fatal for a run.
"""


class ConversionError(Exception):
    """Base exception for conversion runs."""


class SourceReadError(ConversionError):
    """Raised when the source file cannot be read."""


class SourceParseError(ConversionError):
    """Raised when the source file is not a valid Java compilation unit."""


class OutputDirectoryError(ConversionError):
    """Raised when the output directory or a generated file cannot be written."""
