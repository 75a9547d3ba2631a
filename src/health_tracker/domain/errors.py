"""Errors raised when importing files into the store."""


class ImportValidationError(ValueError):
    """An import file is missing a required field."""


class ImportFormatError(ValueError):
    """An import file cannot be recognized or parsed."""


class NothingToExportError(ValueError):
    """The requested day has no entries, water or weight."""
