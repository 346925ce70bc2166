"""
Errors — Failure taxonomy for snippet generation

Fatal errors stop the run; field-level problems never raise, they are
carried as FieldOutcome values and reported (see core.schema).
"""


class TfsnipError(Exception):
    """Base class for all fatal tfsnip errors."""


class ParseError(TfsnipError):
    """Source unit could not be read or parsed into a syntax tree."""


class ShapeError(TfsnipError):
    """Declaration function does not have the expected structure."""


class DiscoveryError(TfsnipError):
    """Provider directory is missing or unreadable."""


class RenderError(TfsnipError):
    """Template could not be resolved or rendered."""


class ConfigError(TfsnipError):
    """Configuration file is malformed or a setting is invalid."""
