class InsertAssetsError(Exception):
    """Base class for failures raised by html-insert-assets."""


class ConfigError(InsertAssetsError, ValueError):
    """Invalid or missing command-line arguments."""


class DocumentError(InsertAssetsError):
    """The input document lacks a required element."""
