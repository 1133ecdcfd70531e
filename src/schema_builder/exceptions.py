"""Custom exceptions for the schema builder."""


class SchemaBuilderError(Exception):
    """Base exception for all schema builder errors."""

    pass


class ConfigurationError(SchemaBuilderError):
    """Error in configuration or parameters."""

    pass


class MetadataUnavailableError(SchemaBuilderError):
    """Model or route metadata could not be loaded."""

    pass


class WriteFailure(SchemaBuilderError):
    """Error writing a schema file."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
