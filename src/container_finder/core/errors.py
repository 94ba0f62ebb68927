# src/container_finder/core/errors.py


class ContainerFinderError(Exception):
    """Base class for errors raised by container_finder."""


class DocumentParseError(ContainerFinderError):
    """Raised when a backend cannot turn the input into a document."""


class ConfigOverrideError(ContainerFinderError):
    """Raised for a malformed or unusable 'key=value' configuration override."""
