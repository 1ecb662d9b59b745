"""Custom exceptions for hostblock."""


class HostblockError(Exception):
    """Base exception for all hostblock errors."""

    pass


class ConfigError(HostblockError):
    """Configuration-related errors."""

    pass


class FetchError(HostblockError):
    """A single source could not be fetched."""

    pass


class FetcherUnavailableError(HostblockError):
    """No usable HTTP client is available."""

    pass


class WriteError(HostblockError):
    """The output or backup file could not be written."""

    pass


class AbortedError(HostblockError):
    """The run was declined after a source failed."""

    pass
