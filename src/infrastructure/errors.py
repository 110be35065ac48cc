"""Error types raised by infrastructure components."""


class ContestTrackerError(Exception):
    """Base error for the contest tracker."""

    pass


class ConfigurationError(ContestTrackerError):
    """Invalid or unreadable configuration value."""

    pass


class SourceError(ContestTrackerError):
    """An upstream contest source could not produce contests."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"[{source}] {message}")


class SourceUnavailableError(SourceError):
    """Network failure, timeout or non-success HTTP status."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(source, message)


class MalformedPayloadError(SourceError):
    """Upstream answered, but the payload does not match the expected schema."""

    pass


class MissingCredentialsError(SourceError):
    """A credentialed source is not configured in this deployment."""

    pass
