"""Error kinds raised by the probe pipeline."""


class ProbeError(Exception):
    """Base class for every failure that aborts a probe run."""


class NetworkError(ProbeError):
    """Raised when an HTTP request cannot be completed (DNS, connect, TLS)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class StorageError(ProbeError):
    """Raised when a local file cannot be opened, created or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ParseError(ProbeError):
    """Raised when catalog content is malformed or does not match the schema."""

    def __init__(self, message: str, location: str = ""):
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class ConfigError(ProbeError):
    """Raised when the configuration file is missing or malformed."""
