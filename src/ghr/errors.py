"""Exception taxonomy for the GHR report client."""


class GhrError(Exception):
    """Base class for report client errors."""


class TransportError(GhrError):
    """Raised when the report collection cannot be read.

    Covers connection failures, HTTP error statuses, timeouts and
    unreadable local report files.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to read reports from {source}: {reason}")


class DecodeError(GhrError):
    """Raised when a payload does not match the report wire schema.

    Unknown component description tags are decode errors too; they are
    never coerced into a known variant.
    """


class ConfigError(GhrError):
    """Raised when configuration loading or validation fails."""
