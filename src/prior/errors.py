"""Prior client error types."""


class PriorError(Exception):
    """Base client error."""


class UsageError(PriorError):
    """Required command input is missing or malformed."""

    def __init__(self, message: str, usage: str = "") -> None:
        super().__init__(message)
        self.usage = usage
