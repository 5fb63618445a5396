"""
Exceptions raised by the escapement pipeline.

Every error is fatal for the run; nothing here is retried.
"""


class EscapementError(Exception):
    """Base class for all escapement pipeline errors."""
    pass


class DataSourceUnavailableError(EscapementError):
    """Neither the local cache nor the remote source yielded data."""

    def __init__(self, cache_path, source_url, reason: str = ""):
        self.cache_path = cache_path
        self.source_url = source_url
        self.reason = reason
        message = f"No escapement data available from {cache_path} or {source_url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedInputError(EscapementError):
    """Input records are missing columns or hold values that cannot be parsed."""

    def __init__(self, message: str, bad_values=None):
        self.bad_values = list(bad_values) if bad_values is not None else []
        if self.bad_values:
            shown = ", ".join(repr(v) for v in self.bad_values[:5])
            if len(self.bad_values) > 5:
                shown += f", ... ({len(self.bad_values)} total)"
            message = f"{message} [{shown}]"
        super().__init__(message)
