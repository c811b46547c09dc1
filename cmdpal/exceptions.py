"""Custom exception hierarchy for cmdpal.

Exception Hierarchy:
    CmdpalError (base)
    ├── StorageError - persistent key-value store read/write
    ├── RemoteSearchError - remote search provider failures (retryable)
    └── CommandTreeError - malformed command trees

Only CommandTreeError ever reaches the host application. Storage and remote
search errors are raised by the low-level pieces and recovered by the ledger
and the search coordinator, which log them and carry on with fewer commands.

Usage:
    from cmdpal.exceptions import StorageError

    try:
        path.write_text(payload)
    except OSError as e:
        raise StorageError("Failed to write store", path=str(path)) from e
"""

from typing import Any, Optional


class CmdpalError(Exception):
    """Base exception for all cmdpal errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., keys, ids)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class StorageError(CmdpalError):
    """The persistent key-value store could not be read or written."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context["key"] = key
        super().__init__(message, **context)


class RemoteSearchError(CmdpalError):
    """The remote search provider failed or timed out - retryable."""

    def __init__(
        self,
        message: str = "Remote search failed",
        *,
        query: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        **context: Any,
    ) -> None:
        if query is not None:
            context["query"] = query
        if timeout_seconds is not None:
            context["timeout_seconds"] = timeout_seconds
        super().__init__(message, retryable=True, **context)


class CommandTreeError(CmdpalError):
    """A command tree violates the leaf/group contract or contains a cycle."""

    def __init__(
        self,
        message: str = "Invalid command tree",
        *,
        command_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id:
            context["command_id"] = command_id
        super().__init__(message, **context)
