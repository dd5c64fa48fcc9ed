"""Errors raised by the streaming chat client."""


class ChatClientError(Exception):
    """Base class for chat client failures."""

    pass


class ChatTransportError(ChatClientError):
    """Raised when the connection could not be established or dropped."""

    pass


class ChatTimeoutError(ChatClientError):
    """Raised when no terminal event arrived within the time budget."""

    pass


class ChatParseError(ChatClientError):
    """Raised when a stream payload is not a valid event."""

    pass


class ChatUpstreamError(ChatClientError):
    """Raised when the backend reports a failure."""

    pass
