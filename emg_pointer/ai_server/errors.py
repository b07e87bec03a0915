class AIServerError(Exception):
    """Base class for failures talking to the AI server."""


class TransportError(AIServerError):
    """Connection error, timeout or non-success HTTP status."""


class ResponseParseError(AIServerError, ValueError):
    """The server answered with a payload we cannot interpret."""
