"""Errors raised by the message engine."""


class MessageError(Exception):
    """Base class for commit message generation errors."""
    pass


class InvalidInput(MessageError, ValueError):
    """The caller broke an input contract, e.g. passed an empty change set."""
    pass


class ResponseError(MessageError):
    """An AI response could not be turned into a commit message."""
    pass


class MalformedResponse(ResponseError):
    """No well-formed JSON object could be extracted from the response."""
    pass


class MissingField(ResponseError):
    """The JSON payload lacks a required field."""

    def __init__(self, field: str):
        super().__init__(f"AI response is missing required field '{field}'")
        self.field = field
