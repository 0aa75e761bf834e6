"""Exceptions raised by the Delicious client.

Only transport-level problems are raised. Application-level answers such
as 'no bookmarks' or 'access denied' come back as failure envelopes.
"""

from typing import Optional


class DeliciousError(Exception):
    """Base exception for delicli errors."""


class DeliciousConnectionError(DeliciousError):
    """Raised when the service throttles us or never returns a body."""

    def __init__(
        self,
        message: str,
        attempts: int,
        url: str,
        status_code: Optional[int] = None,
    ):
        self.attempts = attempts
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(DeliciousError):
    """Raised when a response body cannot be parsed as XML or JSON."""

    # Enough of the body to recognise an HTML error page in a log line.
    EXCERPT_LENGTH = 120

    def __init__(self, message: str, body: str, url: Optional[str] = None):
        self.body = body
        self.url = url
        excerpt = body[: self.EXCERPT_LENGTH]
        super().__init__(f"{message}. Body starts with: {excerpt!r}")
