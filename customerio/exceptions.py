from __future__ import annotations


class CustomerIOError(Exception):
    """Base exception for the Customer.io request wrapper."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class TransportError(CustomerIOError):
    """No response was received: timeout, DNS failure, refused connection.

    ``message`` holds the transport code, e.g. ``ETIMEDOUT`` or ``ECONNREFUSED``.
    """
    pass


class APIError(CustomerIOError):
    """The API answered with a failing status or a body that is not JSON."""

    def __init__(self, message: str = "", status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
