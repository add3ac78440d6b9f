"""
Domain exceptions raised by the service layer.

``ValueError`` is used for invalid input (400); the classes below cover the
remaining client errors the API maps to HTTP status codes.
"""


class NotFoundError(LookupError):
    """A referenced record does not exist (404)."""


class ConflictError(Exception):
    """The write would duplicate an existing record (409)."""


class AuthenticationError(Exception):
    """Missing, invalid, or expired credentials (401)."""
