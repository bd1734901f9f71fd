"""Authentication-related domain exceptions."""

from .base import DomainException


class AuthenticationFailure(DomainException):
    """Raised when a request signature is missing or does not verify."""

    status_code = 401

    def __init__(self):
        super().__init__(
            message="Request signature is invalid",
            code="invalid_signature",
        )
