class DomainError(Exception):
    """Base exception for lab-hours rule violations.

    `http_status` is what the web layer answers with; the message is sent
    back as the plain-text body.
    """

    http_status = 400


class ValidationError(DomainError):
    """Bad form/query input, an unknown record, or a refused sign-in."""


class AuthorizationError(DomainError):
    """The signed-in user lacks the permission a page needs."""

    http_status = 403


class AuthenticationError(DomainError):
    """The members service could not be used to resolve users."""

    http_status = 502
