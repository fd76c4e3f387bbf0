"""Error taxonomy for the verification endpoints.

Every error carries the HTTP status it maps to and a message that is safe to
show to the caller. Provider details travel in ``__cause__`` and in the logs,
never in ``message``.
"""
from __future__ import annotations


class VerificationError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(VerificationError):
    """Malformed phone number or verification code."""

    status_code = 400
    default_message = "Invalid phone number format"


class OtpRejectedError(VerificationError):
    """The provider refused the request (bad code, expired code, rate limit)."""

    status_code = 400
    default_message = "Invalid verification code"


class ProviderUnavailableError(VerificationError):
    """The provider call failed for a reason other than a rejection."""

    status_code = 500
    default_message = "Identity provider request failed"


class InvariantViolation(VerificationError):
    """The provider reported success but left out part of its answer."""

    status_code = 500
    default_message = "Verification failed. Please try again."


class ProfileLookupError(VerificationError):
    """Reading the caller's profile row failed after authentication."""

    status_code = 500
    default_message = "Profile lookup failed"


class MethodNotAllowed(VerificationError):
    status_code = 405
    default_message = "Method not allowed"


class MalformedRequest(VerificationError):
    status_code = 500
    default_message = "Internal server error"
