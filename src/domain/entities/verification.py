from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PhoneValidation:
    is_valid: bool
    error: str | None = None
    is_test_number: bool = False


@dataclass(slots=True)
class VerifiedUser:
    id: str
    phone: str | None


@dataclass(slots=True)
class OtpVerification:
    """Outcome of redeeming an OTP with the identity provider.

    ``session`` is the provider's session payload (access/refresh tokens,
    expiry, token type) kept as a plain mapping so it can be returned to
    the caller untouched. Either field may be missing when the provider
    misbehaves; callers must check.
    """

    session: dict[str, Any] | None
    user: VerifiedUser | None

    @property
    def access_token(self) -> str | None:
        if not self.session:
            return None
        return self.session.get("access_token")
