"""Request and response records for the phone verification endpoints."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.domain.entities.profile import ProfileEntity


class StartVerificationRequest(BaseModel):
    """Body of ``POST /verification-start``."""
    phone_number: Optional[str] = Field(
        None, description="Phone number in international format", example="+1234567890"
    )


class StartVerificationResponse(BaseModel):
    """Verification code was handed to the SMS provider."""
    message: str = Field(..., example="Verification code sent successfully")
    phone_number: str = Field(..., example="+1234567890")


class VerifyPhoneRequest(BaseModel):
    """Body of ``POST /verification-verify``.

    Fields are left untyped so a number or other non-string value is
    rejected by the use case with a 400 rather than failing body parsing.
    """
    phone_number: Any = Field(
        None, description="Phone number in international format", example="+1234567890"
    )
    verification_code: Any = Field(
        None, description="6-digit verification code sent via SMS", example="123456"
    )


class ProfilePayload(BaseModel):
    """Profile fields of the authenticated user; null when unset or unreadable."""
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    correspondence_address: Optional[str] = None

    @classmethod
    def from_entity(cls, entity: ProfileEntity | None) -> ProfilePayload:
        if entity is None:
            return cls()
        return cls(
            email=entity.email,
            first_name=entity.first_name,
            last_name=entity.last_name,
            phone=entity.phone,
            correspondence_address=entity.correspondence_address,
        )


class UserPayload(BaseModel):
    id: str = Field(..., description="User's unique identifier")
    phone: Optional[str] = Field(None, description="User's phone number")
    profile: ProfilePayload


class VerifyPhoneResponse(BaseModel):
    """Phone verified; carries the provider session and the user's profile."""
    message: str = Field(..., example="Phone verification successful")
    session: dict[str, Any] = Field(
        ...,
        description="Provider session: access_token, refresh_token, expires_in, token_type",
    )
    user: UserPayload


class ErrorResponse(BaseModel):
    """Error body shared by every failure status."""
    error: str = Field(..., description="Error message", example="Invalid verification code")
