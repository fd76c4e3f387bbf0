from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from src.application.dtos.verification_dto import (
    ProfilePayload,
    UserPayload,
    VerifyPhoneResponse,
)
from src.domain.entities.profile import ProfileEntity
from src.domain.errors import (
    InvariantViolation,
    OtpRejectedError,
    ProfileLookupError,
    ProviderUnavailableError,
    ValidationError,
)
from src.domain.services.phone_validator import is_e164
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

logger = logging.getLogger(__name__)

CODE_LENGTH = 6


@dataclass
class VerifyPhoneUseCase:
    auth: SupabaseAuthAdapter
    # Builds a repository bound to the new session's access token
    profiles_for: Callable[[str], ProfileRepository]

    def execute(self, phone_number: object, verification_code: object) -> VerifyPhoneResponse:
        """
        Redeem an OTP for a session and attach the caller's profile.

        Failing to read the profile is not fatal: the response still carries
        the session, with every profile field set to null.
        """
        if not is_e164(phone_number):
            raise ValidationError("Invalid phone number format")
        if not isinstance(verification_code, str) or len(verification_code) != CODE_LENGTH:
            raise ValidationError("Invalid verification code. Code must be 6 digits.")

        try:
            result = self.auth.verify_otp(phone_number, verification_code)
        except OtpRejectedError as exc:
            logger.error("Supabase Auth verification error: %s", exc)
            raise OtpRejectedError("Invalid verification code") from exc
        except ProviderUnavailableError as exc:
            logger.error("Unexpected error during verify_otp: %s", exc, exc_info=exc.__cause__)
            raise ProviderUnavailableError("Verification failed. Please try again.") from exc

        if not result.session:
            raise InvariantViolation("Verification failed. No session created.")
        if not result.user:
            raise InvariantViolation("Verification failed. No user data available.")

        profile = self._load_profile(result.access_token, result.user.id)

        return VerifyPhoneResponse(
            message="Phone verification successful",
            session=result.session,
            user=UserPayload(
                id=result.user.id,
                phone=result.user.phone,
                profile=ProfilePayload.from_entity(profile),
            ),
        )

    def _load_profile(self, access_token: str | None, user_id: str) -> ProfileEntity | None:
        if not access_token:
            logger.warning("Session for %s has no access token; skipping profile", user_id)
            return None
        try:
            return self.profiles_for(access_token).get_own(user_id)
        except ProfileLookupError as exc:
            logger.warning("Error fetching profile for %s: %s", user_id, exc)
            return None
        except ProviderUnavailableError as exc:
            logger.warning("Could not open a session client for %s: %s", user_id, exc)
            return None
