from __future__ import annotations

import logging
from dataclasses import dataclass

from src.domain.errors import ProviderUnavailableError, ValidationError, VerificationError
from src.domain.services.phone_validator import validate_phone_number
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

logger = logging.getLogger(__name__)

DEFAULT_PHONE_ERROR = (
    "Invalid phone number format. Please use international format (e.g., +1234567890)"
)
SEND_FAILED_MESSAGE = "Failed to send verification code. Please try again."


@dataclass
class StartVerificationUseCase:
    auth: SupabaseAuthAdapter

    def execute(self, phone_number: str | None) -> str:
        """Ask the provider to text an OTP to ``phone_number``.

        Returns the phone number the code was sent to.
        """
        validation = validate_phone_number(phone_number)
        if not validation.is_valid:
            raise ValidationError(validation.error or DEFAULT_PHONE_ERROR)

        try:
            self.auth.send_otp(phone_number)
        except VerificationError as exc:
            logger.error("Supabase Auth error while sending OTP: %s", exc, exc_info=exc.__cause__)
            raise ProviderUnavailableError(SEND_FAILED_MESSAGE) from exc

        logger.info("Verification code sent (test number: %s)", validation.is_test_number)
        return phone_number
