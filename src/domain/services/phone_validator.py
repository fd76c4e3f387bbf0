from __future__ import annotations

import logging
import re

import phonenumbers

from src.domain.entities.verification import PhoneValidation

logger = logging.getLogger(__name__)

# Provider test numbers (+1234567xxx, +888...) do not always pass carrier validation.
_TEST_NUMBER_PATTERNS = (
    re.compile(r"\+1234567\d{3}"),
    re.compile(r"\+[89]{10,11}"),
)
_E164 = re.compile(r"\+[1-9]\d{1,14}")


def is_test_number(phone: str) -> bool:
    return any(p.fullmatch(phone) for p in _TEST_NUMBER_PATTERNS)


def is_e164(phone: object) -> bool:
    """Basic international format check: ``+`` followed by up to 15 digits.

    Anything that is not a string (a JSON number, null) fails the check.
    """
    return isinstance(phone, str) and _E164.fullmatch(phone) is not None


def validate_phone_number(phone: str | None) -> PhoneValidation:
    """Validate an international phone number.

    Real numbers go through libphonenumber metadata. Numbers shaped like the
    provider's test numbers are accepted even when that check fails, so the
    flow can be exercised without a carrier.
    """
    if not phone:
        return PhoneValidation(is_valid=False, error="Phone number is required")

    if not phone.startswith("+"):
        return PhoneValidation(
            is_valid=False, error="Phone number must include country code (start with +)"
        )

    # phonenumbers tolerates surrounding whitespace; the provider would get it verbatim
    if phone != phone.strip():
        return PhoneValidation(is_valid=False, error="Invalid phone number format")

    likely_test = is_test_number(phone)

    try:
        parsed = phonenumbers.parse(phone, None)
    except phonenumbers.NumberParseException as exc:
        logger.warning("Phone validation error for %s: %s", phone, exc)
        if likely_test:
            return PhoneValidation(is_valid=True, is_test_number=True)
        return PhoneValidation(is_valid=False, error="Invalid phone number format")

    if not phonenumbers.is_valid_number(parsed):
        if likely_test:
            return PhoneValidation(is_valid=True, is_test_number=True)
        return PhoneValidation(
            is_valid=False, error="Invalid phone number for the specified country"
        )

    return PhoneValidation(is_valid=True, is_test_number=likely_test)
