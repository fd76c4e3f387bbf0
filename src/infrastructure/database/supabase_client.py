from __future__ import annotations

import logging
import os
from typing import Any

from supabase import Client, create_client
from supabase_auth.errors import AuthApiError, AuthError

from src.domain.entities.verification import OtpVerification, VerifiedUser
from src.domain.errors import OtpRejectedError, ProviderUnavailableError

logger = logging.getLogger(__name__)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ProviderUnavailableError(f"{name} is not configured")
    return value


def create_anon_client() -> Client:
    return create_client(_require_env("SUPABASE_URL"), _require_env("SUPABASE_ANON_KEY"))


class SupabaseAuthAdapter:
    """Thin wrapper over Supabase Auth's phone OTP calls.

    Every ``AuthError`` from the SDK is raised as ``OtpRejectedError``. That
    includes ``AuthRetryableError`` (network failures and 502/503/504 from the
    auth server), so an outage during verify reaches the caller as a 400.
    Other exceptions, such as missing configuration or errors outside the
    auth SDK, become ``ProviderUnavailableError``. The original exception is
    kept as ``__cause__`` for logging.
    """

    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_anon_client()
        return self._client

    def send_otp(self, phone: str) -> None:
        try:
            self.client.auth.sign_in_with_otp({"phone": phone})
        except AuthError as exc:
            raise OtpRejectedError(str(exc)) from exc
        except ProviderUnavailableError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(str(exc)) from exc

    def verify_otp(self, phone: str, code: str) -> OtpVerification:
        try:
            res = self.client.auth.verify_otp({"phone": phone, "token": code, "type": "sms"})
        except AuthError as exc:
            raise OtpRejectedError(str(exc)) from exc
        except ProviderUnavailableError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(str(exc)) from exc

        session = res.session.model_dump(mode="json") if res.session else None
        user = VerifiedUser(id=res.user.id, phone=res.user.phone) if res.user else None
        return OtpVerification(session=session, user=user)

    def session_client(self, access_token: str) -> Client:
        """Fresh client whose table queries run as the authenticated user."""
        try:
            scoped = create_anon_client()
            scoped.postgrest.auth(access_token)
        except ProviderUnavailableError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(str(exc)) from exc
        return scoped


class SupabaseAdminAdapter:
    """Service-role helpers used only to clean up identities after live tests."""

    def __init__(self, client: Client | None = None) -> None:
        self._client = client

    @classmethod
    def from_env(cls) -> SupabaseAdminAdapter | None:
        key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        url = os.getenv("SUPABASE_URL")
        if not key or not url:
            logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; skipping user cleanup")
            return None
        return cls(create_client(url, key))

    def find_user_id_by_phone(self, phone: str) -> str | None:
        # Auth stores phone numbers without the leading '+'
        normalized = phone.replace("+", "")
        users: list[Any] = self._client.auth.admin.list_users(page=1, per_page=1000)
        for user in users:
            if getattr(user, "phone", None) == normalized:
                return user.id
        return None

    def delete_user_by_phone(self, phone: str) -> bool:
        try:
            user_id = self.find_user_id_by_phone(phone)
            if user_id is None:
                return False
            self._client.auth.admin.delete_user(user_id)
            return True
        except AuthApiError as exc:
            if exc.status in (401, 403):
                logger.warning("Skipping user cleanup due to admin API auth failure: %s", exc)
                return False
            if exc.status >= 500:
                logger.warning("Skipping user cleanup due to admin API server error: %s", exc)
                return False
            raise
