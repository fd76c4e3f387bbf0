from __future__ import annotations

from typing import Callable

from fastapi import Depends

from src.application.use_cases.start_verification import StartVerificationUseCase
from src.application.use_cases.verify_phone import VerifyPhoneUseCase
from src.infrastructure.database.repositories.profile_repository import ProfileRepository
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter


def get_auth_adapter() -> SupabaseAuthAdapter:
    # One adapter per request; the client is only built on first use
    return SupabaseAuthAdapter()


def get_profile_repo_factory(
    auth: SupabaseAuthAdapter = Depends(get_auth_adapter),
) -> Callable[[str], ProfileRepository]:
    def build(access_token: str) -> ProfileRepository:
        return ProfileRepository(auth.session_client(access_token))

    return build


def get_start_verification(
    auth: SupabaseAuthAdapter = Depends(get_auth_adapter),
) -> StartVerificationUseCase:
    return StartVerificationUseCase(auth)


def get_verify_phone(
    auth: SupabaseAuthAdapter = Depends(get_auth_adapter),
    profiles_for: Callable[[str], ProfileRepository] = Depends(get_profile_repo_factory),
) -> VerifyPhoneUseCase:
    return VerifyPhoneUseCase(auth, profiles_for)
