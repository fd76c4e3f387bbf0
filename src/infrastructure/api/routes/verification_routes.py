from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from src.application.dtos.verification_dto import (
    ErrorResponse,
    StartVerificationRequest,
    StartVerificationResponse,
    VerifyPhoneRequest,
    VerifyPhoneResponse,
)
from src.application.use_cases.start_verification import StartVerificationUseCase
from src.application.use_cases.verify_phone import VerifyPhoneUseCase
from src.infrastructure.api.dependencies import get_start_verification, get_verify_phone
from src.infrastructure.api.middlewares import cors_headers

router = APIRouter(
    tags=["Phone Verification"],
    responses={
        405: {"model": ErrorResponse, "description": "Method not allowed"},
        500: {"model": ErrorResponse, "description": "Internal server error or identity provider error"},
    },
)


def _preflight() -> PlainTextResponse:
    return PlainTextResponse("ok", headers=cors_headers())


@router.options("/verification-start", include_in_schema=False)
def verification_start_preflight():
    return _preflight()


@router.post(
    "/verification-start",
    response_model=StartVerificationResponse,
    status_code=status.HTTP_200_OK,
    summary="Start Phone Verification",
    description="""
    Send an SMS verification code to the given phone number through Supabase Auth.

    The number must be in international format (leading `+`). Provider test
    numbers such as `+1234567890` are accepted even when they are not valid
    for a real carrier.
    """,
    response_description="Verification code sent",
    responses={400: {"model": ErrorResponse, "description": "Invalid phone number format"}},
)
def verification_start(
    body: StartVerificationRequest,
    response: Response,
    uc: StartVerificationUseCase = Depends(get_start_verification),
):
    """Send a one-time code to the phone number."""
    response.headers.update(cors_headers())
    phone_number = uc.execute(body.phone_number)
    return StartVerificationResponse(
        message="Verification code sent successfully", phone_number=phone_number
    )


@router.options("/verification-verify", include_in_schema=False)
def verification_verify_preflight():
    return _preflight()


@router.post(
    "/verification-verify",
    response_model=VerifyPhoneResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify Phone Number",
    description="""
    Redeem the 6-digit SMS code for a session and return the user's profile.

    The profile is read with the new session's token, so row-level security
    applies. If it cannot be read, the profile fields are returned as null.
    """,
    response_description="Session, user and profile of the verified phone",
    responses={400: {"model": ErrorResponse, "description": "Invalid phone number or verification code"}},
)
def verification_verify(
    body: VerifyPhoneRequest,
    response: Response,
    uc: VerifyPhoneUseCase = Depends(get_verify_phone),
):
    """Exchange the verification code for a session."""
    response.headers.update(cors_headers())
    return uc.execute(body.phone_number, body.verification_code)
