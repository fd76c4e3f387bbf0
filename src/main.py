from __future__ import annotations

from fastapi import FastAPI

from src.infrastructure.api.errors import add_exception_handlers
from src.infrastructure.api.middlewares import add_default_middlewares
from src.infrastructure.api.routes.verification_routes import router as verification_router
from src.infrastructure.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Phone Verification Backend",
        version="0.1.0",
        description="""
        ## Phone Verification API

        FastAPI backend for phone-number sign-in. Supabase Auth sends and checks
        the SMS one-time codes; the service validates input, shapes responses
        and returns the caller's profile row.

        ### Flow
        1. `POST /verification-start` with `{"phone_number": "+1234567890"}`
           sends a 6-digit code by SMS.
        2. `POST /verification-verify` with the phone number and the code
           returns a session and the user's profile.

        ### Error Responses
        Errors are returned as `{"error": "<message>"}`:
        - **400 Bad Request**: Invalid phone number or verification code
        - **405 Method Not Allowed**: Anything other than POST or OPTIONS
        - **500 Internal Server Error**: Provider failure or malformed request
        """,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )
    add_default_middlewares(app)
    add_exception_handlers(app)

    @app.get(
        "/health",
        summary="Health Check",
        description="Check if the API service is running and healthy",
        response_description="Health status of the API service",
    )
    def health():
        """Check API health status."""
        return {"status": "healthy"}

    app.include_router(verification_router)
    return app


app = create_app()
