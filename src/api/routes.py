"""
API routes - Registration endpoint and outcome-to-response mapping.

Defines POST /api/register. The domain service returns one of three
outcomes (ValidationFailed, Accepted, Failed); to_response() is the
single place that turns an outcome into an HTTP response.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from src.domain.ports import Accepted, Failed, RegistrationOutcome, ValidationFailed
from src.domain.registration import ALL_FIELDS_REQUIRED, RegistrationService

logger = logging.getLogger(__name__)

REGISTRATION_SUCCESS = "Registration successful and email sent!"
SEND_FAILED = "Failed to send email"

router = APIRouter(tags=["registration"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields"},
        500: {"model": ErrorResponse, "description": "Email delivery failed"},
    },
    summary="Register a prospective student",
    description="Submit name, email, phone and program. "
    "A confirmation email is sent to the provided address.",
)
async def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """
    Register a prospective student and send the confirmation email.

    - **name**, **email**, **phone**, **program**: all required, non-empty

    The SMTP dispatch blocks, so it runs in the thread pool to keep
    other requests moving.
    """
    outcome = await run_in_threadpool(service.register, request_data.model_dump())
    return to_response(outcome)


def to_response(outcome: RegistrationOutcome) -> JSONResponse:
    """Map a registration outcome to its HTTP status and JSON body."""
    if isinstance(outcome, Accepted):
        body = RegisterResponse(message=REGISTRATION_SUCCESS, message_id=outcome.message_id)
        return JSONResponse(
            status_code=status.HTTP_200_OK, content=body.model_dump(by_alias=True)
        )

    if isinstance(outcome, Failed):
        body = ErrorResponse(message=SEND_FAILED, error=outcome.detail)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
        )

    if isinstance(outcome, ValidationFailed):
        body = ErrorResponse(message=outcome.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(exclude_none=True),
        )

    raise TypeError(f"Unknown registration outcome: {outcome!r}")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report malformed request bodies as the fixed validation failure.

    Non-object bodies and non-string field values never reach the
    domain, so the email sender is not invoked for them.
    """
    logger.info("Validation failed - malformed request body on %s", request.url.path)
    return to_response(ValidationFailed(message=ALL_FIELDS_REQUIRED))
