"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """
    Request model for registration.

    Fields are optional here so that missing or empty values reach the
    domain validator and produce the fixed "All fields are required" error
    instead of a per-field schema error. JSON numbers (a phone sent as
    5550100) are kept as their string form.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = Field(default=None, examples=["Ada Lovelace"])
    email: str | None = Field(default=None, examples=["ada@example.com"])
    phone: str | None = Field(default=None, examples=["555-0100"])
    program: str | None = Field(default=None, examples=["Data Science"])


class RegisterResponse(BaseModel):
    """Response model for a successful registration."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    message_id: str = Field(alias="messageId")


class ErrorResponse(BaseModel):
    """Error response model for validation and delivery failures."""

    success: bool = False
    message: str
    error: str | None = None


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    timestamp: str


class ApiInfoResponse(BaseModel):
    """Response model for the root route."""

    message: str
    version: str
    endpoints: dict[str, str]
