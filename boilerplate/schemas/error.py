"""Error body returned for domain failures."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx response raised from a domain error."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Invalid Password Reset Request", "code": "VALIDATION_ERROR"}
        }
    )

    detail: str = Field(..., description="Message safe to show to the user")
    code: str = Field(..., description="Stable machine-readable error code")
