"""Common Pydantic schemas used across multiple modules.

This module contains the camelCase base model shared by every API schema and
generic message/health responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase JSON field names.

    Requests are accepted in camelCase or snake_case; responses are
    serialized with the camelCase aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Generic message response for simple API operations.

    Attributes:
        message: Human-readable success or status message.
    """

    message: str = Field(
        ..., description="Human-readable success or status message", min_length=1
    )

    model_config = {
        "json_schema_extra": {"example": {"message": "You have been logged out"}}
    }


class HealthResponse(BaseModel):
    """Health check response.

    Attributes:
        status: Health status (e.g., 'healthy').
        version: API version.
    """

    status: str = Field(..., description="Health status of the API")
    version: str = Field(..., description="API version")

    model_config = {
        "json_schema_extra": {"example": {"status": "healthy", "version": "0.1.0"}}
    }


class ProviderListResponse(BaseModel):
    """Viable pod provider endpoints.

    Attributes:
        providers: Endpoints users may authenticate against.
    """

    providers: list[str] = Field(..., description="Configured pod provider endpoints")

    model_config = {
        "json_schema_extra": {
            "example": {"providers": ["https://mypod.store", "http://localhost:3000"]}
        }
    }
