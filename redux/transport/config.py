"""Configuration model for the transport layer."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from redux.endpoints import DEFAULT_HOST
from redux.transport.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT


class ClientConfig(BaseModel):
    """Settings shared by every request a client sends."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: Annotated[str, Field(min_length=1, description="API base URL")] = DEFAULT_HOST
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = DEFAULT_USER_AGENT
    timeout_seconds: Annotated[float, Field(ge=1.0, le=600.0)] = DEFAULT_TIMEOUT_SECONDS

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Require an absolute http(s) URL and strip any trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"Host must be an http(s) URL, got '{v}'"
            raise ValueError(msg)
        return v.rstrip("/")
