"""Authentication schemas."""

from pydantic import BaseModel, Field


class OAuthAccountCreate(BaseModel):
    """Linked third-party identity."""

    provider: str = Field(..., max_length=50, examples=["google"])
    provider_user_id: str = Field(..., max_length=255)
    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = Field(None, description="Epoch seconds")
