from __future__ import annotations

from pydantic import BaseModel, Field


class StatusOut(BaseModel):
    """Root status response."""

    status: str = Field(
        description="Human-readable indicator that the API process is up and responding.",
        examples=["Daily Threat Outlook API is running"],
    )
