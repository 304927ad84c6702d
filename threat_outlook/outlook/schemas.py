from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ReportType = Literal["html", "text"]


class ThreatOutlookIn(BaseModel):
    """Customer profile submitted by the report form.

    Required-field checks happen in the domain validator, not here, so that a missing
    `locations` or `topics` yields the same plain 400 message as an empty one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    locations: str | list[str] | None = Field(
        default=None,
        description="Asset locations, either one comma-joined string or a list.",
        examples=[["Chicago, IL", "London, UK"]],
    )
    topics: str | list[str] | None = Field(
        default=None,
        description="Topic codes (e.g. `cyber`, `civil-unrest`); a single code is accepted.",
        examples=[["cyber", "crime"]],
    )
    regions: str | list[str] | None = Field(
        default=None, description="Optional regional focus.", examples=["Middle East"]
    )
    industries: str | list[str] | None = Field(
        default=None, description="Optional industry/sector focus.", examples=["Energy"]
    )
    model: str | None = Field(
        default=None,
        description="One of `gpt-4o`, `gpt-4o-mini`, `claude-sonnet`, `claude-haiku`.",
    )
    today: str | None = Field(
        default=None,
        description="Pre-rendered report date; the server date is used when omitted.",
        examples=["Monday, February 10, 2026"],
    )
    report_type: ReportType = Field(
        default="html",
        alias="reportType",
        description="`html` for the full HTML document, `text` for the plain-text report.",
    )


class ThreatOutlookOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    report: str
    report_type: ReportType = Field(alias="reportType")
    generated_at: str = Field(alias="generatedAt", description="ISO-8601 UTC timestamp.")


class CredentialOut(BaseModel):
    available: bool
    message: str | None = None
    error: str | None = None


class CreditsOut(BaseModel):
    success: bool = True
    credits: dict[str, CredentialOut]
    note: str


class ErrorOut(BaseModel):
    error: str
    message: str | None = None
    details: Any | None = None
