"""
Lender records and parsed bundles produced by the section parsers.

Wire names are camelCase (the upstream spreadsheet tooling expects them);
Python attributes are snake_case. Serialize with model_dump(by_alias=True).
"""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return self.model_dump(by_alias=True)


class LenderRecord(_CamelModel):
    """A lender suggestion: company, website, and why it fits the deal."""

    company_name: str = Field(..., alias='companyName')
    website: str = Field(default='')
    reason_for_fit: str = Field(default='', alias='reasonForFit')


class EmailDetails(_CamelModel):
    """Subject line and body summary for the outreach email."""

    subject: str
    summary: str


class ParsedBundle(_CamelModel):
    """Result of parsing a ---delimited text blob."""

    lender_lists: list[list[LenderRecord]] = Field(default_factory=list, alias='lenderLists')
    script: str | None = None
    email_details: EmailDetails | None = Field(default=None, alias='emailDetails')


class PasteBundle(_CamelModel):
    """Result of parsing a tokenized spreadsheet paste."""

    similar_deals_lenders: list[LenderRecord] = Field(
        default_factory=list, alias='similarDealsLenders'
    )
    capable_lenders: list[LenderRecord] = Field(default_factory=list, alias='capableLenders')
    local_lenders: list[LenderRecord] = Field(default_factory=list, alias='localLenders')
    voicemail_script: str | None = Field(default=None, alias='voicemailScript')
    email_details: EmailDetails | None = Field(default=None, alias='emailDetails')
