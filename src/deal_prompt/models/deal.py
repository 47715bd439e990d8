"""
Deal intake models.

DealInput is the shape posted to /generate-prompt. Codes and the loan amount
arrive either as numbers or as numeric strings depending on the form tool, so
those fields accept both and are normalised later by the label table and the
currency formatter.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS: tuple[str, ...] = (
    'location',
    'dealSummary',
    'assetType',
    'dealDescription',
    'loanAmount',
    'loanType',
    'loanTerm',
)


class DealInput(BaseModel):
    """Validated deal data used to render a prompt."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    location: str = Field(..., description='City / region of the property')
    deal_summary: str = Field(..., alias='dealSummary', description='One-line deal summary')
    deal_description: str = Field(
        ..., alias='dealDescription', description='Free-text description of the deal'
    )
    asset_type: int | str = Field(..., alias='assetType', description='Asset type code')
    loan_amount: int | float | str = Field(
        ..., alias='loanAmount', description='Requested loan amount in USD'
    )
    loan_type: int | str = Field(..., alias='loanType', description='Loan type code')
    loan_term: int | str = Field(..., alias='loanTerm', description='Loan term code')


@dataclass
class ValidationResult:
    """Outcome of checking a request body for the required deal fields."""

    valid: bool
    missing_fields: list[str] = field(default_factory=list)

    @property
    def error(self) -> str | None:
        if self.valid:
            return None
        return f"Missing required fields: {', '.join(self.missing_fields)}"
