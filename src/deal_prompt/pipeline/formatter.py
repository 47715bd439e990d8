"""
Prompt rendering for validated deals.

The prompt is a fixed seven-line block consumed by the downstream lender
research prompt chain; labels and line order must not change.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from ..errors import FormattingError
from ..labels import LabelTable
from ..models.deal import DealInput

# Largest float JSON can carry is ~1.8e308
_MAX_AMOUNT_DIGITS = 400

PROMPT_TEMPLATE = (
    'Location: {location}\n'
    'Deal Summary: {deal_summary}\n'
    'Deal Description: {deal_description}\n'
    'Asset Type: {asset_type}\n'
    'Loan Amount: {loan_amount}\n'
    'Loan Type: {loan_type}\n'
    'Loan Term: {loan_term}'
)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise FormattingError('Loan amount is not numeric', details=repr(value))
    if isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip().replace(',', '').lstrip('$'))
        except InvalidOperation:
            raise FormattingError('Loan amount is not numeric', details=repr(value)) from None
    else:
        raise FormattingError('Loan amount is not numeric', details=repr(value))

    if not amount.is_finite():
        raise FormattingError('Loan amount is not numeric', details=repr(value))
    if amount.adjusted() > _MAX_AMOUNT_DIGITS:
        raise FormattingError('Loan amount is out of range', details=repr(value))
    return amount


def format_currency(value: Any) -> str:
    """
    Format an amount as whole US dollars: 1500000 -> "$1,500,000".

    Numeric strings ("1500000", "1,500,000", "$1500000") are accepted.
    Halves round away from zero.

    Raises:
        FormattingError: if the value is not numeric
    """
    amount = _to_decimal(value)
    # quantize needs room for every integer digit
    with localcontext() as ctx:
        ctx.prec = max(28, amount.adjusted() + 2)
        amount = amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    sign = '-' if amount < 0 else ''
    return f"{sign}${abs(int(amount)):,}"


def mapped_values(deal: DealInput, labels: LabelTable) -> dict[str, str]:
    """Resolve the deal's code fields to display labels."""
    return {
        'assetType': labels.lookup('assetType', deal.asset_type),
        'loanType': labels.lookup('loanType', deal.loan_type),
        'loanTerm': labels.lookup('loanTerm', deal.loan_term),
    }


def format_prompt(deal: DealInput, labels: LabelTable) -> str:
    """
    Render the prompt block for a validated deal.

    Raises:
        FormattingError: if the loan amount cannot be formatted
    """
    mapped = mapped_values(deal, labels)
    return PROMPT_TEMPLATE.format(
        location=deal.location,
        deal_summary=deal.deal_summary,
        deal_description=deal.deal_description,
        asset_type=mapped['assetType'],
        loan_amount=format_currency(deal.loan_amount),
        loan_type=mapped['loanType'],
        loan_term=mapped['loanTerm'],
    )
