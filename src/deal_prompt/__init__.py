"""
Deal Prompt Service

Renders lender research prompts from deal intake data and parses the
research output (CSV text blocks and spreadsheet pastes) back into
structured lender records.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .labels import LabelTable, default_label_table, load_label_table, lookup
from .models import (
    DealInput,
    EmailDetails,
    LenderRecord,
    ParsedBundle,
    PasteBundle,
    ValidationResult,
)
from .pipeline import (
    format_prompt,
    parse_csv_data,
    parse_paste_data,
    parse_paste_text,
    validate_deal,
)
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    RequestTimer,
)
from .errors import (
    DealPromptError,
    InvalidInputError,
    ValidationError,
    ParseError,
    InternalError,
    FormattingError,
    ConfigurationError,
)

__all__ = [
    # Version
    '__version__',
    # Labels
    'LabelTable',
    'default_label_table',
    'load_label_table',
    'lookup',
    # Models
    'DealInput',
    'EmailDetails',
    'LenderRecord',
    'ParsedBundle',
    'PasteBundle',
    'ValidationResult',
    # Pipeline
    'format_prompt',
    'parse_csv_data',
    'parse_paste_data',
    'parse_paste_text',
    'validate_deal',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'RequestTimer',
    # Errors
    'DealPromptError',
    'InvalidInputError',
    'ValidationError',
    'ParseError',
    'InternalError',
    'FormattingError',
    'ConfigurationError',
]
