"""
Request processing stages: validation, prompt rendering and section parsing.
"""

from .csv_parser import parse_csv_data
from .formatter import format_currency, format_prompt, mapped_values
from .paste_parser import parse_paste_data, parse_paste_text
from .sections import BlockKind, SectionState, classify_block, next_section
from .validator import require_valid_deal, validate_deal

__all__ = [
    'parse_csv_data',
    'parse_paste_data',
    'parse_paste_text',
    'format_currency',
    'format_prompt',
    'mapped_values',
    'BlockKind',
    'SectionState',
    'classify_block',
    'next_section',
    'require_valid_deal',
    'validate_deal',
]
