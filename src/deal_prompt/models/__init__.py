"""
Data models for the Deal Prompt service.
"""

from .deal import REQUIRED_FIELDS, DealInput, ValidationResult
from .lenders import EmailDetails, LenderRecord, ParsedBundle, PasteBundle

__all__ = [
    'REQUIRED_FIELDS',
    'DealInput',
    'ValidationResult',
    'EmailDetails',
    'LenderRecord',
    'ParsedBundle',
    'PasteBundle',
]
